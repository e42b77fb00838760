"""Hexagon boundary geometry."""

"""Walkability grid, A* search and path post-processing."""

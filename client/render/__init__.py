"""Debug rendering."""

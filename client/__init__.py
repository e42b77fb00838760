"""Navigation client: HTTP access to the map server and debug rendering."""

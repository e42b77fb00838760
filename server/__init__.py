"""HTTP service for map navigation."""

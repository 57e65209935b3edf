"""Yahoo Fantasy API client and endpoint wrappers."""

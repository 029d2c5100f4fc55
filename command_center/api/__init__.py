"""REST routers for the Command Center API."""

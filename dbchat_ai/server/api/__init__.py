"""REST API routers of the DBChat AI server."""

"""FastAPI routers for the toy robot server."""

"""HTTP server for cityprefs: FastAPI application, routers, services and middleware."""

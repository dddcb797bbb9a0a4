"""HTTP transport for jia-file: FastAPI app, routers and middleware."""

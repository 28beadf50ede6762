"""HTTP API layer: FastAPI app, routes, schemas and dependencies."""

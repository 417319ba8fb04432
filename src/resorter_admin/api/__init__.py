"""HTTP API for the admin console (FastAPI app, routes, schemas, errors)."""

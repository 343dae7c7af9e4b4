"""HTTP server: FastAPI app and simulation state."""

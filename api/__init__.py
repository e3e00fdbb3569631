"""HTTP layer - FastAPI application."""

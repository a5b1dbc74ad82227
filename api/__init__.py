"""HTTP API over the ballistics core (FastAPI)."""

"""API tests (FastAPI TestClient with stubbed handlers)."""

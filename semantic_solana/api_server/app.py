"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn semantic_solana.api_server.app:app --host 0.0.0.0 --port 8000
"""

from semantic_solana.api_server.server import app

__all__ = ["app"]

"""FastAPI endpoints for the PDF loader.

Endpoints:
    - GET /health: Service health status
    - POST /documents/load: Load PDF sources into documents or text
"""

from plumber_loader.api.app import app, create_app

__all__ = ["app", "create_app"]

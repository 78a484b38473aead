"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from exporter.api import app

    uvicorn exporter.api:app
"""

from exporter.api.app import app, create_app

__all__ = ["app", "create_app"]

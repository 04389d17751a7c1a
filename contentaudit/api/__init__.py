"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from contentaudit.api import app

    uvicorn contentaudit.api:app --reload
"""

from contentaudit.api.app import app

__all__ = ["app"]

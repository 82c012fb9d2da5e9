"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from sectionforge.api import create_app

    uvicorn --factory sectionforge.api:create_app
"""

from sectionforge.api.app import create_app

__all__ = ["create_app"]

"""
Shared FastAPI dependencies.

Routes never build a backend gateway themselves; they ask for one here so
tests can swap in an in-memory fake through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .backend import BackendGateway, SqlBackendGateway
from .db import get_db


def get_backend_gateway(db: Session = Depends(get_db)) -> BackendGateway:
    """Gateway to the backend procedures, bound to the request's session."""
    return SqlBackendGateway(db)

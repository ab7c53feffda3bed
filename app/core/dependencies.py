# app/core/dependencies.py
"""Request-scoped dependencies.

There is no authentication: the service is single-user. Each request gets its
own database session, and services are built on it per request, so no state
is shared between requests.
"""
from app.database import get_db

__all__ = ["get_db"]

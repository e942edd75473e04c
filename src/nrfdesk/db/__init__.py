"""Database layer for nrf-desk, built on SQLAlchemy 2.0 async."""

from __future__ import annotations

from nrfdesk.db.base import Base
from nrfdesk.db.engine import DatabaseManager

__all__ = ["Base", "DatabaseManager"]

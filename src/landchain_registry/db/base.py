"""
landchain_registry.db.base

SQLAlchemy declarative base shared by all registry tables.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass

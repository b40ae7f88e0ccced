"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- DocumentMixin: Adds a generated string UUID primary key and timestamps

Identifiers are stored as 36-character strings so the same schema runs on
PostgreSQL and SQLite.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate a fresh document identifier."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Declarative base for all catalog models."""
    pass


class DocumentMixin:
    """Mixin providing a generated identifier and standard audit columns.

    Adds:
    - id: UUID4 string primary key (auto-generated)
    - created_at: Timestamp set on insert
    - updated_at: Timestamp updated on every change
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

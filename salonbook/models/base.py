"""Declarative base for SalonBook models."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    """Opaque record identifier."""
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Base class for all models."""


class IdMixin:
    """Mixin for an opaque string primary key."""

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)

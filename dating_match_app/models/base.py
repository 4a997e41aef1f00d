"""
Base model classes and common fields
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declared_attr

from dating_match_app.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamps"""

    @declared_attr
    def created_at(cls):
        return Column(DateTime, default=_utcnow, nullable=False)

    @declared_attr
    def updated_at(cls):
        return Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class BaseModel(Base, TimestampMixin):
    """Base model class with a UUID string primary key"""
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_id, index=True)

"""
SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import DeclarativeBase

EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_public(self) -> dict:
        """Wire form of the user, without the password hash."""
        created = self.created_at
        if created is not None and created.tzinfo is None:
            # SQLite drops the offset; values are always written as UTC
            created = created.replace(tzinfo=timezone.utc)
        return {
            "id": str(self.user_id),
            "email": self.email,
            "createdAt": created.isoformat() if created else None,
        }

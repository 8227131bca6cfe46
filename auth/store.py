"""
Credential store — persistence boundary for user records.

Emails are expected to arrive already normalized.  Uniqueness relies on
the ``UNIQUE`` constraint on ``users.email`` so that check-and-insert is
atomic even under concurrent registrations.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.errors import DuplicateEmail
from database.models import EMAIL_UNIQUE_CONSTRAINT, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


def _is_email_conflict(exc: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite names the column.
    message = str(exc.orig)
    return EMAIL_UNIQUE_CONSTRAINT in message or (
        "UNIQUE" in message and "users.email" in message
    )


class CredentialStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = _to_uuid(user_id)
        if uid is None:
            return None
        async with self._session_factory() as session:
            return await session.get(User, uid)

    async def create(self, email: str, password_hash: str) -> User:
        """Insert a new user; raises ``DuplicateEmail`` if the email is taken."""
        user = User(user_id=uuid.uuid4(), email=email, password_hash=password_hash)
        async with self._session_factory() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                if not _is_email_conflict(exc):
                    raise
                logger.info("Duplicate email rejected at insert: %s", email)
                raise DuplicateEmail(email) from exc
        return user

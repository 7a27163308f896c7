"""
UserHub Backend - User Service (Persistence Gateway)
=====================================================

What:  The five storage operations behind the /users endpoints.
How:   Thin calls into the SQLAlchemy session the service was constructed
       with; database outcomes are translated into application exceptions.
Who:   Built per request by `get_user_service`; called by route handlers.

Outcome mapping:
    record missing                 → NotFoundError   (404)
    schema / UNIQUE(email) failure → ValidationError (400)
    any other SQLAlchemy failure   → DatabaseError   (500)

Writes are flushed inside the request's transaction; the session dependency
commits on success and rolls back on any exception, so a failed create or
update never leaves a partial record behind.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import Depends
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.database import get_db_session
from userhub.exceptions import DatabaseError, NotFoundError, ValidationError
from userhub.models.user import User
from userhub.schemas.user import (
    UserCreate,
    UserResponse,
    UserUpdate,
    describe_validation_errors,
)

logger = logging.getLogger(__name__)


def _parse_id(user_id: str) -> Optional[uuid.UUID]:
    """A malformed id can never resolve to a record, so it maps to None."""
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        return None


class UserService:
    """
    CRUD operations over User records.

    Args:
        db: The request-scoped async session. The service never commits;
            transaction boundaries belong to whoever owns the session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_users(self) -> List[UserResponse]:
        """Return every stored user, oldest first."""
        try:
            result = await self.db.execute(select(User).order_by(User.created_at))
            users = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users.",
                context={"error_type": type(e).__name__},
            )
        return [UserResponse.model_validate(user) for user in users]

    async def get_user(self, user_id: str) -> UserResponse:
        """
        Retrieve a single user by id.

        Raises:
            NotFoundError: No user with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        user = await self._load(user_id)
        return UserResponse.model_validate(user)

    async def create_user(self, payload: UserCreate) -> UserResponse:
        """
        Insert a new user and return it with its generated id.

        Raises:
            ValidationError: Email already taken (→ 400)
            DatabaseError: Insert failed for another reason (→ 500)
        """
        user = User(**payload.model_dump())
        self.db.add(user)
        await self._flush(email=payload.email)
        logger.info("User created: %s", user.id)
        return UserResponse.model_validate(user)

    async def update_user(self, user_id: str, fields: Dict[str, Any]) -> UserResponse:
        """
        Apply a partial update and return the merged record.

        The record is looked up before `fields` is validated, so an unknown
        id reports 404 whatever the payload contains. Only keys present in
        `fields` are written; falsy values such as 0 or "" are applied.

        Raises:
            NotFoundError: No user with this id (→ 404)
            ValidationError: Supplied fields break a rule or duplicate an email (→ 400)
            DatabaseError: Update failed for another reason (→ 500)
        """
        user = await self._load(user_id)

        try:
            changes = UserUpdate.model_validate(fields).changes()
        except PydanticValidationError as e:
            message = describe_validation_errors(e.errors())
            logger.warning("Rejected update of user %s: %s", user_id, message)
            raise ValidationError(message=message, context={"user_id": user_id})

        for field, value in changes.items():
            setattr(user, field, value)

        await self._flush(email=changes.get("email"))
        logger.info("User updated: %s (%s)", user.id, ", ".join(sorted(changes)) or "no changes")
        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: str) -> None:
        """
        Remove a user.

        Raises:
            NotFoundError: No user with this id (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        user = await self._load(user_id)
        try:
            await self.db.delete(user)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the user.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )
        logger.info("User deleted: %s", user_id)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _load(self, user_id: str) -> User:
        parsed = _parse_id(user_id)
        if parsed is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))

        try:
            user = await self.db.get(User, parsed)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user.",
                context={"user_id": str(user_id), "error_type": type(e).__name__},
            )

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def _flush(self, email: Optional[str] = None) -> None:
        """Flush pending writes, turning constraint violations into ValidationError."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning("Integrity error writing user (email=%s): %s", email, e.orig)
            if email is not None and "email" in str(e.orig).lower():
                raise ValidationError(
                    message=f"A user with email '{email}' already exists",
                    field="email",
                )
            raise ValidationError(message="User record violates a storage constraint")
        except SQLAlchemyError as e:
            logger.error("Database error writing user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the user.",
                context={"error_type": type(e).__name__},
            )


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    """FastAPI dependency: a UserService bound to the request's session."""
    return UserService(db)

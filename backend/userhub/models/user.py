"""
UserHub Backend - User SQLAlchemy Model
========================================

What:  ORM model for the `users` table.
Who:   Used by UserService for CRUD operations and by Alembic for schema
       management.

Table Design:
    - UUID primary key, generated in Python on insert, never updated
    - name / age / email NOT NULL; address / profession nullable
    - UNIQUE constraint on email: the single source of truth for email
      uniqueness, including under concurrent creates
    - created_at: insertion time, only used to give listings a stable order
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from userhub.database import Base


class User(Base):
    """
    A person record.

    Lifecycle:
        1. Created by POST /users (id assigned here)
        2. Partially updated in place by PUT/PATCH /users/{id}
        3. Removed by DELETE /users/{id}; the id no longer resolves
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    age: Mapped[float] = mapped_column(Float, nullable=False)

    address: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    profession: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    email: Mapped[str] = mapped_column(String(320), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"

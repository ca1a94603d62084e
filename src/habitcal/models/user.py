"""User model; the id is an opaque string issued by the auth service."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Application user owning habit lists."""

    __tablename__: ClassVar[str] = "users"

    id: str = Field(primary_key=True, max_length=64)
    username: str = Field(nullable=False, max_length=64)
    # Uniqueness is checked by the credential layer, not by the table.
    email: str = Field(nullable=False, index=True, max_length=320)
    profile_picture_url: Optional[str] = Field(default=None, max_length=2048)

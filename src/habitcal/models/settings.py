"""Key-value rows backing the auth session and credential map."""

from __future__ import annotations

from typing import ClassVar

from sqlalchemy import Text
from sqlmodel import Field, SQLModel


class AppSetting(SQLModel, table=True):
    """Opaque key-value storage outside the habit tables."""

    __tablename__: ClassVar[str] = "app_settings"

    key: str = Field(primary_key=True, max_length=400)
    value: str = Field(nullable=False, sa_type=Text)

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

LOCAL_NOW = text("(datetime('now', 'localtime'))")


class Base(DeclarativeBase):
    pass


class SettingsRecord(Base):
    __tablename__ = "settings"

    settings_id: Mapped[int] = mapped_column(Integer, primary_key=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_on: Mapped[datetime | None] = mapped_column(DateTime, server_default=LOCAL_NOW)
    # Not refreshed on update; nothing updates rows.
    updated_on: Mapped[datetime | None] = mapped_column(DateTime, server_default=LOCAL_NOW)
    done: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("0"))


class Project(Base):
    __tablename__ = "project"

    project_id: Mapped[int] = mapped_column(Integer, primary_key=True, nullable=False)


# Creation order for a fresh store.
SCHEMA_TABLES = (SettingsRecord.__table__, Project.__table__)

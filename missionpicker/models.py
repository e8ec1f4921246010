from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from .db import Base


class KVEntry(Base):
    """One key of the browser-style key-value store."""
    __tablename__ = "kv_entries"
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Scope(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class RecordIdentity:
    owner_id: str
    scope: Scope
    period_start: date


@dataclass(frozen=True)
class MissionRecord:
    identity: RecordIdentity
    mission_text: str

    @property
    def scope(self) -> Scope:
        return self.identity.scope

    @property
    def period_start(self) -> date:
        return self.identity.period_start


@dataclass(frozen=True)
class HistoryEntry:
    display_label: str
    period_start: date
    mission_text: str
    scope: Scope
    completed: bool
    identity: RecordIdentity


@dataclass(frozen=True)
class Progress:
    completed_count: int
    total_count: int
    percent: int


@dataclass
class HistoryGroup:
    key: date
    label: str
    entries: list
    progress: Optional[Progress] = None

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ..errors import EmptyInput
from ..models import HistoryEntry, MissionRecord, RecordIdentity, Scope
from .catalogue import DAILY_POOL, WEEKLY_POOL
from .dates import as_date, week_start
from .history import build_history
from .store import MemoryKeyValueStore, encode_check_key, encode_record_key

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    owner_id: str
    today: date
    week_start: date
    daily: MissionRecord
    weekly: MissionRecord
    history: List[HistoryEntry] = field(default_factory=list)


def validate_owner_id(owner_id: Optional[str]) -> str:
    cleaned = (owner_id or "").strip()
    if not cleaned:
        raise EmptyInput("owner_id")
    return cleaned


def initialize_session(owner_id: str, record_store, today=None) -> SessionState:
    """
    Start a session for `owner_id`: make sure today's daily mission and this
    week's weekly mission exist, then read back the owner's whole history.
    """
    owner_id = validate_owner_id(owner_id)
    today = as_date(today) if today is not None else date.today()
    this_week = week_start(today)

    daily = record_store.get_or_create(owner_id, Scope.DAILY, today, DAILY_POOL)
    weekly = record_store.get_or_create(owner_id, Scope.WEEKLY, this_week, WEEKLY_POOL)
    history = build_history(owner_id, record_store)
    logger.info("Session started for %s on %s (%d history entries)", owner_id, today, len(history))

    return SessionState(
        owner_id=owner_id,
        today=today,
        week_start=this_week,
        daily=daily,
        weekly=weekly,
        history=history,
    )


def toggle(record_store, identity: RecordIdentity) -> bool:
    """Flip the completion flag for `identity` and return the new value."""
    value = not record_store.get_completed(identity)
    record_store.set_completed(identity, value)
    return value


def session_snapshot(session: SessionState) -> MemoryKeyValueStore:
    """Rebuild a key-value store holding the missions and ticks `session` last read."""
    kv = MemoryKeyValueStore()
    for record in (session.daily, session.weekly):
        kv.set(encode_record_key(record.identity), record.mission_text)
    for entry in session.history:
        kv.set(encode_record_key(entry.identity), entry.mission_text)
        kv.set(encode_check_key(entry.identity), "true" if entry.completed else "false")
    return kv

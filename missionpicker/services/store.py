from __future__ import annotations

import logging
import random
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import SessionLocal
from ..errors import MalformedRecord, StoreUnavailable
from ..models import KVEntry, MissionRecord, RecordIdentity, Scope
from .catalogue import pick_one
from .dates import as_date, day_key, week_start

logger = logging.getLogger(__name__)

RECORD_PREFIXES = {
    Scope.DAILY: "mission",
    Scope.WEEKLY: "weekly",
}
_PREFIX_TO_SCOPE = {prefix: scope for scope, prefix in RECORD_PREFIXES.items()}
CHECK_PREFIX = "checked"
_DAY_KEY_LEN = len("YYYY-MM-DD")


# --- Key-value backends ---

class MemoryKeyValueStore:
    """Dict-backed store. Lives for one browser session only."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> List[str]:
        return list(self._data.keys())


class SqlKeyValueStore:
    """Key-value store persisted in the kv_entries table; every set commits before returning."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            entry = db.query(KVEntry).filter(KVEntry.key == key).first()
            return entry.value if entry else None
        except SQLAlchemyError as e:
            logger.error("Store read failed for %s: %s", key, e)
            raise StoreUnavailable("get", str(e)) from e
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            entry = db.query(KVEntry).filter(KVEntry.key == key).first()
            if entry:
                entry.value = value
            else:
                db.add(KVEntry(key=key, value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Store write failed for %s: %s", key, e)
            raise StoreUnavailable("set", str(e)) from e
        finally:
            db.close()

    def keys(self) -> List[str]:
        db = self.session_factory()
        try:
            return [k for (k,) in db.query(KVEntry.key).all()]
        except SQLAlchemyError as e:
            logger.error("Store scan failed: %s", e)
            raise StoreUnavailable("keys", str(e)) from e
        finally:
            db.close()


# --- Key encoding ---

def canonical_period_start(scope: Scope, period_start) -> date:
    d = as_date(period_start)
    return week_start(d) if scope == Scope.WEEKLY else d


def encode_record_key(identity: RecordIdentity) -> str:
    """mission-{owner}-{YYYY-MM-DD} for daily, weekly-{owner}-{week start} for weekly."""
    return f"{RECORD_PREFIXES[identity.scope]}-{identity.owner_id}-{day_key(identity.period_start)}"


def decode_record_key(key: str) -> RecordIdentity:
    """
    Inverse of encode_record_key. The date is the fixed-width tail, so owner ids
    may contain '-'. Raises MalformedRecord for anything that is not a record key.
    """
    prefix, sep, rest = key.partition("-")
    scope = _PREFIX_TO_SCOPE.get(prefix)
    if not sep or scope is None:
        raise MalformedRecord(key, "unknown prefix")
    if len(rest) < _DAY_KEY_LEN + 2 or rest[-(_DAY_KEY_LEN + 1)] != "-":
        raise MalformedRecord(key, "missing owner or date")
    owner_id, date_part = rest[:-(_DAY_KEY_LEN + 1)], rest[-_DAY_KEY_LEN:]
    try:
        period_start = as_date(date_part)
    except ValueError as e:
        raise MalformedRecord(key, str(e)) from None
    if scope == Scope.WEEKLY and week_start(period_start) != period_start:
        raise MalformedRecord(key, "weekly record is not anchored to a Sunday")
    return RecordIdentity(owner_id=owner_id, scope=scope, period_start=period_start)


def encode_check_key(identity: RecordIdentity) -> str:
    return f"{CHECK_PREFIX}-{identity.owner_id}-{encode_record_key(identity)}"


# --- Record store ---

class RecordStore:
    """Mission assignments and completion flags on top of a key-value store."""

    def __init__(self, kv, rng: Optional[random.Random] = None):
        self.kv = kv
        self.rng = rng

    def get_or_create(self, owner_id: str, scope: Scope, period_start, pool: Sequence[str]) -> MissionRecord:
        identity = RecordIdentity(
            owner_id=owner_id,
            scope=scope,
            period_start=canonical_period_start(scope, period_start),
        )
        key = encode_record_key(identity)

        stored = self.kv.get(key)
        if stored:
            return MissionRecord(identity=identity, mission_text=stored)

        mission_text = pick_one(pool, self.rng)
        self.kv.set(key, mission_text)
        logger.info("Assigned %s mission %s: %s", scope.value, key, mission_text)
        return MissionRecord(identity=identity, mission_text=mission_text)

    def set_completed(self, identity: RecordIdentity, value: bool) -> None:
        self.kv.set(encode_check_key(identity), "true" if value else "false")

    def get_completed(self, identity: RecordIdentity) -> bool:
        return self.kv.get(encode_check_key(identity)) == "true"

    def list_all_for_owner(self, owner_id: str) -> List[Tuple[RecordIdentity, str, Scope]]:
        """Full scan of the store; corrupt keys are logged and skipped."""
        records = []
        for key in self.kv.keys():
            prefix = key.partition("-")[0]
            if prefix not in _PREFIX_TO_SCOPE:
                continue
            try:
                identity = decode_record_key(key)
            except MalformedRecord as e:
                logger.warning("Skipping corrupt key: %s", e.message)
                continue
            if identity.owner_id != owner_id:
                continue
            mission_text = self.kv.get(key)
            if not mission_text:
                logger.warning("Skipping empty record %s", key)
                continue
            records.append((identity, mission_text, identity.scope))
        return records


def snapshot(kv) -> MemoryKeyValueStore:
    """Copy every readable key of `kv` into memory; StoreUnavailable if the scan itself fails."""
    data = {}
    for key in kv.keys():
        value = kv.get(key)
        if value is not None:
            data[key] = value
    return MemoryKeyValueStore(data)

"""
History aggregation: rebuild typed entries from the record store, bucket them
by week (daily missions) or month (weekly missions), and compute progress.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..models import HistoryEntry, HistoryGroup, Progress, Scope
from .dates import day_key, month_label, month_start, week_label, week_start

_SCOPE_ORDER = {Scope.DAILY: 0, Scope.WEEKLY: 1}


def display_label(scope: Scope, period_start) -> str:
    key = day_key(period_start)
    return f"{key} (weekly)" if scope == Scope.WEEKLY else key


def build_history(owner_id: str, record_store) -> List[HistoryEntry]:
    """All of an owner's missions joined with their completion flags, newest first."""
    entries = []
    for identity, mission_text, scope in record_store.list_all_for_owner(owner_id):
        entries.append(HistoryEntry(
            display_label=display_label(scope, identity.period_start),
            period_start=identity.period_start,
            mission_text=mission_text,
            scope=scope,
            completed=record_store.get_completed(identity),
            identity=identity,
        ))
    # Descending by date; on the same date daily sorts before weekly
    entries.sort(key=lambda e: (-e.period_start.toordinal(), _SCOPE_ORDER[e.scope]))
    return entries


def bucket_key(entry: HistoryEntry):
    if entry.scope == Scope.WEEKLY:
        return month_start(entry.period_start)
    return week_start(entry.period_start)


def bucket_label(key, scope: Scope) -> str:
    return month_label(key) if scope == Scope.WEEKLY else week_label(key)


def group_by_bucket(entries: Iterable[HistoryEntry], scope: Scope) -> Dict:
    """Map bucket start date -> entries of `scope`, iterated newest bucket first."""
    groups: Dict = {}
    for entry in entries:
        if entry.scope != scope:
            continue
        groups.setdefault(bucket_key(entry), []).append(entry)
    return {key: groups[key] for key in sorted(groups, reverse=True)}


def progress(entries: Iterable[HistoryEntry]) -> Progress:
    entries = list(entries)
    total = len(entries)
    done = sum(1 for e in entries if e.completed)
    # int(x + 0.5) rounds halves up; round() would round 12.5 to 12
    percent = int(100 * done / total + 0.5) if total > 0 else 0
    return Progress(completed_count=done, total_count=total, percent=percent)


def split_by_scope(entries: Iterable[HistoryEntry]) -> Tuple[List[HistoryEntry], List[HistoryEntry]]:
    daily, weekly = [], []
    for e in entries:
        (weekly if e.scope == Scope.WEEKLY else daily).append(e)
    return daily, weekly


def build_groups(entries: Iterable[HistoryEntry], scope: Scope) -> List[HistoryGroup]:
    return [
        HistoryGroup(key=key, label=bucket_label(key, scope), entries=items, progress=progress(items))
        for key, items in group_by_bucket(entries, scope).items()
    ]

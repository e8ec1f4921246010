"""Streamlit session glue: one RecordStore per browser session, degraded to memory on storage failure."""
import logging

import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from ..db import init_db
from ..errors import StoreUnavailable
from ..services.session import initialize_session, session_snapshot, toggle
from ..services.store import MemoryKeyValueStore, RecordStore, SqlKeyValueStore, snapshot

logger = logging.getLogger(__name__)


def get_record_store() -> RecordStore:
    if "record_store" not in st.session_state:
        st.session_state.record_store = RecordStore(SqlKeyValueStore())
        st.session_state.degraded = False
    return st.session_state.record_store


def _fallback_kv():
    """Whatever is still readable, else what this session last showed, else nothing."""
    previous = st.session_state.get("record_store")
    if previous is not None:
        try:
            return snapshot(previous.kv)
        except StoreUnavailable:
            pass
    session = st.session_state.get("mission_session")
    if session is not None:
        return session_snapshot(session)
    return MemoryKeyValueStore()


def enter_degraded_mode(error: StoreUnavailable) -> RecordStore:
    logger.warning("Falling back to in-memory store: %s", error.to_dict())
    st.session_state.record_store = RecordStore(_fallback_kv())
    st.session_state.degraded = True
    return st.session_state.record_store


def show_degraded_warning():
    if st.session_state.get("degraded"):
        st.warning("⚠️ Storage is unavailable. Your missions are kept for this session only and will not be saved.")


def ensure_db():
    if "db_init" in st.session_state:
        return
    try:
        init_db()
        st.session_state.db_init = True
    except SQLAlchemyError as e:
        enter_degraded_mode(StoreUnavailable("init", str(e)))
        st.session_state.db_init = False


def start_session(owner_id: str):
    store = get_record_store()
    try:
        return initialize_session(owner_id, store)
    except StoreUnavailable as e:
        store = enter_degraded_mode(e)
        return initialize_session(owner_id, store)


def refresh_session():
    """Re-read today's missions and history for the logged-in owner."""
    st.session_state.mission_session = start_session(st.session_state.user["owner_id"])
    return st.session_state.mission_session


def toggle_and_refresh(identity, widget_key):
    try:
        toggle(get_record_store(), identity)
    except StoreUnavailable as e:
        store = enter_degraded_mode(e)
        # The tick was not saved; show the flag as stored
        st.session_state[widget_key] = store.get_completed(identity)
    refresh_session()

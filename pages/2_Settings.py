import streamlit as st
from missionpicker.config import get_diagnostics
from missionpicker.ui.theme import load_css

load_css()
st.title("Settings ⚙️")

if "user" not in st.session_state:
    st.warning("Please enter your name first.")
    st.stop()

st.subheader("Diagnostics")
diag = get_diagnostics()
diag["Storage"] = "In-memory (not saved)" if st.session_state.get("degraded") else "Persistent"
st.json(diag)

st.divider()

if st.button("Switch user"):
    del st.session_state.user
    st.session_state.pop("mission_session", None)
    st.rerun()

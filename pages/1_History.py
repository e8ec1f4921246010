import streamlit as st
from missionpicker.models import Scope
from missionpicker.services.history import build_groups
from missionpicker.ui.state import refresh_session, show_degraded_warning, toggle_and_refresh
from missionpicker.ui.theme import load_css, progress_bar, progress_caption

load_css()

if "user" not in st.session_state:
    st.warning("Please enter your name first.")
    st.stop()

st.title("Mission History 📚")

session = st.session_state.get("mission_session") or refresh_session()
show_degraded_warning()

sections = [
    ("✅ Daily missions by week", Scope.DAILY, "#60A5FA", "No daily missions recorded yet."),
    ("📘 Weekly missions by month", Scope.WEEKLY, "#34D399", "No weekly missions recorded yet."),
]

columns = st.columns(len(sections))
for col, (title, scope, color, empty_text) in zip(columns, sections):
    with col:
        st.subheader(title)
        st.caption("Most recent first")
        groups = build_groups(session.history, scope)
        if not groups:
            st.caption(empty_text)
        for group in groups:
            with st.container(border=True):
                head_a, head_b = st.columns([3, 2])
                head_a.markdown(f"**🗓 {group.label}**")
                head_b.caption(progress_caption(group.progress))

                for entry in group.entries:
                    key = f"chk-{entry.identity.owner_id}-{scope.value}-{entry.identity.period_start.isoformat()}"
                    if key not in st.session_state:
                        st.session_state[key] = entry.completed
                    st.checkbox(
                        f"`{entry.display_label}` {entry.mission_text}",
                        key=key,
                        on_change=toggle_and_refresh,
                        args=(entry.identity, key),
                    )
                progress_bar(group.progress, color=color, height=6)

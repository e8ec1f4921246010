import streamlit as st
from missionpicker.config import configure_logging
from missionpicker.errors import EmptyInput
from missionpicker.services.history import progress, split_by_scope
from missionpicker.ui.state import ensure_db, refresh_session, show_degraded_warning
from missionpicker.ui.theme import load_css, progress_bar, progress_caption

st.set_page_config(page_title="Random Mission Picker", page_icon="🎯", layout="wide")

if "logging_configured" not in st.session_state:
    configure_logging()
    st.session_state.logging_configured = True

ensure_db()
load_css()

if "user" not in st.session_state:
    st.markdown("<div style='text-align: center; margin-top: 50px;'>", unsafe_allow_html=True)
    st.title("Random Mission Picker 🎯")
    st.subheader("Today · this week · this month: keep your routine going")

    with st.form("login_form"):
        name = st.text_input("Your name", placeholder="e.g. hana, yujin...")
        submitted = st.form_submit_button("Enter")

        if submitted:
            st.session_state.user = {"owner_id": name}
            try:
                session = refresh_session()
            except EmptyInput as e:
                del st.session_state.user
                st.warning(e.message)
            else:
                st.session_state.user = {"owner_id": session.owner_id}
                st.rerun()
    st.markdown("</div>", unsafe_allow_html=True)

else:
    session = st.session_state.get("mission_session") or refresh_session()
    show_degraded_warning()

    st.markdown(f"### 👤 {session.owner_id}")
    st.caption(f"Today is {session.today.isoformat()}")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"""
        <div class="mp-card">
            <p class="mp-muted">Today's mission</p>
            <h4>{session.daily.mission_text}</h4>
        </div>
        """, unsafe_allow_html=True)
    with col2:
        st.markdown(f"""
        <div class="mp-card">
            <p class="mp-muted">This week's mission</p>
            <h4>{session.weekly.mission_text}</h4>
        </div>
        """, unsafe_allow_html=True)

    st.subheader("Overall progress")
    daily, weekly = split_by_scope(session.history)
    for title, entries, color in (
        ("Daily missions", daily, "#60A5FA"),
        ("Weekly missions", weekly, "#34D399"),
    ):
        p = progress(entries)
        st.write(f"{title}: {progress_caption(p)}")
        progress_bar(p, color=color)

    st.caption("✔ Ticks are saved automatically. Daily missions are grouped by week, weekly missions by month.")
    st.info("👈 Open **History** in the sidebar to tick off missions.")

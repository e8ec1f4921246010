import streamlit as st


def load_css():
    try:
        with open("assets/theme.css") as f:
            st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        pass


def progress_bar(progress, color="#60A5FA", height=8):
    st.markdown(f"""
    <div class="mp-bar" style="height: {height}px;">
        <div style="background-color: {color}; height: {height}px; border-radius: 4px; width: {progress.percent}%;"></div>
    </div>
    """, unsafe_allow_html=True)


def progress_caption(progress) -> str:
    return f"{progress.completed_count} / {progress.total_count} ({progress.percent}%)"

"""
LessonScribe Streamlit UI: main entry point.

Run with: ``streamlit run lessonscribe/ui/app.py``

Record a lesson walkthrough -> transcribe (Whisper) -> clean (Claude) -> download.
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from lessonscribe.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (lessonscribe/ui/),
# which removes the project root needed for absolute imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from lessonscribe.core.config import get_settings  # noqa: E402
from lessonscribe.core.logging import setup_logging  # noqa: E402
from lessonscribe.services.orchestrator import create_controller  # noqa: E402
from lessonscribe.ui.components.recorder import render_recorder  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="LessonScribe",
    page_icon="\U0001f399\ufe0f",
    layout="centered",
)

_settings = get_settings()

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
if "controller" not in st.session_state:
    setup_logging(_settings.log_level)
    st.session_state.controller = create_controller(_settings)

_DEFAULTS = {
    "show_api_key_input": False,
    "transcription_language": _settings.whisper_language,
    "alert": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

_credentials = st.session_state.controller.credentials

# ---------------------------------------------------------------------------
# Sidebar: session-only API key
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399\ufe0f LessonScribe")
    st.caption("Record -> Transcribe (Whisper) -> Clean (Claude)")
    st.divider()

    if not _credentials.is_set or st.session_state.show_api_key_input:
        st.subheader("OpenAI API key required")
        st.markdown(
            "Whisper needs an OpenAI API key. "
            "Get one at [platform.openai.com](https://platform.openai.com/api-keys)."
        )
        _key = st.text_input("API key", type="password", placeholder="sk-...")
        if st.button("Save", type="primary"):
            if _credentials.set(_key):
                st.session_state.show_api_key_input = False
                st.rerun()
            else:
                st.warning("Please enter a key.")
        st.caption("The key is kept in memory for this session only and is sent only to OpenAI.")
    else:
        st.success("API key saved")
        if st.button("Change"):
            st.session_state.show_api_key_input = True
            st.rerun()


# ---------------------------------------------------------------------------
# Blocking error notification
# ---------------------------------------------------------------------------
@st.dialog("Something went wrong")
def _show_alert(message: str) -> None:
    st.error(message)
    if st.button("OK", type="primary"):
        st.session_state.alert = None
        st.rerun()


if st.session_state.alert:
    _show_alert(st.session_state.alert)

# ---------------------------------------------------------------------------
# Main page
# ---------------------------------------------------------------------------
st.header("Lesson walkthrough - Whisper + Claude")
render_recorder()

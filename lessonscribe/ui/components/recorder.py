"""
Recorder component: renders the session state machine.

States: idle -> recording -> stopped -> transcribing -> cleaning -> done
Each button performs one controller action and reruns the script so the
next state is rendered from scratch.
"""

import asyncio

import streamlit as st

from lessonscribe.core.exceptions import (
    CredentialMissingError,
    LessonScribeError,
    TranscriptionFailedError,
)
from lessonscribe.core.models import SessionStatus
from lessonscribe.core.utils import format_time
from lessonscribe.services.orchestrator import SessionController
from lessonscribe.ui.components.result_view import render_result


_LANGUAGE_OPTIONS = [
    ("Svenska (sv)", "sv"),
    ("English (en)", "en"),
    ("Norsk (no)", "no"),
    ("Dansk (da)", "da"),
    ("Suomi (fi)", "fi"),
    ("Deutsch (de)", "de"),
]

_PROGRESS_MESSAGES = {
    SessionStatus.transcribing: "Step 1/2: Transcribing with Whisper... (usually 10-30 seconds)",
    SessionStatus.cleaning: "Step 2/2: Cleaning with Claude... (removing irrelevant remarks)",
}


def _controller() -> SessionController:
    return st.session_state.controller


def _alert(exc: LessonScribeError) -> None:
    """Queue a blocking error message for the next rerun."""
    st.session_state.alert = exc.detail


def render_recorder() -> None:
    """Render the recording UI based on the controller's current status."""
    status = _controller().status

    if status == SessionStatus.idle:
        _render_idle()
    elif status == SessionStatus.recording:
        _render_recording()
    elif status == SessionStatus.stopped:
        _render_stopped()
    elif status == SessionStatus.done:
        render_result(_controller())
    else:
        # A pipeline stage left behind by an interrupted script run
        st.info(_PROGRESS_MESSAGES[status])


def _render_idle() -> None:
    """Show language selector, start button and instructions."""
    controller = _controller()
    has_key = controller.credentials.is_set

    lang_labels = [label for label, _ in _LANGUAGE_OPTIONS]
    lang_values = [value for _, value in _LANGUAGE_OPTIONS]
    current = st.session_state.transcription_language
    current_idx = lang_values.index(current) if current in lang_values else 0
    selected_idx = st.selectbox(
        "Transcription language",
        range(len(lang_labels)),
        index=current_idx,
        format_func=lambda i: lang_labels[i],
    )
    st.session_state.transcription_language = lang_values[selected_idx]

    if st.button("Start recording", type="primary", disabled=not has_key):
        try:
            controller.start_recording()
        except CredentialMissingError as exc:
            st.session_state.show_api_key_input = True
            _alert(exc)
        except LessonScribeError as exc:
            _alert(exc)
        st.rerun()

    if has_key:
        st.markdown(
            "**How to use:**\n"
            "1. Click *Start recording*\n"
            "2. Hold your walkthrough as usual\n"
            "3. Click *Stop recording*\n"
            "4. Click *Transcribe & clean*: the audio is transcribed first, "
            "then the text is cleaned\n"
            "5. Download or copy the result"
        )
    else:
        st.warning("Enter your OpenAI API key in the sidebar to start recording.")


@st.fragment(run_every=1)
def _render_timer() -> None:
    """Live ``M:SS`` counter, refreshed every second."""
    st.markdown(f"## :red[●] {format_time(_controller().elapsed_seconds)}")


def _render_recording() -> None:
    """Show the live timer and the stop button."""
    _render_timer()

    if st.button("Stop recording", type="primary"):
        try:
            _controller().stop_recording()
        except LessonScribeError as exc:
            _alert(exc)
        st.rerun()


def _render_stopped() -> None:
    """Offer to run the pipeline or start over."""
    controller = _controller()
    st.success(f"Recording finished! ({format_time(controller.elapsed_seconds)})")

    col_run, col_reset = st.columns(2)
    with col_run:
        if st.button("Transcribe & clean", type="primary", use_container_width=True):
            _run_pipeline(controller)
            st.rerun()
    with col_reset:
        if st.button("New recording", use_container_width=True):
            controller.reset()
            st.rerun()


def _run_pipeline(controller: SessionController) -> None:
    """Run both pipeline stages, showing which one is in progress."""
    progress = st.empty()

    def _on_state_change(_old: SessionStatus, new: SessionStatus) -> None:
        message = _PROGRESS_MESSAGES.get(new)
        if message:
            progress.info(message)

    controller.on_state_change = _on_state_change
    try:
        with st.spinner("Processing recording..."):
            asyncio.run(controller.run_pipeline(language=st.session_state.transcription_language))
    except TranscriptionFailedError as exc:
        st.session_state.alert = f"{exc.detail}\n\nCheck that your API key is correct."
    except LessonScribeError as exc:
        _alert(exc)
    finally:
        controller.on_state_change = None
        progress.empty()

"""
Result components: original transcript, cleaned content and download.
"""

import streamlit as st

from lessonscribe.core.exceptions import ExportError
from lessonscribe.services.orchestrator import SessionController


def render_result(controller: SessionController) -> None:
    """Show both texts of a finished session plus download / reset actions."""
    state = controller.state

    if state.transcript:
        st.subheader("Original transcript (from Whisper)")
        with st.container(height=200):
            st.write(state.transcript.text)

    st.subheader("Cleaned result")
    if state.cleaned and state.cleaned.degraded:
        st.warning("Cleanup did not succeed. The original transcript is still included in the download.")

    col_download, col_save, col_reset = st.columns(3)
    with col_download:
        st.download_button(
            label="Download",
            data=controller.build_document().encode("utf-8"),
            file_name=controller.export_filename,
            mime="text/plain",
            use_container_width=True,
        )
    with col_save:
        if st.button("Save to exports folder", use_container_width=True):
            try:
                path = controller.download()
                st.success(f"Saved to {path}")
            except ExportError as exc:
                st.error(exc.detail)
    with col_reset:
        if st.button("New recording", use_container_width=True):
            controller.reset()
            st.rerun()

    if state.cleaned:
        with st.container(border=True):
            st.markdown(state.cleaned.text)

"""End-to-end session tests.

Record → Whisper → Claude → download, with the HTTP and SDK edges faked.
"""

from types import SimpleNamespace

import httpx
import pytest
from anthropic import APIConnectionError, InternalServerError

from lessonscribe.core.config import Settings
from lessonscribe.core.exceptions import TranscriptionFailedError
from lessonscribe.core.models import SessionStatus
from lessonscribe.services.cleanup import FALLBACK_TEXT
from lessonscribe.services.orchestrator import SessionController, create_controller


def _record(session, clock, seconds=12):
    session.start_recording()
    clock.advance(seconds)
    session.stop_recording()


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


async def test_record_transcribe_clean_download(session, clock, whisper_server, claude_client):
    _record(session, clock)
    assert session.elapsed_seconds == 12

    result = await session.run_pipeline()

    assert session.status == SessionStatus.done
    assert result.text == "# Bråk\nVi räknar bråk."
    assert len(whisper_server.requests) == 1
    assert whisper_server.requests[0].headers["Authorization"] == "Bearer sk-test-key"

    prompt = claude_client.messages.create.call_args.kwargs["messages"][0]["content"]
    assert prompt.endswith("TRANSCRIPT:\nHej klassen, idag ska vi räkna bråk.")

    path = session.download()
    content = path.read_text(encoding="utf-8")
    assert content.startswith("=== ORIGINAL TRANSCRIPT ===\n\nHej klassen, idag ska vi räkna bråk.")
    assert content.endswith("=== CLEANED CONTENT ===\n\n# Bråk\nVi räknar bråk.")
    assert path.name.startswith("genomgang-")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


async def test_whisper_rejects_key(session, clock, whisper_server, claude_client):
    _record(session, clock)
    whisper_server.response = httpx.Response(401, json={"error": {"message": "Incorrect API key"}})

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await session.run_pipeline()

    assert exc_info.value.status_code == 401
    assert session.status == SessionStatus.stopped
    assert session.state.audio is not None
    claude_client.messages.create.assert_not_awaited()


async def test_claude_unreachable_still_finishes(session, clock, claude_client):
    _record(session, clock)
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    claude_client.messages.create.side_effect = APIConnectionError(request=request)

    result = await session.run_pipeline()

    assert session.status == SessionStatus.done
    assert result.degraded is True
    assert result.text.startswith("An error occurred during cleanup: ")
    assert "Hej klassen" in session.build_document()


async def test_claude_response_without_content(session, clock, claude_client):
    _record(session, clock)
    claude_client.messages.create.return_value = SimpleNamespace()

    result = await session.run_pipeline()

    assert session.status == SessionStatus.done
    assert result.text == FALLBACK_TEXT
    assert session.build_document().endswith(FALLBACK_TEXT)


async def test_claude_error_status_gives_fallback(session, clock, claude_client):
    _record(session, clock)
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    body = {"type": "error", "error": {"type": "api_error", "message": "Internal server error"}}
    claude_client.messages.create.side_effect = InternalServerError(
        "Error code: 500", response=httpx.Response(500, request=request, json=body), body=body
    )

    result = await session.run_pipeline()

    assert session.status == SessionStatus.done
    assert result.degraded is True
    assert result.text == FALLBACK_TEXT


async def test_new_recording_after_done(session, clock, whisper_server):
    _record(session, clock)
    await session.run_pipeline()

    session.reset()
    _record(session, clock, seconds=3)

    assert session.status == SessionStatus.stopped
    assert session.state.transcript is None
    assert session.elapsed_seconds == 3


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def test_create_controller_wiring(fake_capture, tmp_path):
    settings = Settings(claude_api_key="sk-ant-test", exports_dir=str(tmp_path))

    controller = create_controller(settings=settings, capture=fake_capture)

    assert isinstance(controller, SessionController)
    assert controller.status == SessionStatus.idle
    assert controller.credentials.is_set is False
    assert controller.export_filename.startswith("genomgang-")

"""Integration test fixtures for LessonScribe.

Wires a real controller (recorder, Whisper client, Claude cleaner) with the
network replaced at the edges: ``httpx.MockTransport`` for Whisper and a
patched ``AsyncAnthropic`` for Claude.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from lessonscribe.services.audio.recorder import Recorder
from lessonscribe.services.cleanup import LessonCleaner
from lessonscribe.services.llm.claude import ClaudeLLM
from lessonscribe.services.orchestrator import SessionController
from lessonscribe.services.transcription.openai_whisper import OpenAIWhisperSTT


class WhisperServer:
    """Fake transcription endpoint with a configurable response."""

    def __init__(self) -> None:
        self.response = httpx.Response(200, json={"text": "Hej klassen, idag ska vi räkna bråk."})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def whisper_server():
    return WhisperServer()


@pytest.fixture
def claude_client():
    """``AsyncAnthropic`` stand-in returning a structured note."""
    client = AsyncMock()
    client.messages.create = AsyncMock(
        return_value=SimpleNamespace(content=[SimpleNamespace(text="# Bråk\nVi räknar bråk.")])
    )
    with patch("lessonscribe.services.llm.claude.AsyncAnthropic", return_value=client):
        yield client


@pytest.fixture
def pipeline_settings(tmp_path):
    return SimpleNamespace(
        openai_base_url="https://api.test/v1",
        whisper_model="whisper-1",
        whisper_language="sv",
        transcription_timeout=5.0,
        exports_dir=str(tmp_path / "exports"),
        export_filename_prefix="genomgang",
    )


@pytest.fixture
def session(credentials, fake_capture, clock, whisper_server, claude_client, pipeline_settings):
    """Controller wired with real services over fake network edges."""
    stt = OpenAIWhisperSTT(
        transport=httpx.MockTransport(whisper_server),
        settings=pipeline_settings,
    )
    llm = ClaudeLLM(api_key="sk-ant-test", model="claude-sonnet-4-20250514", max_tokens=3000)
    cleaner = LessonCleaner(llm, max_tokens=3000, language="Swedish", strict=False)
    return SessionController(
        recorder=Recorder(credentials, capture=fake_capture, clock=clock),
        stt=stt,
        cleaner=cleaner,
        credentials=credentials,
        settings=pipeline_settings,
    )

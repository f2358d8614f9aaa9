from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
import requests

from chrono_sync.assistant.gemini_client import GeminiClient
from chrono_sync.assistant.tips import (
    ANALYSIS_FAILED,
    ANALYSIS_NO_DATA,
    TIP_FAILED,
    TIP_NO_CLIENT,
    TipService,
)
from chrono_sync.attendance.model import AttendanceRecord
from chrono_sync.common.datetime_utils import time_of_day
from chrono_sync.core.enums import AttendanceStatus, TimeOfDay

TZ = timezone(timedelta(hours=7))


class FakeGenerator:
    def __init__(self, reply: str = "Keep going.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


def make_records(n: int):
    return [
        AttendanceRecord(
            id=f"r{i}",
            user_id="u1",
            work_date=date(2026, 3, 1) + timedelta(days=i),
            check_in=datetime(2026, 3, 1, 9, 0, tzinfo=TZ) + timedelta(days=i),
            check_out=datetime(2026, 3, 1, 17, 0, tzinfo=TZ) + timedelta(days=i),
            status=AttendanceStatus.PRESENT,
            is_late=False,
            work_duration_minutes=480,
        )
        for i in range(n)
    ]


def test_tip_without_generator_uses_fallback():
    assert TipService(None).productivity_tip("Engineer", TimeOfDay.MORNING) == TIP_NO_CLIENT


def test_tip_prompt_mentions_role_and_time_of_day():
    gen = FakeGenerator("Ship small.")

    assert TipService(gen).productivity_tip("Designer", TimeOfDay.EVENING) == "Ship small."
    assert "Designer" in gen.prompts[0]
    assert "evening" in gen.prompts[0]


@pytest.mark.parametrize("error", [requests.ConnectionError("down"), requests.Timeout(), ValueError("empty"), RuntimeError("boom")])
def test_tip_failure_uses_fallback(error):
    assert TipService(FakeGenerator(error=error)).productivity_tip("Engineer", "morning") == TIP_FAILED


def test_analysis_without_records_or_generator():
    assert TipService(FakeGenerator()).analyze_attendance([]) == ANALYSIS_NO_DATA
    assert TipService(None).analyze_attendance(make_records(3)) == ANALYSIS_NO_DATA


def test_analysis_uses_last_ten_records():
    gen = FakeGenerator("Solid month.")

    assert TipService(gen).analyze_attendance(make_records(12)) == "Solid month."
    prompt = gen.prompts[0]
    assert "2026-03-03" in prompt
    assert "2026-03-12" in prompt
    assert "2026-03-02" not in prompt


def test_analysis_failure_uses_fallback():
    gen = FakeGenerator(error=requests.HTTPError("500"))

    assert TipService(gen).analyze_attendance(make_records(2)) == ANALYSIS_FAILED


@pytest.mark.parametrize(
    "hour,bucket",
    [(0, TimeOfDay.MORNING), (11, TimeOfDay.MORNING), (12, TimeOfDay.AFTERNOON), (16, TimeOfDay.AFTERNOON), (17, TimeOfDay.EVENING)],
)
def test_time_of_day_buckets(hour, bucket):
    assert time_of_day(datetime(2026, 3, 2, hour, 30)) == bucket


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


def test_gemini_client_parses_candidates():
    session = FakeSession(FakeResponse({"candidates": [{"content": {"parts": [{"text": " Hello "}, {"text": "there."}]}}]}))
    client = GeminiClient("key", "gemini-2.5-flash", session=session)

    assert client.generate("hi") == "Hello there."
    url, kwargs = session.calls[0]
    assert url.endswith("/models/gemini-2.5-flash:generateContent")
    assert kwargs["headers"]["x-goog-api-key"] == "key"
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "hi"


def test_gemini_client_raises_on_bad_payload_and_http_error():
    with pytest.raises(ValueError):
        GeminiClient("key", session=FakeSession(FakeResponse({"candidates": []}))).generate("hi")
    with pytest.raises(requests.HTTPError):
        GeminiClient("key", session=FakeSession(FakeResponse({}, status_code=503))).generate("hi")


def test_gemini_client_requires_key():
    with pytest.raises(ValueError):
        GeminiClient("")


@pytest.mark.parametrize(
    "payload",
    [
        {"candidates": [{"content": {"parts": None}}]},
        {"candidates": [{"content": {"parts": ["plain string"]}}]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        ["not", "an", "object"],
    ],
)
def test_malformed_completion_falls_back(payload):
    client = GeminiClient("key", session=FakeSession(FakeResponse(payload)))

    with pytest.raises(ValueError):
        client.generate("hi")
    assert TipService(client).productivity_tip("Engineer", TimeOfDay.MORNING) == TIP_FAILED
    assert TipService(client).analyze_attendance(make_records(3)) == ANALYSIS_FAILED

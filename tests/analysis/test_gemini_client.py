from __future__ import annotations

import json

import pytest
import requests

from attendance_tracker.analysis import client as client_module
from attendance_tracker.analysis.client import GeminiTrendAnalyzer, build_prompt
from attendance_tracker.core.exceptions import AnalysisError


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def _model_reply(data: dict) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": json.dumps(data)}]}}]}


def test_analyze_posts_prompt_and_parses_reply(monkeypatch):
    captured = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        captured.update(url=url, body=json, headers=headers, timeout=timeout)
        return FakeResponse(_model_reply({"analysisResult": "Sam was absent.", "flaggedAbsences": "T02T002"}))

    monkeypatch.setattr(client_module.requests, "post", fake_post)
    analyzer = GeminiTrendAnalyzer(api_key="k", model="m", base_url="https://example.test/v1/", timeout=3)

    result = analyzer.analyze("T01T001:Present,T02T002:Absent")

    assert result.analysis_result == "Sam was absent."
    assert result.flagged_absences == "T02T002"
    assert captured["url"] == "https://example.test/v1/models/m:generateContent"
    assert captured["headers"] == {"x-goog-api-key": "k"}
    assert captured["timeout"] == 3
    prompt = captured["body"]["contents"][0]["parts"][0]["text"]
    assert "Attendance Data: T01T001:Present,T02T002:Absent" in prompt


def test_empty_flagged_absences_becomes_none(monkeypatch):
    monkeypatch.setattr(
        client_module.requests,
        "post",
        lambda *a, **kw: FakeResponse(_model_reply({"analysisResult": "Fine", "flaggedAbsences": ""})),
    )

    result = GeminiTrendAnalyzer(api_key="k").analyze("T01T001:Present")

    assert result.flagged_absences is None


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({}, status_code=500),
        FakeResponse({"candidates": []}),
        FakeResponse({"candidates": [{"content": {"parts": [{"text": "not json"}]}}]}),
        FakeResponse(_model_reply({"analysisResult": ""})),
    ],
)
def test_bad_responses_raise_generic_failure(monkeypatch, response):
    monkeypatch.setattr(client_module.requests, "post", lambda *a, **kw: response)

    with pytest.raises(AnalysisError, match="Failed to analyze attendance data."):
        GeminiTrendAnalyzer(api_key="k").analyze("T01T001:Present")


def test_network_error_raises_generic_failure(monkeypatch):
    def boom(*a, **kw):
        raise requests.exceptions.ConnectionError("down")

    monkeypatch.setattr(client_module.requests, "post", boom)

    with pytest.raises(AnalysisError):
        GeminiTrendAnalyzer(api_key="k").analyze("T01T001:Present")


def test_missing_api_key_fails_without_request(monkeypatch):
    def unexpected(*a, **kw):
        raise AssertionError("should not be called")

    monkeypatch.setattr(client_module.requests, "post", unexpected)

    with pytest.raises(AnalysisError):
        GeminiTrendAnalyzer.from_config({"api_key": ""}).analyze("T01T001:Present")


def test_build_prompt_contains_instructions():
    prompt = build_prompt("T01T001:Absent")

    assert "flag unusual absence patterns" in prompt
    assert "Be concise and professional" in prompt

"""Client for the hosted model that writes the attendance trend analysis."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Protocol

import requests

from ..core.constants import DEFAULT_ANALYSIS_BASE_URL, DEFAULT_ANALYSIS_MODEL, DEFAULT_ANALYSIS_TIMEOUT
from ..core.exceptions import AnalysisError
from .model import TrendAnalysis

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to analyze attendance data."

PROMPT_TEMPLATE = """You are an AI assistant specialized in analyzing teacher attendance data to identify trends and flag unusual absence patterns.

Analyze the following attendance data and provide a detailed analysis. Highlight any unusual absence patterns or anomalies detected.

Attendance Data: {attendance_data}

If there are any specific instances of unusual or unscheduled absences that require further investigation, list them along with the reasons for flagging them. Otherwise, indicate that there are no flagged absences.
Be concise and professional in your analysis.

Respond with a JSON object with the keys "analysisResult" (string) and "flaggedAbsences" (string, optional).
"""


class TrendAnalyzer(Protocol):
    def analyze(self, attendance_data: str) -> TrendAnalysis:
        """``attendance_data`` is a comma-separated list of ``id:status`` pairs."""

        raise NotImplementedError


def build_prompt(attendance_data: str) -> str:
    return PROMPT_TEMPLATE.format(attendance_data=attendance_data)


def parse_analysis(payload: dict) -> TrendAnalysis:
    """Extract the model's JSON answer from a generateContent response body."""

    text = payload["candidates"][0]["content"]["parts"][0]["text"]
    data = json.loads(text)
    result = data["analysisResult"]
    if not isinstance(result, str) or not result.strip():
        raise ValueError("analysisResult is empty")
    flagged = data.get("flaggedAbsences") or None
    return TrendAnalysis(analysis_result=result.strip(), flagged_absences=flagged)


@dataclass
class GeminiTrendAnalyzer:
    api_key: str
    model: str = DEFAULT_ANALYSIS_MODEL
    base_url: str = DEFAULT_ANALYSIS_BASE_URL
    timeout: float = DEFAULT_ANALYSIS_TIMEOUT

    @classmethod
    def from_config(cls, config: dict) -> "GeminiTrendAnalyzer":
        return cls(
            api_key=str(config.get("api_key") or ""),
            model=str(config.get("model") or DEFAULT_ANALYSIS_MODEL),
            base_url=str(config.get("base_url") or DEFAULT_ANALYSIS_BASE_URL),
            timeout=float(config.get("timeout") or DEFAULT_ANALYSIS_TIMEOUT),
        )

    def analyze(self, attendance_data: str) -> TrendAnalysis:
        if not self.api_key:
            raise AnalysisError(FAILURE_MESSAGE)

        url = f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"
        body = {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(attendance_data)}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        try:
            r = requests.post(
                url,
                json=body,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            r.raise_for_status()
            return parse_analysis(r.json())
        except requests.exceptions.RequestException as e:
            logger.exception("Trend analysis request failed")
            raise AnalysisError(FAILURE_MESSAGE) from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.exception("Trend analysis response could not be parsed")
            raise AnalysisError(FAILURE_MESSAGE) from e

import os
import sys
from typing import Any, Dict, List, Optional, Sequence

import pytest

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from lifesync.config import Settings
from lifesync.llm.gemini_client import (
    GenerationResult,
    GroundingChunk,
    ResponseFormat,
    ToolDirective,
    WebSource,
)
from lifesync.models import DailyLog, Mood, UserProfile


class FakeInferenceClient:
    """Scripted backend: pops one queued reply per call and records the request."""

    def __init__(self, replies: Optional[List[Any]] = None):
        self.replies = list(replies or [])
        self.calls: List[Dict[str, Any]] = []

    def _next(self) -> GenerationResult:
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, GenerationResult):
            return reply
        return GenerationResult(text=reply)

    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        response_format: ResponseFormat = ResponseFormat.FREEFORM,
        tools: Optional[Sequence[ToolDirective]] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        self.calls.append({
            "kind": "text",
            "prompt": prompt,
            "system_instruction": system_instruction,
            "response_format": response_format,
            "tools": list(tools) if tools else None,
            "model": model,
        })
        return self._next()

    async def generate_image(
        self,
        prompt: str,
        *,
        aspect_ratio: Optional[str] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        self.calls.append({"kind": "image", "prompt": prompt, "aspect_ratio": aspect_ratio, "model": model})
        return self._next()


def web_chunk(uri: Optional[str], title: Optional[str]) -> GroundingChunk:
    return GroundingChunk(web=WebSource(uri=uri, title=title))


def make_log(idx: int, mood: Mood = Mood.GOOD, heart_rate: int = 70) -> DailyLog:
    return DailyLog(
        id=str(idx),
        date=f"2024-05-{idx:02d}",
        mood=mood,
        heart_rate=heart_rate,
        calories_in=2000 + idx,
        exercise_minutes=10 * idx,
        notes=f"day {idx}",
    )


@pytest.fixture
def fake_client():
    return FakeInferenceClient()


@pytest.fixture
def test_settings():
    return Settings(GOOGLE_API_KEY="test-key", HISTORY_WINDOW=5)


@pytest.fixture
def profile():
    return UserProfile(name="Alex", age=30, goals=["Reduce stress", "Improve cardio", "Track macros"])


@pytest.fixture
def logs():
    return [make_log(i) for i in range(1, 8)]

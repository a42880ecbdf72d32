from __future__ import annotations
from typing import List

from llm.schemas import ChatMessage
from .base import LLMProvider


class MockProvider(LLMProvider):
    """Offline provider for demos; answers from keywords in the last user message."""

    name = "mock"

    def generate(self, *, system: str, messages: List[ChatMessage]) -> str:
        last = next((m.content for m in reversed(messages) if m.role == "user"), "")
        lower = last.lower()

        if "remind" in lower or "calendar" in lower:
            return "<p>Sure. I've added this to your calendar.</p>"

        if "staff" in lower or "shift" in lower:
            return "<p>Staffing looks stable today. Check the forecast for the coming days.</p>"

        if "compliance" in lower or "report" in lower:
            return "<p>The quarterly staff performance report is the next compliance deadline.</p>"

        return "<p>I'm your nurse manager copilot. How can I help?</p>"

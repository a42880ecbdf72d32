from __future__ import annotations
from typing import List, Literal
from pydantic import BaseModel, Field

ChatRole = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class CopilotContext(BaseModel):
    """Background facts the copilot may cite; rendered into the system prompt."""
    summary: str = ""
    history: List[ChatMessage] = Field(default_factory=list)

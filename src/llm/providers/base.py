from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from llm.schemas import ChatMessage


class LLMProvider(ABC):
    name: str = "base"

    @abstractmethod
    def generate(self, *, system: str, messages: List[ChatMessage]) -> str:
        """
        Return the assistant reply as plain text for the given system prompt
        and user/assistant message history.
        """
        raise NotImplementedError

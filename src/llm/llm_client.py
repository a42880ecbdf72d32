import logging
import os
from typing import List, Optional

from api.metrics import LLM_CALLS_TOTAL
from llm.providers.base import LLMProvider
from llm.schemas import ChatMessage, CopilotContext

logger = logging.getLogger(__name__)

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").strip().lower()
LLM_HISTORY_LIMIT = int(os.getenv("LLM_HISTORY_LIMIT", "10"))
ASSISTANT_NAME = os.getenv("ASSISTANT_NAME", "Nuvanta").strip() or "Nuvanta"

NOT_CONFIGURED_RESPONSE = """
<p>The AI service isn't configured, so here is what your dashboard shows:</p>
<pre>{summary}</pre>
<p>Configure an LLM provider to get recommendations.</p>
"""

UNAVAILABLE_RESPONSE = """
<p>I'm having trouble reaching the AI service right now. Here is what your dashboard shows:</p>
<pre>{summary}</pre>
<p>Would you like more specific information about any of these areas?</p>
"""

EMPTY_RESPONSE = "I'm sorry, I couldn't generate a response at this time."


def build_provider(name: str = LLM_PROVIDER) -> Optional[LLMProvider]:
    """Instantiate the configured provider, or None if it cannot be set up."""
    try:
        if name == "mock":
            from llm.providers.mock_provider import MockProvider

            return MockProvider()
        if name == "ollama":
            from llm.providers.ollama_provider import OllamaProvider

            return OllamaProvider()
        from llm.providers.openai_provider import OpenAIProvider

        return OpenAIProvider()
    except RuntimeError as e:
        logger.warning(f"LLM provider '{name}' unavailable: {e}")
        return None


def build_system_prompt(summary: str) -> str:
    return (
        f"You are {ASSISTANT_NAME}, an assistant for nurse managers. "
        "Answer with direct, actionable advice formatted as simple HTML.\n\n"
        f"Current hospital information:\n{summary}\n\n"
        "When the user asks for a reminder or calendar entry, state the date clearly "
        "and include the exact sentence \"I've added this to your calendar\"."
    )


class LLMClient:
    """Copilot chat client on top of a pluggable provider."""

    def __init__(self, provider: Optional[LLMProvider] = None, history_limit: int = LLM_HISTORY_LIMIT):
        self.provider = provider if provider is not None else build_provider()
        self.history_limit = history_limit

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", "none") if self.provider else "none"

    def _messages(self, prompt: str, history: List[ChatMessage]) -> List[ChatMessage]:
        recent = history[-self.history_limit:] if self.history_limit > 0 else []
        # providers only accept user/assistant turns after the system prompt
        turns = [
            ChatMessage(role="user" if m.role == "user" else "assistant", content=m.content)
            for m in recent
        ]
        turns.append(ChatMessage(role="user", content=prompt))
        return turns

    def generate_response(self, prompt: str, context: Optional[CopilotContext] = None) -> str:
        """
        Never raises: a missing provider or a failed call yields a fallback
        built from the context summary.
        """
        context = context or CopilotContext()

        if self.provider is None:
            logger.info("No LLM provider configured, using fallback response")
            LLM_CALLS_TOTAL.labels(provider="none", status="unconfigured").inc()
            return NOT_CONFIGURED_RESPONSE.format(summary=context.summary)

        try:
            text = self.provider.generate(
                system=build_system_prompt(context.summary),
                messages=self._messages(prompt, context.history),
            )
        except Exception as e:
            logger.error(f"Error generating AI response: {e}")
            LLM_CALLS_TOTAL.labels(provider=self.provider_name, status="error").inc()
            return UNAVAILABLE_RESPONSE.format(summary=context.summary)

        LLM_CALLS_TOTAL.labels(provider=self.provider_name, status="ok").inc()
        return text.strip() or EMPTY_RESPONSE

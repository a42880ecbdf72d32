from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Tuple

from nurse_manager.models import Conversation, ConversationMessage, MessageRole
from storage import db

logger = logging.getLogger(__name__)


class ConversationStore(ABC):
    """Copilot conversation history plus the legacy prompt/response log."""

    @abstractmethod
    async def create_conversation(self, user_id: int, title: str) -> Conversation:
        raise NotImplementedError

    @abstractmethod
    async def list_conversations(self, user_id: int, limit: int = 20) -> List[Conversation]:
        raise NotImplementedError

    @abstractmethod
    async def get_messages(self, conversation_id: int) -> List[ConversationMessage]:
        raise NotImplementedError

    @abstractmethod
    async def add_message(
        self, conversation_id: int, role: MessageRole, content: str
    ) -> ConversationMessage:
        raise NotImplementedError

    @abstractmethod
    async def log_prompt(self, user_id: int, prompt: str, response: str) -> None:
        raise NotImplementedError


class InMemoryConversationStore(ConversationStore):
    def __init__(self):
        self._conversations: Dict[int, Conversation] = {}
        self._messages: List[ConversationMessage] = []
        self.prompt_log: List[Tuple[int, str, str]] = []

    async def create_conversation(self, user_id: int, title: str) -> Conversation:
        conv = Conversation(id=len(self._conversations) + 1, user_id=user_id, title=title)
        self._conversations[conv.id] = conv
        return conv

    async def list_conversations(self, user_id: int, limit: int = 20) -> List[Conversation]:
        owned = [c for c in self._conversations.values() if c.user_id == user_id]
        owned.sort(key=lambda c: c.updated_at, reverse=True)
        return owned[:limit]

    async def get_messages(self, conversation_id: int) -> List[ConversationMessage]:
        return [m for m in self._messages if m.conversation_id == conversation_id]

    async def add_message(
        self, conversation_id: int, role: MessageRole, content: str
    ) -> ConversationMessage:
        message = ConversationMessage(
            id=len(self._messages) + 1,
            conversation_id=conversation_id,
            role=role,
            content=content,
        )
        self._messages.append(message)
        conv = self._conversations.get(conversation_id)
        if conv is not None:
            self._conversations[conversation_id] = conv.model_copy(
                update={"updated_at": datetime.now()}
            )
        return message

    async def log_prompt(self, user_id: int, prompt: str, response: str) -> None:
        self.prompt_log.append((user_id, prompt, response))


class PostgresConversationStore(ConversationStore):
    async def create_conversation(self, user_id: int, title: str) -> Conversation:
        record = await db.fetchrow(
            "INSERT INTO copilot_conversations (user_id, title) VALUES ($1, $2) RETURNING *",
            user_id,
            title,
        )
        return Conversation(**dict(record))

    async def list_conversations(self, user_id: int, limit: int = 20) -> List[Conversation]:
        records = await db.fetch(
            """
            SELECT * FROM copilot_conversations
            WHERE user_id = $1
            ORDER BY updated_at DESC
            LIMIT $2
            """,
            user_id,
            limit,
        )
        return [Conversation(**dict(r)) for r in records]

    async def get_messages(self, conversation_id: int) -> List[ConversationMessage]:
        records = await db.fetch(
            "SELECT * FROM copilot_messages WHERE conversation_id = $1 ORDER BY created_at, id",
            conversation_id,
        )
        return [ConversationMessage(**dict(r)) for r in records]

    async def add_message(
        self, conversation_id: int, role: MessageRole, content: str
    ) -> ConversationMessage:
        async with db.transaction() as conn:
            record = await conn.fetchrow(
                """
                INSERT INTO copilot_messages (conversation_id, role, content)
                VALUES ($1, $2, $3)
                RETURNING *
                """,
                conversation_id,
                role,
                content,
            )
            await conn.execute(
                "UPDATE copilot_conversations SET updated_at = NOW() WHERE id = $1",
                conversation_id,
            )
        return ConversationMessage(**dict(record))

    async def log_prompt(self, user_id: int, prompt: str, response: str) -> None:
        await db.execute(
            "INSERT INTO copilot_prompts (user_id, prompt, response) VALUES ($1, $2, $3)",
            user_id,
            prompt,
            response,
        )


def conversation_title(prompt: str, max_len: int = 50) -> str:
    title = prompt[:max_len]
    return title + "..." if len(prompt) > max_len else title

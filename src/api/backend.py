import asyncio
import logging
import os
from typing import List, Optional

from api.metrics import CALENDAR_EVENTS_CREATED_TOTAL, TASK_COMPLETIONS_TOTAL
from completion.task_completion import TaskCompletionOrchestrator
from integration.calendar_integration import CalendarIntegration
from llm.llm_client import LLMClient
from llm.schemas import ChatMessage, CopilotContext
from staffing.mock_data import COPILOT_RESPONSES
from staffing.provider import StaffingDataProvider
from storage.conversation_store import ConversationStore, conversation_title
from storage.task_repository import TaskRepository

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))

# (keywords, canned response key); first hit wins
CANNED_RULES = [
    (("follow up",), "what should i follow up on today"),
    (("burnout", "risk"), "who is at risk of burnout"),
    (("priorities", "top"), "what are my top 3 priorities"),
]


def action_taken_html(message: str) -> str:
    return (
        f"<p><strong>Action Taken:</strong> {message}</p>\n"
        "<p>The task has been marked as complete and logged in the system.</p>"
    )


def canned_response(prompt: str) -> Optional[str]:
    normalized = prompt.lower().strip()
    for keywords, key in CANNED_RULES:
        if any(k in normalized for k in keywords):
            return COPILOT_RESPONSES[key]
    return None


class CopilotBackend:
    """Central orchestration of one copilot exchange."""

    def __init__(
        self,
        tasks: TaskRepository,
        conversations: ConversationStore,
        calendar: CalendarIntegration,
        staffing: StaffingDataProvider,
        llm: LLMClient,
        user_id: int = DEFAULT_USER_ID,
    ):
        self.tasks = tasks
        self.conversations = conversations
        self.calendar = calendar
        self.staffing = staffing
        self.llm = llm
        self.user_id = user_id
        self.orchestrator = TaskCompletionOrchestrator(tasks, user_id=user_id)

    async def handle_prompt(self, prompt: str, conversation_id: Optional[int] = None) -> dict:
        """Answers a prompt and records the exchange in the conversation."""

        # 1. Load history or open a new conversation
        history: List[ChatMessage] = []
        if conversation_id is not None:
            messages = await self.conversations.get_messages(conversation_id)
            history = [ChatMessage(role=m.role, content=m.content) for m in messages]
        else:
            conversation = await self.conversations.create_conversation(
                self.user_id, conversation_title(prompt)
            )
            conversation_id = conversation.id

        # 2. Task completion takes precedence over everything else
        result = await self.orchestrator.resolve_and_complete(prompt)
        TASK_COMPLETIONS_TOTAL.labels(outcome=result.outcome).inc()

        if result.success:
            logger.info(f"Task completion successful: {result.message}")
            response = action_taken_html(result.message)
        else:
            response = canned_response(prompt) or await self._ask_llm(prompt, history)

        # 3. Persist the exchange
        await self.conversations.add_message(conversation_id, "user", prompt)
        await self.conversations.add_message(conversation_id, "assistant", response)
        await self.conversations.log_prompt(self.user_id, prompt, response)

        # 4. Calendar side effect, never fails the request
        event = await self.calendar.process_calendar_requests(prompt, response)
        if event is not None:
            CALENDAR_EVENTS_CREATED_TOTAL.inc()
            logger.info(f"Calendar event #{event.id} created: {event.title}")

        return {"response": response, "conversationId": conversation_id}

    async def _ask_llm(self, prompt: str, history: List[ChatMessage]) -> str:
        try:
            all_tasks = await self.tasks.list_all()
            open_tasks = [t for t in all_tasks if t.status != "completed"]
            overdue = [t for t in all_tasks if t.status == "overdue"]
            context = CopilotContext(
                summary=self.staffing.context_summary(len(open_tasks), len(overdue)),
                history=history,
            )
            return await asyncio.to_thread(self.llm.generate_response, prompt, context)
        except Exception as e:
            logger.error(f"Error generating AI response: {e}")
            return COPILOT_RESPONSES["default"]

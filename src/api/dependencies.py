from functools import lru_cache

from api import state
from api.backend import CopilotBackend
from completion.task_completion import TaskCompletionOrchestrator
from integration.calendar_integration import CalendarIntegration
from integration.email_service import EmailService
from llm.llm_client import LLMClient
from staffing.provider import StaffingDataProvider
from storage.calendar_repository import CalendarRepository
from storage.conversation_store import ConversationStore
from storage.task_repository import TaskRepository


def get_task_repository() -> TaskRepository:
    return state.task_repository


def get_calendar_repository() -> CalendarRepository:
    return state.calendar_repository


def get_conversation_store() -> ConversationStore:
    return state.conversation_store


def get_staffing() -> StaffingDataProvider:
    return state.staffing


def get_email_service() -> EmailService:
    return state.email_service


@lru_cache(maxsize=1)
def get_llm_client() -> LLMClient:
    return LLMClient()


def get_orchestrator() -> TaskCompletionOrchestrator:
    return TaskCompletionOrchestrator(state.task_repository)


def get_copilot_backend() -> CopilotBackend:
    return CopilotBackend(
        tasks=state.task_repository,
        conversations=state.conversation_store,
        calendar=CalendarIntegration(state.calendar_repository),
        staffing=state.staffing,
        llm=get_llm_client(),
    )

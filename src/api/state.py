import os

from integration.email_service import EmailService
from staffing.provider import StaffingDataProvider
from storage.calendar_repository import CalendarRepository, InMemoryCalendarRepository
from storage.conversation_store import ConversationStore, InMemoryConversationStore
from storage.task_repository import InMemoryTaskRepository, TaskRepository

USE_DATABASE = os.getenv("USE_DATABASE", "false").lower() in {"1", "true", "yes"}

# In-memory defaults; replaced by Postgres-backed instances at startup when USE_DATABASE is set
task_repository: TaskRepository = InMemoryTaskRepository.seeded()
calendar_repository: CalendarRepository = InMemoryCalendarRepository()
conversation_store: ConversationStore = InMemoryConversationStore()

staffing = StaffingDataProvider.from_mock_data()
email_service = EmailService()

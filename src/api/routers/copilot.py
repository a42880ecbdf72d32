import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from api.backend import CopilotBackend
from api.dependencies import get_conversation_store, get_copilot_backend
from api.metrics import REQUEST_LATENCY_SECONDS, REQUESTS_TOTAL
from completion.task_completion import DEFAULT_USER_ID
from storage.conversation_store import ConversationStore

router = APIRouter()
logger = logging.getLogger(__name__)


class CopilotIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = ""
    conversation_id: Optional[int] = Field(None, alias="conversationId")


@router.post("")
async def ask_copilot(
    payload: CopilotIn,
    backend: CopilotBackend = Depends(get_copilot_backend),
) -> dict:
    start = time.time()
    if not payload.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    logger.info(f"Copilot prompt received: {payload.prompt[:50]}...")
    try:
        result = await backend.handle_prompt(payload.prompt, payload.conversation_id)
    except Exception as e:
        logger.error(f"Error in copilot endpoint: {e}")
        REQUESTS_TOTAL.labels(endpoint="/api/copilot", status="error").inc()
        raise HTTPException(status_code=500, detail="Failed to process request")

    REQUESTS_TOTAL.labels(endpoint="/api/copilot", status="ok").inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint="/api/copilot").observe(time.time() - start)
    return result


@router.get("/conversations")
async def list_conversations(
    limit: int = 20,
    store: ConversationStore = Depends(get_conversation_store),
) -> dict:
    conversations = await store.list_conversations(DEFAULT_USER_ID, limit=limit)
    return {"conversations": [c.model_dump(mode="json") for c in conversations]}


@router.get("/conversations/{conversation_id}")
async def get_conversation(
    conversation_id: int,
    store: ConversationStore = Depends(get_conversation_store),
) -> dict:
    messages = await store.get_messages(conversation_id)
    return {"messages": [m.model_dump(mode="json") for m in messages]}

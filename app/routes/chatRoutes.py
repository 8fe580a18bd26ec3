import logging
import time

from fastapi import APIRouter, Depends

from app.core.deps import get_orchestrator
from app.schema.schema import ChatTurnRequest, ChatTurnResponse
from app.service.orchTherapist import ConversationOrchestrator

router = APIRouter(tags=["chat"])
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatTurnResponse)
async def chat(
    params: ChatTurnRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    t0 = time.perf_counter()
    result = await orchestrator.handle_turn(params)
    logger.info(
        "chat turn first=%s language=%s text_len=%d took_ms=%d",
        params.is_first_message, params.language, len(result.text), int((time.perf_counter() - t0) * 1000),
    )
    return result

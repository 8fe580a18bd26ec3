import logging
from typing import List, Optional, Sequence

from app.core.config import settings
from app.core.errors import SynthesisError
from app.schema.schema import AssessmentAnswer, ChatTurnRequest, ChatTurnResponse, ConversationTurn
from app.service.chatServices import ChatCompletionClient
from app.service.prompts import DEFAULT_FEELING, build_system_prompt, first_message_template
from app.service.ttsServices import SpeechSynthesisClient

logger = logging.getLogger(__name__)

# "How are you feeling today?" is the second assessment question
FEELING_ANSWER_INDEX = 1
CONTINUE_PROMPT = "Please continue our conversation."
EMPTY_REPLY = "…"


def feeling_from(answers: Sequence[AssessmentAnswer]) -> str:
    if len(answers) > FEELING_ANSWER_INDEX:
        answer = answers[FEELING_ANSWER_INDEX].answer.strip()
        if answer:
            return answer
    return DEFAULT_FEELING


def history_window(history: Optional[Sequence[ConversationTurn]], size: int) -> List[ConversationTurn]:
    if not history or size <= 0:
        return []
    return list(history[-size:])


class ConversationOrchestrator:
    """Turn controller for /api/chat.

    A first message is a templated greeting that never reaches the chat model;
    every later turn goes system prompt -> chat completion -> speech.
    """

    def __init__(
        self,
        chat: ChatCompletionClient,
        tts: SpeechSynthesisClient,
        window: Optional[int] = None,
    ):
        self.chat = chat
        self.tts = tts
        self.window = settings.CHAT_HISTORY_WINDOW if window is None else window

    async def handle_turn(self, req: ChatTurnRequest) -> ChatTurnResponse:
        language = (req.language or "english").strip().lower()
        if req.is_first_message:
            text = self._first_message(req, language)
        else:
            text = await self._continue(req, language)

        audio = await self.tts.synthesize(text, language)
        if not audio:
            raise SynthesisError(self.tts.backend_for(language), "synthesizer returned no audio")
        return ChatTurnResponse(audioData=audio, text=text)

    def _first_message(self, req: ChatTurnRequest, language: str) -> str:
        feeling = feeling_from(req.assessment_answers)
        logger.info("First message: language=%s feeling=%s", language, feeling)
        return first_message_template(language, feeling)

    async def _continue(self, req: ChatTurnRequest, language: str) -> str:
        user_prompt = (req.transcript or "").strip() or CONTINUE_PROMPT
        system_prompt = build_system_prompt(language, req.assessment_answers)
        history = history_window(req.history, self.window)
        logger.info(
            "Continuing turn: language=%s history=%d/%d",
            language, len(history), len(req.history or ()),
        )
        return await self.chat.complete(system_prompt, user_prompt, history, empty_fallback=EMPTY_REPLY)

import logging
from typing import Optional

from app.core.config import settings
from app.service.chatServices import ChatCompletionClient
from app.utils.text_utils import transcript_shape

logger = logging.getLogger(__name__)

TRANSLITERATION_SYSTEM_PROMPT = (
    "You are a precise transliterator. Convert Hindi written in Devanagari script into Hinglish (Roman Hindi).\n"
    "Do not translate or add any extra text, only transliterate.\n"
    "Preserve the exact line breaks and speaker labels ('You:' and 'Therapist:') exactly as they appear.\n"
    "If a line is already in Latin script, leave it unchanged.\n"
    "Output only the transliterated version of the user's input, with no commentary, explanations, or continuation."
)


class TransliterationClient:
    def __init__(self, chat: ChatCompletionClient, verify_structure: Optional[bool] = None):
        self.chat = chat
        self.verify_structure = settings.TRANSLIT_VERIFY_STRUCTURE if verify_structure is None else verify_structure

    async def transliterate(self, transcript: str) -> str:
        """Devanagari -> Roman Hindi, line for line, labels untouched."""
        if not transcript or not transcript.strip():
            return ""

        user_prompt = f"Convert the following text exactly as per the above rules:\n\n{transcript}"
        output = await self.chat.complete(
            TRANSLITERATION_SYSTEM_PROMPT,
            user_prompt,
            temperature=0,
            top_p=0,
        )
        output = output.strip()

        if self.verify_structure and transcript_shape(output) != transcript_shape(transcript):
            logger.warning(
                "Transliteration changed transcript structure (%d -> %d lines); returning input unchanged",
                len(transcript.strip().split("\n")), len(output.split("\n")),
            )
            return transcript.strip()
        return output

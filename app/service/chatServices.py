import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError as SchemaError

from app.core.config import settings
from app.core.errors import UpstreamError
from app.schema.providers import ChatCompletionPayload
from app.schema.schema import ConversationTurn

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """One non-streaming call to an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
    ):
        self.http = http
        self.api_key = settings.OPENAI_API_KEY if api_key is None else api_key
        self.url = url or settings.OPENAI_CHAT_URL
        self.model = model or settings.OPENAI_MODEL

    @staticmethod
    def build_messages(
        system_prompt: str,
        user_prompt: str,
        history: Optional[Sequence[ConversationTurn]] = None,
    ) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": system_prompt}]
        for turn in history or ():
            messages.append({"role": turn.role, "content": turn.content})
        # The browser usually sends history that already ends with the current utterance
        last = messages[-1]
        if not (len(messages) > 1 and last["role"] == "user" and last["content"].strip() == user_prompt.strip()):
            messages.append({"role": "user", "content": user_prompt})
        return messages

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        history: Optional[Sequence[ConversationTurn]] = None,
        *,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        empty_fallback: str = "",
    ) -> str:
        if not self.api_key:
            raise UpstreamError(detail="OPENAI_API_KEY not set")

        messages = self.build_messages(system_prompt, user_prompt, history)
        payload: Dict[str, Any] = {"model": self.model, "messages": messages}
        if temperature is not None:
            payload["temperature"] = temperature
        if top_p is not None:
            payload["top_p"] = top_p

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "content-type": "application/json",
        }

        logger.debug("Chat request messages: %s", messages)
        try:
            resp = await self.http.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(detail=f"chat transport error: {e!r}") from e
        if resp.status_code >= 400:
            raise UpstreamError(detail=f"chat provider {resp.status_code}: {resp.text}")

        try:
            data = ChatCompletionPayload.model_validate(resp.json())
        except (ValueError, SchemaError) as e:
            raise UpstreamError(detail=f"unexpected chat provider response: {resp.text[:500]}") from e

        content = data.first_content()
        logger.info("Chat completion done: messages=%d reply_chars=%d", len(messages), len(content))
        if not content:
            logger.warning("Chat provider returned no content; using fallback %r", empty_fallback)
            return empty_fallback
        return content

"""Response bodies of the upstream providers.

Parsed with `model_validate` so that an unexpected shape fails right at the
call site instead of surfacing later as a missing field.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatMessageContent(BaseModel):
    content: Optional[str] = None


class ChatChoice(BaseModel):
    message: Optional[ChatMessageContent] = None


class ChatCompletionPayload(BaseModel):
    choices: List[ChatChoice]

    def first_content(self) -> str:
        if not self.choices or self.choices[0].message is None:
            return ""
        return self.choices[0].message.content or ""


class HumeGeneration(BaseModel):
    audio: str = Field(min_length=1)


class HumeTTSPayload(BaseModel):
    generations: List[HumeGeneration] = Field(min_length=1)

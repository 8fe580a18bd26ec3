import json
from typing import Callable, List

import httpx
import pytest

from app.schema.schema import AssessmentAnswer, ConversationTurn


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handler)


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


def chat_reply(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class FakeChat:
    def __init__(self, reply: str = "I hear you."):
        self.reply = reply
        self.calls: List[dict] = []

    async def complete(self, system_prompt, user_prompt, history=None, **kwargs):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "history": list(history) if history is not None else None,
            **kwargs,
        })
        return self.reply


class FakeTTS:
    def __init__(self, audio: str = "QVVESU8="):
        self.audio = audio
        self.calls: List[tuple] = []

    def backend_for(self, language):
        return "fake"

    async def synthesize(self, text, language):
        self.calls.append((text, language))
        return self.audio


@pytest.fixture
def answers() -> List[AssessmentAnswer]:
    return [
        AssessmentAnswer(questionId=1, question="What language do you want to proceed in?", answer="English"),
        AssessmentAnswer(questionId=2, question="How are you feeling today?", answer="Anxious"),
        AssessmentAnswer(questionId=3, question="What brings you here today?", answer="Stress"),
    ]


@pytest.fixture
def make_history() -> Callable[[int], List[ConversationTurn]]:
    def _make(n: int) -> List[ConversationTurn]:
        return [
            ConversationTurn(
                role="user" if i % 2 == 0 else "assistant",
                content=f"turn {i}",
                timestamp="2024-05-01T10:00:00Z",
            )
            for i in range(n)
        ]
    return _make

"""FastAPI dependencies building per-request services on the shared HTTP client.

Tests swap these out through `app.dependency_overrides`.
"""
import httpx
from fastapi import Depends, Request

from app.service.chatServices import ChatCompletionClient
from app.service.insightsServices import InsightsSummarizer
from app.service.orchTherapist import ConversationOrchestrator
from app.service.translitServices import TransliterationClient
from app.service.ttsServices import SpeechSynthesisClient


def get_http_client(request: Request) -> httpx.AsyncClient:
    http = getattr(request.app.state, "http_client", None)
    if http is None:
        raise RuntimeError("HTTP client not initialized; check app lifespan setup")
    return http


def get_chat_client(http: httpx.AsyncClient = Depends(get_http_client)) -> ChatCompletionClient:
    return ChatCompletionClient(http)


def get_tts_client(http: httpx.AsyncClient = Depends(get_http_client)) -> SpeechSynthesisClient:
    return SpeechSynthesisClient(http)


def get_orchestrator(
    chat: ChatCompletionClient = Depends(get_chat_client),
    tts: SpeechSynthesisClient = Depends(get_tts_client),
) -> ConversationOrchestrator:
    return ConversationOrchestrator(chat, tts)


def get_transliterator(chat: ChatCompletionClient = Depends(get_chat_client)) -> TransliterationClient:
    return TransliterationClient(chat)


def get_summarizer(chat: ChatCompletionClient = Depends(get_chat_client)) -> InsightsSummarizer:
    return InsightsSummarizer(chat)

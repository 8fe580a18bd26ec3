import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence

import httpx
from pydantic import ValidationError as SchemaError

from app.core.config import settings
from app.core.errors import SynthesisError
from app.schema.providers import HumeTTSPayload
from app.utils.text_utils import clean_for_tts

logger = logging.getLogger(__name__)

HUME = "hume"
ELEVENLABS = "elevenlabs"


class AttemptFailed(Exception):
    """A single provider/credential attempt did not produce audio."""


@dataclass(frozen=True)
class TTSAttempt:
    backend: str
    label: str
    call: Callable[[], Awaitable[str]]


async def run_fallback_chain(attempts: Iterable[TTSAttempt]) -> str:
    """Try attempts in order and return the first base64 clip produced."""
    errors: List[str] = []
    last_backend = ""
    for attempt in attempts:
        last_backend = attempt.backend
        try:
            audio_b64 = await attempt.call()
        except (AttemptFailed, httpx.HTTPError) as e:
            logger.warning("TTS attempt %s failed: %s", attempt.label, e)
            errors.append(f"{attempt.label}: {e}")
            continue
        logger.info("TTS attempt %s succeeded (%d b64 chars)", attempt.label, len(audio_b64))
        return audio_b64
    raise SynthesisError(last_backend or "none", "; ".join(errors) or "no TTS provider configured")


class SpeechSynthesisClient:
    """Text to base64 MP3, routed by language across Hume and ElevenLabs."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        eleven_keys: Optional[Sequence[str]] = None,
        hume_key: Optional[str] = None,
        voice_clone_languages: Optional[Iterable[str]] = None,
        debug_path: Optional[str] = None,
    ):
        self.http = http
        self.eleven_keys = list(eleven_keys) if eleven_keys is not None else [
            settings.ELEVENLABS_API_KEY,
            settings.ELEVENLABS2_API_KEY,
        ]
        self.hume_key = settings.HUME_API_KEY if hume_key is None else hume_key
        self.voice_clone_languages = {
            lang.lower() for lang in (voice_clone_languages or settings.VOICE_CLONE_LANGUAGES)
        }
        self.debug_path = settings.TTS_DEBUG_PATH if debug_path is None else debug_path

    def backend_for(self, language: Optional[str]) -> str:
        return HUME if (language or "").strip().lower() in self.voice_clone_languages else ELEVENLABS

    def attempts_for(self, text: str, language: Optional[str]) -> List[TTSAttempt]:
        attempts: List[TTSAttempt] = []
        if self.backend_for(language) == HUME:
            attempts.append(TTSAttempt(HUME, HUME, lambda: self._hume(text)))
        names = ("primary", "secondary")
        for i, key in enumerate(self.eleven_keys):
            name = names[i] if i < len(names) else f"key{i + 1}"
            attempts.append(TTSAttempt(
                ELEVENLABS,
                f"{ELEVENLABS}/{name}",
                lambda key=key: self._elevenlabs(text, key),
            ))
        return attempts

    async def synthesize(self, text: str, language: Optional[str]) -> str:
        cleaned = clean_for_tts(text or "")
        if not cleaned:
            raise SynthesisError(self.backend_for(language), "text is empty")

        logger.info("TTS language=%s backend=%s chars=%d", language, self.backend_for(language), len(cleaned))
        audio_b64 = await run_fallback_chain(self.attempts_for(cleaned, language))
        self._write_debug_clip(audio_b64)
        return audio_b64

    async def _hume(self, text: str) -> str:
        if not self.hume_key:
            raise AttemptFailed("HUME_API_KEY not set")
        if not settings.HUME_VOICE_ID:
            raise AttemptFailed("HUME_VOICE_ID not set")

        headers = {"X-Hume-Api-Key": self.hume_key, "content-type": "application/json"}
        json_body = {
            "utterances": [{
                "text": text,
                "voice": {"id": settings.HUME_VOICE_ID, "provider": settings.HUME_VOICE_PROVIDER},
            }],
            "format": {"type": "mp3"},
        }
        resp = await self.http.post(settings.HUME_TTS_URL, headers=headers, json=json_body)
        if resp.status_code >= 400:
            raise AttemptFailed(f"{resp.status_code} {resp.text}")
        try:
            data = HumeTTSPayload.model_validate(resp.json())
        except (ValueError, SchemaError) as e:
            raise AttemptFailed(f"unexpected response: {resp.text[:300]}") from e
        return data.generations[0].audio

    async def _elevenlabs(self, text: str, api_key: str) -> str:
        if not api_key:
            raise AttemptFailed("API key not set")

        url = settings.ELEVEN_TTS_URL_TMPL.format(voice_id=settings.ELEVEN_VOICE_ID)
        headers = {
            "xi-api-key": api_key,
            "content-type": "application/json",
            "accept": "audio/mpeg",
        }
        json_body = {
            "text": text,
            "voice_settings": {
                "stability": settings.ELEVEN_STABILITY,
                "similarity_boost": settings.ELEVEN_SIMILARITY_BOOST,
                "speed": settings.ELEVEN_SPEED,
            },
        }
        if settings.ELEVEN_TTS_MODEL_ID:
            json_body["model_id"] = settings.ELEVEN_TTS_MODEL_ID

        resp = await self.http.post(url, headers=headers, json=json_body)
        if resp.status_code >= 400:
            raise AttemptFailed(f"{resp.status_code} {resp.text}")
        if not resp.content:
            raise AttemptFailed("empty audio body")
        return base64.b64encode(resp.content).decode("ascii")

    def _write_debug_clip(self, audio_b64: str) -> None:
        if not self.debug_path:
            return
        try:
            Path(self.debug_path).write_bytes(base64.b64decode(audio_b64))
        except (OSError, ValueError) as e:
            logger.warning("Could not write debug clip to %s: %s", self.debug_path, e)

import base64

import httpx
import pytest

from app.core.config import settings
from app.core.errors import SynthesisError
from app.service.ttsServices import (
    ELEVENLABS,
    HUME,
    AttemptFailed,
    SpeechSynthesisClient,
    TTSAttempt,
    run_fallback_chain,
)

from conftest import RecordingTransport, request_json

MP3 = b"ID3\x04fake-mp3-bytes"
HUME_AUDIO = base64.b64encode(b"hume-mp3").decode()


@pytest.fixture(autouse=True)
def provider_settings(monkeypatch):
    monkeypatch.setattr(settings, "HUME_TTS_URL", "https://hume.test/v0/tts")
    monkeypatch.setattr(settings, "HUME_VOICE_ID", "jennifer-clone")
    monkeypatch.setattr(settings, "ELEVEN_TTS_URL_TMPL", "https://eleven.test/v1/text-to-speech/{voice_id}")
    monkeypatch.setattr(settings, "ELEVEN_VOICE_ID", "voice-1")
    monkeypatch.setattr(settings, "ELEVEN_TTS_MODEL_ID", "")


def router(hume=None, eleven=None):
    """Dispatch by host; `eleven` receives the request so tests can branch on the key."""
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "hume.test":
            return hume(request) if hume else httpx.Response(200, json={"generations": [{"audio": HUME_AUDIO}]})
        return eleven(request) if eleven else httpx.Response(200, content=MP3)
    return handler


def make_client(handler, keys=("primary-key", "secondary-key"), hume_key="hume-key", debug_path=""):
    transport = RecordingTransport(handler)
    client = SpeechSynthesisClient(
        httpx.AsyncClient(transport=transport),
        eleven_keys=list(keys),
        hume_key=hume_key,
        voice_clone_languages=["english", "spanish"],
        debug_path=debug_path,
    )
    return client, transport


@pytest.mark.parametrize("language", ["english", "Spanish"])
async def test_voice_clone_languages_route_to_hume(language):
    client, transport = make_client(router())

    audio = await client.synthesize("Hello there.", language)

    assert audio == HUME_AUDIO
    assert [r.url.host for r in transport.requests] == ["hume.test"]
    body = request_json(transport.requests[0])
    assert body == {
        "utterances": [{"text": "Hello there.", "voice": {"id": "jennifer-clone", "provider": "CUSTOM_VOICE"}}],
        "format": {"type": "mp3"},
    }
    assert transport.requests[0].headers["x-hume-api-key"] == "hume-key"


@pytest.mark.parametrize("language", ["french", "hindi", "klingon", ""])
async def test_other_languages_route_to_elevenlabs(language):
    client, transport = make_client(router())

    audio = await client.synthesize("Bonjour.", language)

    assert base64.b64decode(audio) == MP3
    assert [r.url.host for r in transport.requests] == ["eleven.test"]
    req = transport.requests[0]
    assert req.url.path == "/v1/text-to-speech/voice-1"
    assert req.headers["xi-api-key"] == "primary-key"
    assert request_json(req) == {
        "text": "Bonjour.",
        "voice_settings": {"stability": 0.75, "similarity_boost": 0.75, "speed": 0.93},
    }


def test_backend_selection():
    client, _ = make_client(router())
    assert client.backend_for("ENGLISH") == HUME
    assert client.backend_for("spanish") == HUME
    assert client.backend_for("french") == ELEVENLABS
    assert client.backend_for("hindi") == ELEVENLABS
    assert client.backend_for(None) == ELEVENLABS


async def test_primary_failure_tries_secondary_once():
    def eleven(request):
        if request.headers["xi-api-key"] == "primary-key":
            return httpx.Response(429, text="quota exceeded")
        return httpx.Response(200, content=MP3)

    client, transport = make_client(router(eleven=eleven))
    audio = await client.synthesize("Namaste.", "hindi")

    assert base64.b64decode(audio) == MP3
    assert [r.headers["xi-api-key"] for r in transport.requests] == ["primary-key", "secondary-key"]


async def test_missing_primary_key_goes_straight_to_secondary():
    client, transport = make_client(router(), keys=("", "secondary-key"))
    await client.synthesize("Namaste.", "hindi")
    assert [r.headers["xi-api-key"] for r in transport.requests] == ["secondary-key"]


async def test_transport_error_on_primary_falls_back():
    def eleven(request):
        if request.headers["xi-api-key"] == "primary-key":
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, content=MP3)

    client, transport = make_client(router(eleven=eleven))
    await client.synthesize("Salut.", "french")
    assert len(transport.requests) == 2


async def test_both_credentials_fail_raises_synthesis_error():
    client, transport = make_client(router(eleven=lambda r: httpx.Response(401, text="invalid key")))

    with pytest.raises(SynthesisError) as exc:
        await client.synthesize("Salut.", "french")

    assert exc.value.backend == ELEVENLABS
    assert "invalid key" in exc.value.detail
    assert len(transport.requests) == 2


async def test_hume_failure_falls_back_to_elevenlabs():
    client, transport = make_client(router(hume=lambda r: httpx.Response(500, text="hume down")))

    audio = await client.synthesize("Hello.", "english")

    assert base64.b64decode(audio) == MP3
    assert [r.url.host for r in transport.requests] == ["hume.test", "eleven.test"]


async def test_hume_schema_mismatch_counts_as_failure():
    client, transport = make_client(router(hume=lambda r: httpx.Response(200, json={"generations": []})))
    await client.synthesize("Hello.", "english")
    assert [r.url.host for r in transport.requests] == ["hume.test", "eleven.test"]


async def test_all_providers_exhausted():
    client, _ = make_client(
        router(hume=lambda r: httpx.Response(500, text="hume down"),
               eleven=lambda r: httpx.Response(503, text="eleven down")),
    )
    with pytest.raises(SynthesisError) as exc:
        await client.synthesize("Hello.", "english")
    assert "hume down" in exc.value.detail
    assert "eleven down" in exc.value.detail


async def test_empty_text_fails_without_network():
    client, transport = make_client(router())
    with pytest.raises(SynthesisError):
        await client.synthesize("   ", "english")
    assert transport.requests == []


async def test_markup_is_stripped_before_synthesis():
    client, transport = make_client(router())
    await client.synthesize("**Breathe** slowly\n- in\n- out", "french")
    assert request_json(transport.requests[0])["text"] == "Breathe slowly. in. out."


async def test_debug_clip_written(tmp_path):
    target = tmp_path / "last.mp3"
    client, _ = make_client(router(), debug_path=str(target))
    await client.synthesize("Salut.", "french")
    assert target.read_bytes() == MP3


async def test_debug_clip_failure_does_not_fail_request(tmp_path):
    client, _ = make_client(router(), debug_path=str(tmp_path / "missing-dir" / "last.mp3"))
    audio = await client.synthesize("Salut.", "french")
    assert base64.b64decode(audio) == MP3


async def test_fallback_chain_stops_at_first_success():
    calls = []

    def attempt(name, ok):
        async def call():
            calls.append(name)
            if not ok:
                raise AttemptFailed(f"{name} failed")
            return name
        return TTSAttempt("test", name, call)

    result = await run_fallback_chain([attempt("a", False), attempt("b", True), attempt("c", True)])
    assert result == "b"
    assert calls == ["a", "b"]


async def test_fallback_chain_with_no_attempts():
    with pytest.raises(SynthesisError):
        await run_fallback_chain([])

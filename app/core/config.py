from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # Chat completion provider
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
    OPENAI_CHAT_URL: str = Field(default="https://api.openai.com/v1/chat/completions")
    OPENAI_MODEL: str = Field(default="gpt-4o-mini", description="Chat model used for every completion")

    # Direct TTS backend (ElevenLabs), primary and secondary account keys
    ELEVENLABS_API_KEY: str = Field(default="", description="ElevenLabs primary API key")
    ELEVENLABS2_API_KEY: str = Field(default="", description="ElevenLabs secondary API key, tried when the primary fails")
    ELEVEN_TTS_URL_TMPL: str = Field(default="https://api.elevenlabs.io/v1/text-to-speech/{voice_id}")
    ELEVEN_VOICE_ID: str = Field(default="4cHjkgQnNiDfoHQieI9o")
    ELEVEN_TTS_MODEL_ID: str = Field(default="", description="Optional ElevenLabs model id (e.g., eleven_multilingual_v2)")
    ELEVEN_STABILITY: float = Field(default=0.75)
    ELEVEN_SIMILARITY_BOOST: float = Field(default=0.75)
    ELEVEN_SPEED: float = Field(default=0.93)

    # Voice-cloning TTS backend (Hume Octave)
    HUME_API_KEY: str = Field(default="", description="Hume API key")
    HUME_TTS_URL: str = Field(default="https://api.hume.ai/v0/tts")
    HUME_VOICE_ID: str = Field(default="", description="Id of the cloned therapist voice")
    HUME_VOICE_PROVIDER: str = Field(default="CUSTOM_VOICE", description="HUME_AI for library voices, CUSTOM_VOICE for cloned ones")
    VOICE_CLONE_LANGUAGES: List[str] = Field(default=["english", "spanish"], description="Languages routed to the voice-cloning backend")

    # Optional: write the last synthesized clip here for debugging
    TTS_DEBUG_PATH: str = Field(default="")

    CHAT_HISTORY_WINDOW: int = Field(default=5, description="Number of trailing turns forwarded to the chat model")
    TRANSLIT_VERIFY_STRUCTURE: bool = Field(default=True, description="Reject transliterations that change lines or speaker labels")

    HTTP_TIMEOUT_S: float = Field(default=30.0)
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = Field(default="INFO")
    PORT: int = Field(default=3000)

    # pydantic v2 uses SettingsConfigDict for settings configuration
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator


class AssessmentAnswer(BaseModel):
    questionId: int
    question: str
    answer: str


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    # The browser sends these along with every turn; only role/content are read here
    timestamp: Optional[str] = None
    messageId: Optional[str] = None
    audioData: Optional[str] = None
    detectedLanguage: Optional[str] = None


class ChatTurnRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Required but nullable; null means a continuing turn
    is_first_message: Optional[bool] = Field(alias="FirstMessage")
    assessment_answers: List[AssessmentAnswer] = Field(default_factory=list, alias="assessment_question_answers")
    language: Optional[str] = "english"
    transcript: Optional[str] = Field(default=None, alias="Transcript")
    history: Optional[List[ConversationTurn]] = Field(default=None, alias="ConversationHistory")
    detected_language: Optional[str] = Field(default=None, alias="DetectedLanguage")

    @model_validator(mode="before")
    @classmethod
    def _drop_turn_fields_on_first_message(cls, data):
        # A greeting never reads the transcript or history, so stale values must not fail it
        if isinstance(data, dict):
            first = data.get("FirstMessage", data.get("is_first_message"))
            if first is True or first == 1 or (isinstance(first, str) and first.strip().lower() in ("true", "1")):
                data = {
                    k: v for k, v in data.items()
                    if k not in ("Transcript", "transcript", "ConversationHistory", "history")
                }
        return data


class ChatTurnResponse(BaseModel):
    audioData: str
    text: str


class InsightsRequest(BaseModel):
    assessmentAnswers: List[AssessmentAnswer]
    conversationHistory: List[ConversationTurn]


class InsightsResponse(BaseModel):
    summary: str


class TransliterationRequest(BaseModel):
    transcript: StrictStr


class TransliterationResponse(BaseModel):
    transcript: str


class HealthResponse(BaseModel):
    ok: bool

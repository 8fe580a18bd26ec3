from typing import Sequence

from app.schema.schema import AssessmentAnswer, ConversationTurn
from app.service.chatServices import ChatCompletionClient

INSIGHTS_SYSTEM_PROMPT = "You are a supportive therapist summarizing user insights."


def insights_prompt(answers: Sequence[AssessmentAnswer], history: Sequence[ConversationTurn]) -> str:
    assessments = "\n".join(f"{a.question}: {a.answer}" for a in answers)
    conversation = "\n".join(f"{t.role}: {t.content}" for t in history)
    return (
        f"Based on the following assessment answers:\n{assessments}\n\n"
        f"And the conversation history:\n{conversation}\n\n"
        "Provide a short empathetic summary of the user's state, highlighting strengths and challenges."
    )


class InsightsSummarizer:
    def __init__(self, chat: ChatCompletionClient):
        self.chat = chat

    async def summarize(self, answers: Sequence[AssessmentAnswer], history: Sequence[ConversationTurn]) -> str:
        # History travels inline in the prompt, not as chat turns
        return await self.chat.complete(INSIGHTS_SYSTEM_PROMPT, insights_prompt(answers, history))

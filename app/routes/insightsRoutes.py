from fastapi import APIRouter, Depends

from app.core.deps import get_summarizer
from app.schema.schema import InsightsRequest, InsightsResponse
from app.service.insightsServices import InsightsSummarizer

router = APIRouter(tags=["insights"])


@router.post("/insights", response_model=InsightsResponse)
async def insights(body: InsightsRequest, summarizer: InsightsSummarizer = Depends(get_summarizer)):
    summary = await summarizer.summarize(body.assessmentAnswers, body.conversationHistory)
    return InsightsResponse(summary=summary)

from fastapi import APIRouter, Depends

from app.core.deps import get_transliterator
from app.core.errors import ValidationError
from app.schema.schema import TransliterationRequest, TransliterationResponse
from app.service.translitServices import TransliterationClient

router = APIRouter(tags=["hinglish"])


@router.post("/hinglish", response_model=TransliterationResponse)
async def hinglish(
    body: TransliterationRequest,
    transliterator: TransliterationClient = Depends(get_transliterator),
):
    """Convert a Devanagari transcript to Roman Hindi, keeping 'You:' / 'Therapist:' lines."""
    if not body.transcript:
        raise ValidationError("Invalid transcript")
    output = await transliterator.transliterate(body.transcript)
    return TransliterationResponse(transcript=output)

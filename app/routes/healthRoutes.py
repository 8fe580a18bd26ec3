from fastapi import APIRouter
from app.schema.schema import HealthResponse

router = APIRouter(tags=["health"])

@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(ok=True)

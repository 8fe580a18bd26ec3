from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import httpx
import uvicorn
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging, warn_missing_credentials
from app.routes.chatRoutes import router as chat_router
from app.routes.insightsRoutes import router as insights_router
from app.routes.hinglishRoutes import router as hinglish_router
from app.routes.healthRoutes import router as health_router

configure_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Shared HTTP client for the chat and TTS providers
    app.state.http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_S)
    warn_missing_credentials()
    logger.info("HTTP client initialized")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("HTTP client closed")

app = FastAPI(
    title="Jennifer Therapist Bridge",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(insights_router, prefix="/api")
app.include_router(hinglish_router, prefix="/api")


if __name__ == "__main__":
    uvicorn.run("server:app", host="0.0.0.0", port=settings.PORT)

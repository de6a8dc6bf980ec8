"""Health check routes"""
from fastapi import APIRouter, Depends
import logging

from api.schemas.response_schemas import ParserHealthResponse
from config.settings import ParserConfig
from core.dependencies import get_failure_channel, get_parser_config
from core.events import FailureChannel
from integrations.gemini.client import GeminiClient

logger = logging.getLogger(__name__)
router = APIRouter()

RECENT_FAILURES_SHOWN = 20


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "ok", "service": "friday-interpreter"}


@router.get("/health/parser", response_model=ParserHealthResponse)
async def parser_health(
    config: ParserConfig = Depends(get_parser_config),
    failures: FailureChannel = Depends(get_failure_channel),
):
    """External parser availability and its most recent failures"""
    available = GeminiClient.is_available(config)
    recent = failures.recent(RECENT_FAILURES_SHOWN)
    return ParserHealthResponse(
        # Without the external parser every request is served by the local parser
        status="ok" if available and not recent else "degraded",
        available=available,
        model=config.model,
        recent_failures=len(failures),
        failures=recent,
    )

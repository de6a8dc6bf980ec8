"""Interpretation API routes: utterance in, structured intent out."""
from fastapi import APIRouter, Depends
import logging

from api.schemas.request_schemas import ChatRequest, InterpretRequest
from api.schemas.response_schemas import ChatResponse, SummaryResponse
from config.settings import ParserConfig
from core.dependencies import get_coordinator, get_parser_config
from core.interpreter import InterpretationCoordinator
from models.intent import IntentRecord
from models.summary import DailySummaryData, WeeklySummaryData

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/interpret", response_model=IntentRecord, response_model_by_alias=True)
async def interpret(
    request: InterpretRequest,
    coordinator: InterpretationCoordinator = Depends(get_coordinator),
    config: ParserConfig = Depends(get_parser_config),
):
    """
    Interpret one utterance into an intent record.

    Always answers 200 with a valid record; when the external parser is
    unavailable or misbehaves the local parser's result is returned.
    """
    return await coordinator.interpret(
        request.utterance,
        request.now,
        request.recent_turns,
        config=config,
    )


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    coordinator: InterpretationCoordinator = Depends(get_coordinator),
    config: ParserConfig = Depends(get_parser_config),
):
    """Conversational reply for free-form messages."""
    reply = await coordinator.chat(request.utterance, request.recent_turns, config=config)
    return ChatResponse(reply=reply)


@router.post("/summary/daily", response_model=SummaryResponse)
async def daily_summary(
    data: DailySummaryData,
    coordinator: InterpretationCoordinator = Depends(get_coordinator),
    config: ParserConfig = Depends(get_parser_config),
):
    return SummaryResponse(summary=await coordinator.summarize(data, config=config))


@router.post("/summary/weekly", response_model=SummaryResponse)
async def weekly_summary(
    data: WeeklySummaryData,
    coordinator: InterpretationCoordinator = Depends(get_coordinator),
    config: ParserConfig = Depends(get_parser_config),
):
    return SummaryResponse(summary=await coordinator.summarize(data, config=config))

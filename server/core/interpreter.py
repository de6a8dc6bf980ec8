"""Interpretation Coordinator: single entry point from utterance to intent record.

    utterance ──► external parser available? ──no──────────────┐
                      │ yes                                    │
                      ▼                                        ▼
           prompt ─► Gemini ─► normalize ─► validate     local parser ─► validate
                      │ None / timeout / ParseFailure /       ▲
                      │ unknown intent tag                    │
                      └───────────────────────────────────────┘

Every failure is absorbed here: callers always receive a valid record. The
coordinator holds no state between calls beyond its collaborators, so
concurrent calls are safe.
"""
import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence, Union

from config.settings import ParserConfig
from core.errors import MalformedResponse
from core.events import FailureChannel
from core.fallback_parser import parse_locally
from core.intent_validation import sanitize_intent
from core.prompt_builder import (
    build_chat_prompt,
    build_summary_instruction,
    build_summary_prompt,
    build_system_instruction,
    build_user_payload,
)
from core.replies import confirmation_reply
from core.response_normalizer import ParseFailure, normalize
from core.summary import compose_summary_text
from integrations.gemini.client import GeminiClient
from integrations.gemini.prompts import CHAT_SYSTEM_PROMPT
from models.intent import GeneralIntent, IntentBase, IntentType
from models.message import ConversationTurn
from models.summary import DailySummaryData, WeeklySummaryData

logger = logging.getLogger(__name__)


class InterpretationCoordinator:
    """
    Orchestrates interpretation:
    - external parser first, when configured
    - deterministic local parser whenever that is unavailable or fails
    - the same validation for both
    """

    def __init__(self, gemini_client: GeminiClient, failures: Optional[FailureChannel] = None):
        self.gemini = gemini_client
        self.failures = failures if failures is not None else gemini_client.failures

    async def interpret(
        self,
        utterance: str,
        now: Optional[datetime] = None,
        recent_turns: Sequence[ConversationTurn] = (),
        *,
        config: ParserConfig,
    ) -> IntentBase:
        """Interpret one utterance. Never raises; worst case is a general intent."""
        now = now or datetime.now()
        record = None

        if self.gemini.is_available(config):
            try:
                record = await self._interpret_remotely(utterance, now, recent_turns, config)
            except Exception as e:
                logger.error(f"Remote interpretation error: {type(e).__name__}: {e}")
                self.failures.report(
                    "validation", code="unexpected_error", detail=f"{type(e).__name__}: {e}"
                )
                record = None

        if record is None:
            record = self._interpret_locally(utterance, now)
            source = "local"
        else:
            source = "gemini"

        logger.info(f"Interpreted utterance as {record.intent} (source={source})")
        return record

    async def chat(
        self,
        utterance: str,
        recent_turns: Sequence[ConversationTurn] = (),
        *,
        config: ParserConfig,
        now: Optional[datetime] = None,
    ) -> str:
        """Free-form conversational reply; falls back to the local confirmation."""
        if self.gemini.is_available(config):
            reply = await self._generate_chat_reply(utterance, recent_turns, config)
            if reply:
                return reply
        return self._interpret_locally(utterance, now or datetime.now()).reply

    async def summarize(
        self,
        data: Union[DailySummaryData, WeeklySummaryData],
        *,
        config: ParserConfig,
    ) -> str:
        """Friendly summary paragraph; deterministic text when the parser is unavailable."""
        if self.gemini.is_available(config):
            text = await self._call_with_timeout(
                build_summary_prompt(data),
                build_summary_instruction(data.kind),
                config,
                config.chat_timeout_s,
            )
            if text and text.strip():
                return text.strip()
        return compose_summary_text(data)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _interpret_remotely(
        self,
        utterance: str,
        now: datetime,
        recent_turns: Sequence[ConversationTurn],
        config: ParserConfig,
    ) -> Optional[IntentBase]:
        raw = await self._call_with_timeout(
            build_user_payload(utterance, recent_turns, config.history_turns),
            build_system_instruction(now),
            config,
            config.timeout_s,
        )
        if raw is None:
            return None

        normalized = normalize(raw)
        if isinstance(normalized, ParseFailure):
            self.failures.report("decode", code="invalid_json", detail=normalized.raw_text)
            return None

        try:
            record = sanitize_intent(normalized, utterance=utterance, now=now)
        except MalformedResponse as e:
            self.failures.report("validation", code="unknown_intent", detail=e.raw_text or str(e))
            return None

        if record.intent == IntentType.GENERAL.value:
            reply = await self._generate_chat_reply(utterance, recent_turns, config)
            if reply:
                record = record.model_copy(update={"reply": reply})
        return record

    def _interpret_locally(self, utterance: str, now: datetime) -> IntentBase:
        payload = parse_locally(utterance, now)
        try:
            return sanitize_intent(payload, utterance=utterance, now=now)
        except MalformedResponse as e:
            logger.error(f"Local interpretation produced an invalid record: {e}")
            return GeneralIntent(reply=confirmation_reply(IntentType.GENERAL))

    async def _generate_chat_reply(
        self,
        utterance: str,
        recent_turns: Sequence[ConversationTurn],
        config: ParserConfig,
    ) -> Optional[str]:
        text = await self._call_with_timeout(
            build_chat_prompt(utterance, recent_turns, config.history_turns),
            CHAT_SYSTEM_PROMPT,
            config,
            config.chat_timeout_s,
        )
        return text.strip() if text and text.strip() else None

    async def _call_with_timeout(
        self,
        prompt: str,
        system_instruction: str,
        config: ParserConfig,
        timeout_s: float,
    ) -> Optional[str]:
        """Bound the external call so a slow parser cannot block the caller."""
        try:
            return await asyncio.wait_for(
                self.gemini.generate(
                    prompt, system_instruction, config=config, timeout_s=timeout_s
                ),
                timeout=timeout_s,
            )
        except asyncio.TimeoutError:
            self.failures.report(
                "network", code="timeout", detail=f"No response within {timeout_s}s"
            )
            return None

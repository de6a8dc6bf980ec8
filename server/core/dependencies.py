"""
Shared singleton dependencies for the application.

The HTTP client and the failure channel are created once at startup and
reused across requests. The coordinator itself is stateless and cheap, so a
new one is built per request around the shared client. Configuration is NOT
a dependency here: routes snapshot it per request into a ParserConfig.
"""
import logging
from typing import Optional

from config.settings import ParserConfig, settings
from core.events import FailureChannel
from core.interpreter import InterpretationCoordinator
from integrations.gemini.client import GeminiClient

logger = logging.getLogger(__name__)

# Module-level singletons: initialized once via init_dependencies()
_failure_channel: Optional[FailureChannel] = None
_gemini_client: Optional[GeminiClient] = None


def init_dependencies() -> None:
    """
    Initialize all shared singletons. Called once at application startup.
    """
    global _failure_channel, _gemini_client

    logger.info("Initializing shared dependencies...")

    _failure_channel = FailureChannel(max_events=settings.FAILURE_BUFFER_SIZE)
    # Gemini client: single httpx.AsyncClient, reused for all requests
    _gemini_client = GeminiClient(failures=_failure_channel)

    config = get_parser_config()
    logger.info(
        f"Dependencies initialized: external parser "
        f"{'available' if GeminiClient.is_available(config) else 'unavailable (local parser only)'}"
    )


async def shutdown_dependencies() -> None:
    """Clean up resources on shutdown."""
    global _gemini_client
    if _gemini_client:
        await _gemini_client.close()
        _gemini_client = None
        logger.info("GeminiClient closed")


def get_failure_channel() -> FailureChannel:
    if _failure_channel is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _failure_channel


def get_gemini_client() -> GeminiClient:
    if _gemini_client is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _gemini_client


def get_parser_config() -> ParserConfig:
    """Snapshot of the current settings, taken once per request."""
    return ParserConfig.from_settings(settings)


def get_coordinator() -> InterpretationCoordinator:
    return InterpretationCoordinator(get_gemini_client(), get_failure_channel())

"""Gemini client: the external semantic parser, behind a configuration gate.

``generate`` never raises: every failure (no credential, transport error,
non-success status, unusable body) comes back as ``None``, and all but the
missing-credential gate are reported to the failure channel. ``request`` is
the raising variant for callers that want to wrap their own retry policy
around the call.
"""
import httpx
from typing import Any, Optional
import logging

from config.settings import ParserConfig
from core.errors import ConfigurationUnavailable, MalformedResponse, NetworkFailure
from core.events import FailureChannel

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 60.0


def build_request_body(prompt: str, system_instruction: str, config: ParserConfig) -> dict:
    """generateContent request body: one user part, optional system instruction."""
    body: dict[str, Any] = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": config.temperature,
            "maxOutputTokens": config.max_output_tokens,
        },
    }
    if system_instruction:
        body["system_instruction"] = {"parts": [{"text": system_instruction}]}
    return body


def extract_candidate_text(data: Any) -> Optional[str]:
    """Text of the first candidate's first part, or None if the path is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


class GeminiClient:
    """Wrapper for the Gemini generateContent API."""

    def __init__(
        self,
        failures: Optional[FailureChannel] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.failures = failures if failures is not None else FailureChannel()
        # Default timeout: callers can override per-request via the timeout_s param
        self.client = http_client or httpx.AsyncClient(timeout=DEFAULT_HTTP_TIMEOUT)

    @staticmethod
    def is_available(config: ParserConfig) -> bool:
        """True only when the parser is enabled and a non-blank credential is set."""
        return config.enabled and config.has_credential

    async def request(
        self,
        prompt: str,
        system_instruction: str = "",
        *,
        config: ParserConfig,
        timeout_s: Optional[float] = None,
    ) -> str:
        """Issue one generateContent call. Raises typed errors on any failure."""
        if not self.is_available(config):
            raise ConfigurationUnavailable()

        url = f"{config.api_url.rstrip('/')}/models/{config.model}:generateContent"
        body = build_request_body(prompt, system_instruction, config)

        try:
            response = await self.client.post(
                url,
                params={"key": config.api_key.strip()},
                json=body,
                timeout=timeout_s or DEFAULT_HTTP_TIMEOUT,
            )
        except httpx.TimeoutException as e:
            raise NetworkFailure(
                f"Gemini request timed out: {type(e).__name__}", timed_out=True
            ) from e
        except httpx.HTTPError as e:
            # Exception text may embed the request URL (and with it the key)
            raise NetworkFailure(f"Gemini request failed: {type(e).__name__}") from e

        if not response.is_success:
            raise NetworkFailure(
                f"Gemini API error: {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(
                "Gemini response body is not JSON", raw_text=response.text, code="invalid_body"
            ) from e

        text = extract_candidate_text(data)
        if text is None:
            raise MalformedResponse(
                "Gemini response has no candidate text", raw_text=response.text, code="no_candidate"
            )
        return text

    async def generate(
        self,
        prompt: str,
        system_instruction: str = "",
        *,
        config: ParserConfig,
        timeout_s: Optional[float] = None,
    ) -> Optional[str]:
        """Generate text, or None when the parser is unavailable or fails."""
        try:
            return await self.request(
                prompt, system_instruction, config=config, timeout_s=timeout_s
            )
        except ConfigurationUnavailable:
            logger.debug("Gemini not configured; skipping external parser")
            return None
        except NetworkFailure as e:
            self.failures.report(
                "network",
                status=e.status,
                code="timeout" if e.timed_out else None,
                detail=e.body or str(e),
            )
            return None
        except MalformedResponse as e:
            self.failures.report("decode", code=e.code, detail=e.raw_text or str(e))
            return None

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

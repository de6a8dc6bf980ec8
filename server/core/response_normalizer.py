"""Response Normalizer: turns raw model text into a decoded payload.

Strips the code-fence wrapper some model outputs include, decodes the JSON,
and falls back to pulling the first complete object out of surrounding prose.
It does not check enum values or field co-occurrence; that is the job of
intent validation, which runs the same way for AI and local results.
"""
from dataclasses import dataclass
from typing import Any, Dict, Union
import json
import logging
import re

logger = logging.getLogger(__name__)

# One optional leading fence (```json or ```) and one optional trailing fence
_LEADING_FENCE_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE_RE = re.compile(r"\s*```\s*$")


@dataclass(frozen=True)
class ParseFailure:
    """Model output that could not be decoded, kept for diagnostics."""
    raw_text: str
    reason: str


RawIntent = Dict[str, Any]


def strip_code_fence(text: str) -> str:
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _LEADING_FENCE_RE.sub("", cleaned, count=1)
        cleaned = _TRAILING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _extract_json_object(text: str) -> str:
    """
    Find the first complete JSON object embedded in text.

    Brace-matching with depth tracking; braces inside string literals do not
    count. Candidates that fail to decode are skipped and scanning continues.
    Raises ValueError if none is found.
    """
    depth = 0
    start = None
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and depth > 0:
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            if depth == 0:
                continue
            depth -= 1
            if depth == 0 and start is not None:
                candidate = text[start : i + 1]
                try:
                    json.loads(candidate)
                    return candidate
                except json.JSONDecodeError:
                    start = None  # reset and keep scanning

    raise ValueError("No valid JSON object found in model response")


def normalize(raw_text: str) -> Union[RawIntent, ParseFailure]:
    """Decode model output into a raw intent payload, or a ParseFailure. Never raises."""
    if not raw_text or not raw_text.strip():
        return ParseFailure(raw_text=raw_text or "", reason="empty response")

    cleaned = strip_code_fence(raw_text)
    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError as e:
        try:
            decoded = json.loads(_extract_json_object(cleaned))
            logger.debug("Recovered JSON object from surrounding text")
        except ValueError:
            return ParseFailure(raw_text=raw_text, reason=f"invalid JSON: {e.msg}")

    if not isinstance(decoded, dict):
        return ParseFailure(
            raw_text=raw_text,
            reason=f"expected a JSON object, got {type(decoded).__name__}",
        )
    return decoded

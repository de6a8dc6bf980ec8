"""Typed interpretation errors.

None of these escape the coordinator: every failure is absorbed there and
turned into a usable intent record. They exist so the layers below can say
*what* went wrong and whether trying again could help.
"""
from typing import Optional


class InterpretationError(Exception):
    """Base error so callers can distinguish transient from permanent failures."""
    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class ConfigurationUnavailable(InterpretationError):
    """No credential configured, or the parser is switched off. A gate, not a fault."""
    def __init__(self, message: str = "External parser is not configured"):
        super().__init__(message, retryable=False)


class NetworkFailure(InterpretationError):
    """Transport error, timeout or non-success status from the external parser."""
    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        body: str = "",
        timed_out: bool = False,
    ):
        super().__init__(message, retryable=True)
        self.status = status
        self.body = body
        self.timed_out = timed_out


class MalformedResponse(InterpretationError):
    """The external parser answered, but not with something we can use."""
    def __init__(self, message: str, *, raw_text: str = "", code: Optional[str] = None):
        super().__init__(message, retryable=False)
        self.raw_text = raw_text
        self.code = code


class UnsupportedUtterance(InterpretationError):
    """The local parser found no keyword it recognizes."""
    def __init__(self, utterance: str):
        super().__init__(f"No recognizable intent in: {utterance[:80]!r}", retryable=False)
        self.utterance = utterance

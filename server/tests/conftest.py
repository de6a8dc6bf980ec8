"""Shared test fixtures and configuration."""
import sys
import os
from datetime import datetime

import pytest

# Ensure the server package is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set environment BEFORE any application module is imported. Tests never
# talk to the real Gemini API: the key is blank unless a test injects one.
os.environ["GEMINI_API_KEY"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from config.settings import ParserConfig  # noqa: E402

# Wednesday, 21 October 2026, 10:00 local time
WEDNESDAY_10AM = datetime(2026, 10, 21, 10, 0)


@pytest.fixture
def now() -> datetime:
    return WEDNESDAY_10AM


@pytest.fixture
def offline_config() -> ParserConfig:
    return ParserConfig(api_key=None)


@pytest.fixture
def online_config() -> ParserConfig:
    return ParserConfig(api_key="test-gemini-key", timeout_s=1, chat_timeout_s=1)

"""Application configuration settings."""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import BaseModel, ConfigDict, model_validator
from typing import List, Optional

# Get the server directory path
SERVER_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # External semantic parser (Gemini)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_ENABLED: bool = True
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Generation parameters: low temperature favors deterministic extraction
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_OUTPUT_TOKENS: int = 1024

    # Per-phase LLM timeouts (seconds)
    LLM_INTERPRET_TIMEOUT: float = 20
    LLM_CHAT_TIMEOUT: float = 15

    # Number of prior turns included in conversational prompts
    CHAT_HISTORY_TURNS: int = 6

    # Observability: how many recent parser failures are kept in memory
    FAILURE_BUFFER_SIZE: int = 100

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS: explicit list of allowed origins
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    @model_validator(mode="after")
    def _validate_limits(self) -> "Settings":
        if not 0.0 <= self.LLM_TEMPERATURE <= 2.0:
            raise ValueError("LLM_TEMPERATURE must be between 0.0 and 2.0")
        if self.LLM_MAX_OUTPUT_TOKENS <= 0:
            raise ValueError("LLM_MAX_OUTPUT_TOKENS must be positive")
        if self.LLM_INTERPRET_TIMEOUT <= 0 or self.LLM_CHAT_TIMEOUT <= 0:
            raise ValueError("LLM timeouts must be positive")
        return self

    class Config:
        env_file = str(SERVER_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


class ParserConfig(BaseModel):
    """
    Immutable snapshot of the parser configuration for a single call.

    Built from Settings at the edge (per request) and passed explicitly into
    the coordinator, so a credential change takes effect on the next call and
    never half-way through an in-flight one.
    """
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    enabled: bool = True
    api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.0-flash"
    temperature: float = 0.2
    max_output_tokens: int = 1024
    timeout_s: float = 20
    chat_timeout_s: float = 15
    history_turns: int = 6

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_settings(cls, source: Settings) -> "ParserConfig":
        return cls(
            api_key=source.GEMINI_API_KEY,
            enabled=source.GEMINI_ENABLED,
            api_url=source.GEMINI_API_URL,
            model=source.GEMINI_MODEL,
            temperature=source.LLM_TEMPERATURE,
            max_output_tokens=source.LLM_MAX_OUTPUT_TOKENS,
            timeout_s=source.LLM_INTERPRET_TIMEOUT,
            chat_timeout_s=source.LLM_CHAT_TIMEOUT,
            history_turns=source.CHAT_HISTORY_TURNS,
        )


# Global settings instance
settings = Settings()

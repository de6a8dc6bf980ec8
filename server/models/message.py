"""Conversation turn models"""
from pydantic import BaseModel, ConfigDict, Field


class ConversationTurn(BaseModel):
    """One prior turn of dialogue, as kept by the chat transcript."""
    model_config = ConfigDict(frozen=True)

    role: str = "user"  # 'user' or 'assistant'
    text: str = Field(..., max_length=10000)

    @property
    def is_user(self) -> bool:
        return self.role.lower() == "user"

"""Therapy Chat: request/response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from therapy_chat.config import DEFAULT_SESSION_ID


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    message: Optional[str] = None
    session_id: Optional[str] = Field(default=DEFAULT_SESSION_ID, alias="sessionId")

    @field_validator("message", mode="before")
    @classmethod
    def falsy_message_is_missing(cls, value):
        # 0, false and "" all count as no message
        return value or None

    @field_validator("session_id")
    @classmethod
    def default_session(cls, value: Optional[str]) -> str:
        return value if value else DEFAULT_SESSION_ID


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    intent: str
    confidence: float = Field(ge=0.0, le=1.0)
    session_id: str = Field(alias="sessionId")


class ErrorResponse(BaseModel):
    error: str
    text: Optional[str] = None
    intent: Optional[str] = None


class HealthResponse(BaseModel):
    message: str
    status: str
    timestamp: str

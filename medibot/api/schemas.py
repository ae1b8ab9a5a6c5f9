"""Pydantic schemas for the FastAPI endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Incoming chat message.  A missing ``message`` is rejected by the route."""

    message: str | None = Field(None, description="The user's message")
    session_id: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Conversation identifier; omitted means the shared default session",
    )


class ChatResponse(BaseModel):
    reply: str = Field(..., description="The assistant's reply")


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "medibot"

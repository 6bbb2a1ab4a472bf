"""Pydantic schemas for API payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from memochat.agent.tone import Tone


class ChatRequest(BaseModel):
    """Schema for POST /chat."""

    user_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Successful POST /chat response."""

    reply: str
    tone: Tone
    simulated: bool

# src/teacup_ledger/schemas/system.py
"""Schemas for ledger statistics and administration."""

from typing import Any

from pydantic import BaseModel, Field


class LedgerStats(BaseModel):
    """Current ledger cardinalities."""

    total_conversations: int
    total_posts: int
    total_rewarded_items: int


class MetadataValue(BaseModel):
    """A single ledger metadata value."""

    value: str


class MetadataUpdate(BaseModel):
    """Admin request replacing a metadata value."""

    value: str = Field(..., description="New value")


class EventResponse(BaseModel):
    """A committed ledger event."""

    name: str
    timestamp: int
    payload: dict[str, Any]

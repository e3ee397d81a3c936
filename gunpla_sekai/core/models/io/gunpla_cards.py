"""
Gunpla card I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .catalog import KitSummary
from .uploads import UploadCreate
from .users import UserSummary


class CardSummary(BaseModel):
    id: str
    upload_url: str
    created_at: datetime
    kit_name: str


class CardCheckRead(BaseModel):
    exists: bool
    card: Optional[CardSummary] = None
    kit_name: str


class CardSave(BaseModel):
    kit_slug: str = Field(min_length=1)
    upload_data: UploadCreate


class CardRead(BaseModel):
    id: str
    src: str
    alt: str
    created_at: datetime
    kit: KitSummary


class UserCardsRead(BaseModel):
    user: UserSummary
    cards: List[CardRead] = Field(default_factory=list)


class KitMediaRead(BaseModel):
    """Distinct image urls the card builder can use as a background."""

    images: List[str] = Field(default_factory=list)

"""
Collection I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from gunpla_sekai.core.models.domain.enums import CollectionStatus

from .catalog import KitSummary


class CollectionStatusInput(BaseModel):
    status: CollectionStatus
    notes: Optional[str] = None


class CollectionEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    kit_id: str
    status: CollectionStatus
    notes: Optional[str] = None
    added_at: datetime
    updated_at: datetime
    kit: Optional[KitSummary] = None


class KitCollectionStatusRead(BaseModel):
    kit_id: str
    status: Optional[CollectionStatus] = None

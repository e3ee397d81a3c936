"""
Search I/O models.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .catalog import KitSummary, MobileSuitRead


class SearchResults(BaseModel):
    kits: List[KitSummary] = Field(default_factory=list)
    mobile_suits: List[MobileSuitRead] = Field(default_factory=list)
    total_kits: int = 0
    total_mobile_suits: int = 0
    has_more: bool = False

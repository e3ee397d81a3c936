"""
Async repositories over the SQLModel entities.

Each repository wraps one ``AsyncSession`` and exposes the queries a service
needs, returning entities or flattened read models.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .builds import BuildRepository
from .catalog import (
    GradeRepository,
    MobileSuitRepository,
    ProductLineRepository,
    ReleaseTypeRepository,
    SeriesRepository,
    TimelineRepository,
)
from .collections import CollectionRepository
from .gunpla_cards import GunplaCardRepository
from .kits import KitRepository
from .milestones import MilestoneRepository
from .reviews import ReviewRepository
from .uploads import UploadRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "BuildRepository",
    "CollectionRepository",
    "GradeRepository",
    "GunplaCardRepository",
    "KitRepository",
    "MilestoneRepository",
    "MobileSuitRepository",
    "ProductLineRepository",
    "QueryBuilder",
    "ReleaseTypeRepository",
    "ReviewRepository",
    "SeriesRepository",
    "TimelineRepository",
    "UploadRepository",
    "UserRepository",
]

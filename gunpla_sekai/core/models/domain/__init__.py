"""Domain enums and rules that do not depend on persistence or HTTP."""

from .enums import (
    BuildSort,
    BuildStatus,
    CollectionStatus,
    KitSort,
    KitUploadType,
    MilestoneType,
    ReviewCategory,
    SearchSort,
)

__all__ = [
    "BuildSort",
    "BuildStatus",
    "CollectionStatus",
    "KitSort",
    "KitUploadType",
    "MilestoneType",
    "ReviewCategory",
    "SearchSort",
]

"""
Database entity models.

This package contains all database entity models organized by business domain.
Importing it registers every table on ``Base.metadata``.

Modules:
- users: Members synced from Clerk, with profile and privacy settings
- catalog: Timelines, series, grades, product lines, release types, mobile suits, kits
- uploads: Cloudinary assets owned by users
- collections: Per-user kit collection status
- reviews: Multi-category reviews and helpfulness feedback
- builds: Build logs, gallery, milestones, likes and comments
- gunpla_cards: Saved card-builder images
"""

from .builds import (
    Build,
    BuildComment,
    BuildLike,
    BuildMilestone,
    BuildMilestoneUpload,
    BuildUpload,
)
from .catalog import (
    Grade,
    Kit,
    KitMobileSuit,
    KitUpload,
    MobileSuit,
    ProductLine,
    ReleaseType,
    Series,
    Timeline,
)
from .collections import UserKitCollection
from .gunpla_cards import GunplaCard
from .reviews import Review, ReviewFeedback, ReviewScore
from .uploads import Upload
from .users import User

__all__ = [
    "Build",
    "BuildComment",
    "BuildLike",
    "BuildMilestone",
    "BuildMilestoneUpload",
    "BuildUpload",
    "Grade",
    "GunplaCard",
    "Kit",
    "KitMobileSuit",
    "KitUpload",
    "MobileSuit",
    "ProductLine",
    "ReleaseType",
    "Review",
    "ReviewFeedback",
    "ReviewScore",
    "Series",
    "Timeline",
    "Upload",
    "User",
    "UserKitCollection",
]

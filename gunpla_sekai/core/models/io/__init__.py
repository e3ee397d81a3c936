"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- users: Current user, settings and public profiles
- catalog: Timelines, series, grades, product lines, release types, mobile suits, kits
- uploads: Cloudinary asset records and upload signatures
- collections: Collection entries
- reviews: Reviews, category scores, stats and feedback
- builds: Builds, likes, comments, gallery and share data
- milestones: Build milestones and their images
- gunpla_cards: Saved card images
- search: Search results
"""

from .builds import (
    BuildCreate,
    BuildDetail,
    BuildListItem,
    BuildPage,
    BuildRead,
    BuildUpdate,
    BuildUploadCreate,
    BuildUploadRead,
    CommentInput,
    CommentRead,
    LikeInput,
    LikeState,
    ShareData,
)
from .catalog import (
    FilterData,
    GradeDetail,
    GradeRead,
    KitDetail,
    KitSummary,
    MobileSuitDetail,
    MobileSuitRead,
    NamedRef,
    ProductLineRead,
    ReleaseTypeAnalytics,
    ReleaseTypeRead,
    SeriesDetail,
    SeriesRead,
    TimelineCreate,
    TimelineDetail,
    TimelineRead,
    TimelineUpdate,
)
from .collections import CollectionEntryRead, CollectionStatusInput, KitCollectionStatusRead
from .gunpla_cards import CardCheckRead, CardRead, CardSave, KitMediaRead, UserCardsRead
from .milestones import (
    MilestoneCreate,
    MilestoneImageCreate,
    MilestoneImageRead,
    MilestoneImagesOrder,
    MilestoneImagesSet,
    MilestoneImageUpdate,
    MilestoneOrder,
    MilestoneRead,
    MilestoneUpdate,
)
from .reviews import (
    FeedbackCounts,
    FeedbackInput,
    ReviewCreate,
    ReviewFeedbackRead,
    ReviewRead,
    ReviewStats,
    ReviewUpdate,
)
from .search import SearchResults
from .uploads import UploadCreate, UploadRead, UploadSignatureRead
from .users import CurrentUserRead, UserProfileRead, UserProfileUpdate, UserSettingsRead, UserSummary

__all__ = [
    "BuildCreate",
    "BuildDetail",
    "BuildListItem",
    "BuildPage",
    "BuildRead",
    "BuildUpdate",
    "BuildUploadCreate",
    "BuildUploadRead",
    "CardCheckRead",
    "CardRead",
    "CardSave",
    "CollectionEntryRead",
    "CollectionStatusInput",
    "CommentInput",
    "CommentRead",
    "CurrentUserRead",
    "FeedbackCounts",
    "FeedbackInput",
    "FilterData",
    "GradeDetail",
    "GradeRead",
    "KitCollectionStatusRead",
    "KitDetail",
    "KitMediaRead",
    "KitSummary",
    "LikeInput",
    "LikeState",
    "MilestoneCreate",
    "MilestoneImageCreate",
    "MilestoneImageRead",
    "MilestoneImagesOrder",
    "MilestoneImagesSet",
    "MilestoneImageUpdate",
    "MilestoneOrder",
    "MilestoneRead",
    "MilestoneUpdate",
    "MobileSuitDetail",
    "MobileSuitRead",
    "NamedRef",
    "ProductLineRead",
    "ReleaseTypeAnalytics",
    "ReleaseTypeRead",
    "ReviewCreate",
    "ReviewFeedbackRead",
    "ReviewRead",
    "ReviewStats",
    "ReviewUpdate",
    "SearchResults",
    "SeriesDetail",
    "SeriesRead",
    "ShareData",
    "TimelineCreate",
    "TimelineDetail",
    "TimelineRead",
    "TimelineUpdate",
    "UploadCreate",
    "UploadRead",
    "UploadSignatureRead",
    "UserCardsRead",
    "UserProfileRead",
    "UserProfileUpdate",
    "UserSettingsRead",
    "UserSummary",
]

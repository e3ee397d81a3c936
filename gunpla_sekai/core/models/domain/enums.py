"""Domain enums shared by entities and I/O schemas."""

from __future__ import annotations

from enum import Enum


class CollectionStatus(str, Enum):
    """Where a kit sits in a user's collection."""

    WISHLIST = "WISHLIST"
    PREORDER = "PREORDER"
    BACKLOG = "BACKLOG"
    IN_PROGRESS = "IN_PROGRESS"
    BUILT = "BUILT"


class BuildStatus(str, Enum):
    """Lifecycle of a build log."""

    PLANNING = "PLANNING"  # Default for new builds.
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"


class MilestoneType(str, Enum):
    """Kind of step recorded in a build timeline."""

    ACQUISITION = "ACQUISITION"
    PLANNING = "PLANNING"
    BUILD = "BUILD"
    PAINTING = "PAINTING"
    PANEL_LINING = "PANEL_LINING"
    DECALS = "DECALS"
    TOPCOAT = "TOPCOAT"
    PHOTOGRAPHY = "PHOTOGRAPHY"
    COMPLETION = "COMPLETION"


class ReviewCategory(str, Enum):
    """The six aspects every review scores."""

    BUILD_QUALITY_ENGINEERING = "BUILD_QUALITY_ENGINEERING"
    ARTICULATION_POSEABILITY = "ARTICULATION_POSEABILITY"
    DETAIL_ACCURACY = "DETAIL_ACCURACY"
    AESTHETICS_PROPORTIONS = "AESTHETICS_PROPORTIONS"
    ACCESSORIES_GIMMICKS = "ACCESSORIES_GIMMICKS"
    VALUE_EXPERIENCE = "VALUE_EXPERIENCE"


class KitUploadType(str, Enum):
    """Role of an image attached to a kit."""

    BOX_ART = "BOX_ART"
    PRODUCT_SHOTS = "PRODUCT_SHOTS"
    RUNNERS = "RUNNERS"
    MANUAL = "MANUAL"
    PROTOTYPE = "PROTOTYPE"


class BuildSort(str, Enum):
    """Orderings offered when listing builds."""

    newest = "newest"
    oldest = "oldest"
    completed = "completed"
    status = "status"


class KitSort(str, Enum):
    """Orderings offered by the filtered kit listing."""

    relevance = "relevance"
    name = "name"
    release_date = "release-date"
    rating = "rating"


class SearchSort(str, Enum):
    """Orderings offered by kit search."""

    relevance = "relevance"
    name_asc = "name-asc"
    name_desc = "name-desc"
    release_desc = "release-desc"
    release_asc = "release-asc"
    price_asc = "price-asc"
    price_desc = "price-desc"

"""Search ranking rules for kit suggestions."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence, TypeVar

GRADE_PRIORITY: tuple[str, ...] = ("pg", "mg", "rg", "hg", "eg", "fm")

MODERN_ERA_START_YEAR = 2010

MAX_SUGGESTIONS = 8

VARIANT_KEYWORDS: tuple[str, ...] = (
    "metallic",
    "clear",
    "ver",
    "version",
    "variant",
    "custom",
    "special",
    "plated",
    "titanium",
    "pearl",
    "chrome",
    "gold",
    "silver",
    "transparent",
    "expansion",
    "unit",
    "armor",
    "weapon",
    "accessory",
)


class RankableKit(Protocol):
    release_date: Optional[date | datetime]
    base_kit_id: Optional[str]
    grade_slug: Optional[str]


K = TypeVar("K", bound=RankableKit)


def is_variant_search(query: str) -> bool:
    """True when the query asks for a specific variant rather than the base kit."""
    lowered = query.lower()
    return any(keyword in lowered for keyword in VARIANT_KEYWORDS)


def _era(kit: RankableKit) -> int:
    if kit.release_date is None:
        return 2
    return 0 if kit.release_date.year >= MODERN_ERA_START_YEAR else 1


def _grade_rank(kit: RankableKit) -> int:
    slug = (kit.grade_slug or "").lower()
    return GRADE_PRIORITY.index(slug) if slug in GRADE_PRIORITY else len(GRADE_PRIORITY)


def rank_kits(kits: Sequence[K], prioritize_base_kits: bool, limit: int = MAX_SUGGESTIONS) -> list[K]:
    """Order search hits for display.

    Kits from 2010 onwards come first, then older kits, then undated ones.
    With ``prioritize_base_kits`` each era lists base kits before variants.
    Within a bucket kits are ordered by grade priority; ties keep the
    incoming relevance order.
    """

    def key(kit: K) -> tuple[int, int, int]:
        variant = 1 if (prioritize_base_kits and kit.base_kit_id) else 0
        return (_era(kit), variant, _grade_rank(kit))

    return sorted(kits, key=key)[:limit]

"""Review scoring rules.

A review scores a kit in each of the six ``ReviewCategory`` values on an
integer scale from ``MIN_SCORE`` to ``MAX_SCORE``. The overall score is the mean
of the category scores, rounded to one decimal place.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Protocol, Union

from .enums import ReviewCategory

MIN_SCORE = 1
MAX_SCORE = 10

REQUIRED_CATEGORIES: tuple[ReviewCategory, ...] = tuple(ReviewCategory)

SCORE_LABELS: dict[int, str] = {
    1: "Poor",
    2: "Below Average",
    3: "Average",
    4: "Fair",
    5: "Good",
    6: "Very Good",
    7: "Great",
    8: "Excellent",
    9: "Outstanding",
    10: "Perfect",
}


@dataclass(frozen=True)
class ReviewCategoryInfo:
    category: ReviewCategory
    label: str
    description: str


REVIEW_CATEGORIES: tuple[ReviewCategoryInfo, ...] = (
    ReviewCategoryInfo(
        ReviewCategory.BUILD_QUALITY_ENGINEERING,
        "Build Quality & Engineering",
        "How well the kit fits together, part quality, and engineering design",
    ),
    ReviewCategoryInfo(
        ReviewCategory.ARTICULATION_POSEABILITY,
        "Articulation & Poseability",
        "Range of motion, joint quality, and ability to achieve dynamic poses",
    ),
    ReviewCategoryInfo(
        ReviewCategory.DETAIL_ACCURACY,
        "Detail & Accuracy",
        "Level of detail, accuracy to source material, and surface details",
    ),
    ReviewCategoryInfo(
        ReviewCategory.AESTHETICS_PROPORTIONS,
        "Aesthetics & Proportions",
        "Visual appeal, color accuracy, and proportional correctness",
    ),
    ReviewCategoryInfo(
        ReviewCategory.ACCESSORIES_GIMMICKS,
        "Accessories & Gimmicks",
        "Weapons, accessories, special features, and play value",
    ),
    ReviewCategoryInfo(
        ReviewCategory.VALUE_EXPERIENCE,
        "Value & Experience",
        "Overall value for money and building experience",
    ),
)

Score = Union[int, float]


class ScoreInput(Protocol):
    category: ReviewCategory | str
    score: Score


def get_category_info(category: ReviewCategory | str) -> ReviewCategoryInfo:
    """Look up display info, deriving a title-cased label for unknown values."""
    value = category.value if isinstance(category, ReviewCategory) else str(category)
    for info in REVIEW_CATEGORIES:
        if info.category.value == value:
            return info
    return ReviewCategoryInfo(
        category=category,  # type: ignore[arg-type]
        label=value.replace("_", " ").title(),
        description="No description available",
    )


def get_score_label(score: Score) -> str:
    return SCORE_LABELS.get(score, "Unknown") if float(score).is_integer() else "Unknown"


def is_valid_score(score: Score) -> bool:
    if isinstance(score, bool):
        return False
    return MIN_SCORE <= score <= MAX_SCORE and float(score).is_integer()


def _category_value(category: ReviewCategory | str) -> str:
    return category.value if isinstance(category, ReviewCategory) else str(category)


def _format_score(score: Score) -> str:
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def validate_scores(scores: Iterable[ScoreInput]) -> List[str]:
    """Collect every problem with a set of category scores.

    Returns an empty list when the scores are acceptable.
    """
    scores = list(scores)
    errors: List[str] = []
    provided = [_category_value(s.category) for s in scores]

    missing = [c.value for c in REQUIRED_CATEGORIES if c.value not in provided]
    if missing:
        errors.append(f"Missing required categories: {', '.join(missing)}")

    duplicates = [category for category, count in Counter(provided).items() if count > 1]
    if duplicates:
        errors.append(f"Duplicate categories found: {', '.join(duplicates)}")

    for item in scores:
        if not is_valid_score(item.score):
            errors.append(
                f"Invalid score for {_category_value(item.category)}: {_format_score(item.score)}. "
                f"Must be integer between {MIN_SCORE}-{MAX_SCORE}"
            )

    return errors


def round_to_tenth(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def calculate_overall_score(scores: Iterable[Score]) -> float:
    """Mean rounded to one decimal, or 0 when there is nothing to average."""
    values = [float(s) for s in scores]
    if not values:
        return 0.0
    return round_to_tenth(sum(values) / len(values))

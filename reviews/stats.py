"""Rating statistics for a game's reviews.

Everything here is a pure function of a collection of ratings; nothing is
cached or persisted. A game without reviews has no average (``None``), which
API consumers must not confuse with a low score.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .models import MAX_RATING, MIN_RATING

# Descending, lower bound inclusive.
RATING_TIERS = (
    (9, "Masterpiece"),
    (8, "Excellent"),
    (7, "Very Good"),
    (6, "Good"),
    (4, "Average"),
)
LOWEST_TIER = "Needs Improvement"


def rating_tier(average: Optional[float]) -> Optional[str]:
    """Map an average rating to its display tier, or ``None`` without data."""
    if average is None:
        return None
    for threshold, label in RATING_TIERS:
        if average >= threshold:
            return label
    return LOWEST_TIER


@dataclass(frozen=True)
class RatingStats:
    """Aggregate of a review collection.

    ``distribution[i]`` counts the reviews rated ``i + 1``.
    """

    count: int = 0
    average: Optional[float] = None
    distribution: List[int] = field(default_factory=lambda: [0] * MAX_RATING)

    @property
    def tier(self) -> Optional[str]:
        return rating_tier(self.average)

    def as_dict(self) -> dict:
        return {
            "count": self.count,
            "average": self.average,
            "distribution": list(self.distribution),
            "tier": self.tier,
        }


def compute_rating_stats(ratings: Iterable[int]) -> RatingStats:
    """Compute count, mean and histogram in a single pass over *ratings*.

    Raises ``ValueError`` for a rating outside 1..10; stored reviews can never
    hold one, so this only fires on programming errors.
    """
    distribution = [0] * MAX_RATING
    total = 0
    count = 0
    for rating in ratings:
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating out of range: {rating!r}")
        distribution[rating - 1] += 1
        total += rating
        count += 1

    if count == 0:
        return RatingStats()
    return RatingStats(count=count, average=total / count, distribution=distribution)

"""Discovery query models.

Query models are the caller-facing boundary: malformed input (non-positive
limits, unknown experience brackets or time frames) is rejected here by
Pydantic validation and never reaches the engine.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from advisor_discovery.models.advisor import CatalogModel


class ExperienceLevel(str, Enum):
    """Named experience bracket."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXPERT = "expert"


# Inclusive year ranges; None means unbounded
EXPERIENCE_BRACKETS: dict[ExperienceLevel, tuple[int, Optional[int]]] = {
    ExperienceLevel.ENTRY: (0, 2),
    ExperienceLevel.MID: (3, 5),
    ExperienceLevel.SENIOR: (6, 10),
    ExperienceLevel.EXPERT: (11, None),
}


def years_in_bracket(years: int, level: ExperienceLevel) -> bool:
    """Check whether a year count falls inside a bracket (inclusive)."""
    low, high = EXPERIENCE_BRACKETS[level]
    if years < low:
        return False
    return high is None or years <= high


def bracket_for_years(years: int) -> Optional[ExperienceLevel]:
    """Return the bracket containing ``years``, or None for negative values."""
    for level in EXPERIENCE_BRACKETS:
        if years_in_bracket(years, level):
            return level
    return None


class TimeFrame(str, Enum):
    """Window for popularity scoring."""

    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class SortStrategy(str, Enum):
    """Known ranking strategies.

    ``SearchQuery.sort_by`` is a plain string so that unknown strategy names
    reach the ranking selector, which leaves the order unchanged.
    """

    RELEVANCE = "relevance"
    RATING = "rating"
    EXPERIENCE = "experience"
    NEWEST = "newest"
    NAME = "name"


class AdvisorFilters(CatalogModel):
    """Hard filters shared by listing and search.

    Attributes:
        category: Exact category match (optional)
        featured: Featured flag equality (optional)
        tags: Match-any tag filter (optional)
        team_id: Team affiliation filter (optional)
        experience_level: Experience bracket filter (optional)
        limit: Result cap applied after ordering (optional, positive)
    """

    category: Optional[str] = None
    featured: Optional[bool] = None
    tags: Optional[list[str]] = None
    team_id: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    limit: Optional[int] = Field(default=None, gt=0)


class SearchQuery(AdvisorFilters):
    """Free-text search request.

    Attributes:
        text: Free-text query; empty or absent means filter-only listing
        sort_by: Ranking strategy name (default "relevance")
    """

    text: Optional[str] = None
    sort_by: str = SortStrategy.RELEVANCE.value

    @field_validator("sort_by", mode="before")
    @classmethod
    def coerce_sort_by(cls, v: object) -> object:
        """Accept SortStrategy members as well as raw strings."""
        if isinstance(v, SortStrategy):
            return v.value
        return v

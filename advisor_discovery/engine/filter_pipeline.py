"""Filter Pipeline.

Applies hard predicates to a catalog snapshot before any scoring. Each stage
narrows the candidate list and preserves input order. Visibility (public and
active) is always applied first, whatever the filters say.

Stage order:
    1. visibility + status
    2. featured equality
    3. category equality
    4. team affiliation
    5. tag intersection (match-any)
    6. experience bracket
"""

from typing import Iterable, Optional

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.query import (
    AdvisorFilters,
    ExperienceLevel,
    years_in_bracket,
)
from advisor_discovery.utils.logger import get_logger


def visible_advisors(advisors: Iterable[AdvisorProfile]) -> list[AdvisorProfile]:
    """Keep only public, active advisors."""
    return [a for a in advisors if a.is_visible()]


def matches_featured(advisor: AdvisorProfile, featured: Optional[bool]) -> bool:
    return featured is None or advisor.featured == featured


def matches_category(advisor: AdvisorProfile, category: Optional[str]) -> bool:
    return not category or advisor.effective_category == category


def matches_team(advisor: AdvisorProfile, team_id: Optional[str]) -> bool:
    return not team_id or team_id in advisor.team_ids


def matches_tags(advisor: AdvisorProfile, tags: Optional[list[str]]) -> bool:
    """Match-any tag predicate; an absent or empty tag filter passes."""
    if not tags:
        return True
    return not set(tags).isdisjoint(advisor.tags)


def matches_experience(
    advisor: AdvisorProfile, level: Optional[ExperienceLevel]
) -> bool:
    return level is None or years_in_bracket(advisor.experience_years, level)


def apply_filters(
    advisors: Iterable[AdvisorProfile],
    filters: Optional[AdvisorFilters] = None,
    correlation_id: Optional[str] = None,
) -> list[AdvisorProfile]:
    """Run the full filter pipeline over a catalog snapshot.

    Args:
        advisors: Catalog snapshot (never mutated)
        filters: Optional hard filters; None applies visibility only
        correlation_id: Correlation ID for logging

    Returns:
        Filtered candidates in input order (possibly empty)
    """
    logger = get_logger(
        correlation_id=correlation_id,
        phase="filter",
        component="filter_pipeline",
    )

    candidates = visible_advisors(advisors)
    if filters is None:
        logger.debug("Visibility filter applied", remaining=len(candidates))
        return candidates

    stages = (
        ("featured", lambda a: matches_featured(a, filters.featured)),
        ("category", lambda a: matches_category(a, filters.category)),
        ("team", lambda a: matches_team(a, filters.team_id)),
        ("tags", lambda a: matches_tags(a, filters.tags)),
        ("experience", lambda a: matches_experience(a, filters.experience_level)),
    )

    for stage_name, predicate in stages:
        if not candidates:
            break
        candidates = [a for a in candidates if predicate(a)]
        logger.debug("Filter stage applied", stage=stage_name, remaining=len(candidates))

    return candidates

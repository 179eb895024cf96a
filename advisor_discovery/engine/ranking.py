"""Ranking Strategy Selector.

Orders candidates by a named strategy. All sorts are stable, so ties keep
their input order.

Strategies:
    relevance   descending relevance score
    rating      descending rating stub, then featured first, then newest
    experience  descending derived experience years
    newest      descending creation timestamp
    name        ascending accent- and case-insensitive display name

An unknown strategy name returns the input order unchanged.
"""

import unicodedata
from typing import Callable, Optional, Sequence

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.query import SortStrategy
from advisor_discovery.models.result import ScoredAdvisor
from advisor_discovery.utils.logger import get_logger

SortKey = Callable[[ScoredAdvisor], object]


def rating_score(advisor: AdvisorProfile) -> float:
    """Aggregate review rating for an advisor.

    Extension point: advisor reviews do not feed into ranking yet, so every
    advisor rates 0.0. The ``rating`` strategy therefore falls through to its
    featured/newest tie-breaks. Replace this once approved review aggregates
    are part of the catalog snapshot.
    """
    return 0.0


def name_sort_key(name: str) -> tuple[str, str]:
    """Accent- and case-insensitive collation key for display names.

    Names are decomposed (NFKD) and stripped of combining marks so that
    "Émile" sorts with "Emile"; the original string breaks exact ties.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), name)


SORT_STRATEGIES: dict[str, SortKey] = {
    SortStrategy.RELEVANCE.value: lambda s: -s.score,
    SortStrategy.RATING.value: lambda s: (
        -rating_score(s.advisor),
        not s.advisor.featured,
        -s.advisor.created_at,
    ),
    SortStrategy.EXPERIENCE.value: lambda s: -s.advisor.experience_years,
    SortStrategy.NEWEST.value: lambda s: -s.advisor.created_at,
    SortStrategy.NAME.value: lambda s: name_sort_key(s.advisor.display_name),
}


def sort_advisors(
    candidates: Sequence[ScoredAdvisor],
    sort_by: str,
    correlation_id: Optional[str] = None,
) -> list[ScoredAdvisor]:
    """Order candidates by the named strategy.

    Args:
        candidates: Scored (or uniformly scored) candidates
        sort_by: Strategy name
        correlation_id: Correlation ID for logging

    Returns:
        New list in final order; the input sequence is not modified
    """
    key = SORT_STRATEGIES.get(sort_by)
    if key is None:
        logger = get_logger(
            correlation_id=correlation_id,
            phase="search",
            component="ranking",
        )
        logger.debug("Unknown sort strategy, keeping input order", sort_by=sort_by)
        return list(candidates)

    return sorted(candidates, key=key)

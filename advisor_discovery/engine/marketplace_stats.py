"""Marketplace statistics over visible advisors."""

from collections import Counter
from typing import Iterable, Optional

from advisor_discovery.engine.filter_pipeline import visible_advisors
from advisor_discovery.engine.ranking import rating_score
from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.query import bracket_for_years
from advisor_discovery.models.result import (
    CategoryCount,
    ExperienceDistribution,
    MarketplaceStats,
)


def calculate_marketplace_stats(
    advisors: Iterable[AdvisorProfile], top_n: Optional[int] = None
) -> MarketplaceStats:
    """Aggregate counts for the marketplace overview.

    Args:
        advisors: Catalog snapshot (visibility is applied here)
        top_n: Number of top categories to report (default 5)

    Returns:
        MarketplaceStats with category counts, experience distribution and
        rating placeholders
    """
    if top_n is None:
        top_n = 5

    visible = visible_advisors(advisors)

    # Counter preserves first-seen order, so most_common breaks ties by it
    category_counts = Counter(a.effective_category for a in visible)

    distribution = ExperienceDistribution()
    for advisor in visible:
        level = bracket_for_years(advisor.experience_years)
        if level is not None:
            setattr(distribution, level.value, getattr(distribution, level.value) + 1)

    ratings = [rating_score(a) for a in visible]
    rated = [r for r in ratings if r > 0]
    average_rating = round(sum(rated) / len(rated), 1) if rated else 0.0

    return MarketplaceStats(
        total_advisors=len(visible),
        featured_advisors=sum(1 for a in visible if a.featured),
        category_counts=dict(category_counts),
        average_rating=average_rating,
        rated_advisors=len(rated),
        experience_distribution=distribution,
        top_categories=[
            CategoryCount(category=category, count=count)
            for category, count in category_counts.most_common(top_n)
        ],
    )

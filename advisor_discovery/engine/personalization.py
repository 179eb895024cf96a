"""Personalization Engine.

Builds a preference profile from a user's selection history and scores
candidates against it:

    +featured_boost            featured advisor
    +category_match            category among the user's chosen categories
    +max(0, proximity_max - |years - user_max_years|)
                               experience proximity (needs history)
    +recency_boost             created within the recency window

Anonymous callers and users without history get an empty profile, so only
the featured and recency bonuses apply.
"""

from typing import Iterable, Mapping, Optional, Sequence

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.config import SuggestionWeights
from advisor_discovery.models.result import ScoredAdvisor
from advisor_discovery.models.selection import SelectionEvent, UserPreferenceProfile
from advisor_discovery.utils.clock import DAY_MS
from advisor_discovery.utils.logger import get_logger


def build_preference_profile(
    user_selections: Iterable[SelectionEvent],
    advisors_by_id: Mapping[str, AdvisorProfile],
) -> UserPreferenceProfile:
    """Derive preferences from the advisors a user has selected.

    Selections that point at advisors missing from the catalog are ignored.

    Args:
        user_selections: One user's selection events
        advisors_by_id: Full catalog keyed by advisor id

    Returns:
        UserPreferenceProfile (empty when nothing resolves)
    """
    categories: set[str] = set()
    max_years: Optional[int] = None

    for event in user_selections:
        advisor = advisors_by_id.get(event.advisor_id)
        if advisor is None:
            continue
        categories.add(advisor.effective_category)
        years = advisor.experience_years
        max_years = years if max_years is None else max(max_years, years)

    return UserPreferenceProfile(
        categories=frozenset(categories), max_experience_years=max_years
    )


def suggestion_score(
    advisor: AdvisorProfile,
    profile: UserPreferenceProfile,
    now_ms: int,
    weights: Optional[SuggestionWeights] = None,
) -> int:
    """Score one candidate against a preference profile.

    Args:
        advisor: Candidate advisor
        profile: User preference profile (may be empty)
        now_ms: Current time in epoch milliseconds
        weights: Suggestion weights (defaults apply when None)

    Returns:
        Non-negative integer suggestion score
    """
    if weights is None:
        weights = SuggestionWeights()

    score = 0

    if advisor.featured:
        score += weights.featured_boost

    if advisor.effective_category in profile.categories:
        score += weights.category_match

    if profile.max_experience_years is not None:
        gap = abs(advisor.experience_years - profile.max_experience_years)
        score += max(0, weights.experience_proximity_max - gap)

    if now_ms - advisor.created_at <= weights.recency_days * DAY_MS:
        score += weights.recency_boost

    return score


def score_suggestions(
    candidates: Sequence[AdvisorProfile],
    user_selections: Sequence[SelectionEvent],
    advisors_by_id: Mapping[str, AdvisorProfile],
    now_ms: int,
    exclude_selected: bool = False,
    weights: Optional[SuggestionWeights] = None,
    correlation_id: Optional[str] = None,
) -> list[ScoredAdvisor]:
    """Score candidates for one user, descending by suggestion score.

    Args:
        candidates: Visible candidates
        user_selections: The caller's selection events (empty for anonymous)
        advisors_by_id: Full catalog keyed by advisor id
        now_ms: Current time in epoch milliseconds
        exclude_selected: Drop advisors the user already selected
        weights: Suggestion weights (defaults apply when None)
        correlation_id: Correlation ID for logging

    Returns:
        Scored candidates, descending by score (ties keep candidate order)
    """
    logger = get_logger(
        correlation_id=correlation_id,
        phase="suggest",
        component="personalization",
    )

    if exclude_selected and user_selections:
        selected_ids = {event.advisor_id for event in user_selections}
        candidates = [a for a in candidates if a.id not in selected_ids]

    profile = build_preference_profile(user_selections, advisors_by_id)

    scored = [
        ScoredAdvisor(advisor=a, score=suggestion_score(a, profile, now_ms, weights))
        for a in candidates
    ]
    scored.sort(key=lambda s: -s.score)

    logger.debug(
        "Suggestion scoring complete",
        candidates=len(scored),
        preferred_categories=len(profile.categories),
        has_history=not profile.is_empty(),
    )
    return scored

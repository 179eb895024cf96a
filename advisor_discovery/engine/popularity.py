"""Popularity Scorer.

Ranks advisors by how often they were selected, weighting selections inside
the chosen time window more heavily than lifetime selections:

    score = recent_selections * recent_weight + total_selections * total_weight

``recent_weight`` is 2 for bounded windows (week, month) and 1 for ``all``.
Popularity listings always order by this score and bypass the ranking
strategy selector.
"""

from collections import Counter
from typing import Iterable, Optional, Sequence

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.config import PopularityWeights
from advisor_discovery.models.query import TimeFrame
from advisor_discovery.models.result import PopularityScore
from advisor_discovery.models.selection import SelectionEvent
from advisor_discovery.utils.clock import DAY_MS
from advisor_discovery.utils.logger import get_logger


def time_cutoff(
    time_frame: TimeFrame, now_ms: int, weights: Optional[PopularityWeights] = None
) -> int:
    """Compute the inclusive lower bound of the popularity window.

    Args:
        time_frame: Window selector
        now_ms: Current time in epoch milliseconds
        weights: Window lengths (defaults apply when None)

    Returns:
        Cutoff timestamp in epoch milliseconds (0 for ``all``)
    """
    if weights is None:
        weights = PopularityWeights()

    if time_frame == TimeFrame.WEEK:
        return now_ms - weights.week_days * DAY_MS
    if time_frame == TimeFrame.MONTH:
        return now_ms - weights.month_days * DAY_MS
    return 0


def popularity_score(
    recent_selections: int,
    total_selections: int,
    time_frame: TimeFrame,
    weights: Optional[PopularityWeights] = None,
) -> float:
    if weights is None:
        weights = PopularityWeights()

    if time_frame == TimeFrame.ALL:
        recent_weight = weights.all_time_recent_weight
    else:
        recent_weight = weights.bounded_recent_weight

    return recent_selections * recent_weight + total_selections * weights.total_weight


def score_popularity(
    candidates: Sequence[AdvisorProfile],
    selections: Iterable[SelectionEvent],
    time_frame: TimeFrame,
    now_ms: int,
    weights: Optional[PopularityWeights] = None,
    correlation_id: Optional[str] = None,
) -> list[PopularityScore]:
    """Score and order candidates by popularity.

    Args:
        candidates: Visible candidates
        selections: Selection history for all users
        time_frame: Window selector
        now_ms: Current time in epoch milliseconds
        weights: Popularity weights (defaults apply when None)
        correlation_id: Correlation ID for logging

    Returns:
        Candidates with selection counts and scores, descending by score
        (ties keep candidate order)
    """
    logger = get_logger(
        correlation_id=correlation_id,
        phase="popular",
        component="popularity",
    )

    cutoff = time_cutoff(time_frame, now_ms, weights)
    candidate_ids = {a.id for a in candidates}

    totals: Counter[str] = Counter()
    recents: Counter[str] = Counter()
    for event in selections:
        if event.advisor_id not in candidate_ids:
            continue
        totals[event.advisor_id] += 1
        if event.selected_at >= cutoff:
            recents[event.advisor_id] += 1

    scored = [
        PopularityScore(
            advisor=a,
            total_selections=totals[a.id],
            recent_selections=recents[a.id],
            score=popularity_score(recents[a.id], totals[a.id], time_frame, weights),
        )
        for a in candidates
    ]
    scored.sort(key=lambda p: -p.score)

    logger.debug(
        "Popularity scoring complete",
        candidates=len(scored),
        time_frame=time_frame.value,
        cutoff=cutoff,
    )
    return scored

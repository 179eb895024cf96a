"""Text Relevance Scorer.

Field-weighted term matching over an advisor's searchable text. Scores are
raw non-negative integers comparable only within one query execution; no
length or term-count normalization is applied.

Scoring for a normalized query ``q`` split into terms:
    +name_match       if ``q`` is a substring of the display name
    +title_match      if ``q`` is a substring of the persona title
    +term_occurrence  per occurrence of each term in the concatenated text
    +specialty_match  per term found inside any specialty (once per term)
    +expertise_match  per term found inside any expertise entry (once per term)
    +featured_boost   once, for featured advisors

An empty query scores every candidate exactly 1 so filter-only listings can
route through the same scorer.
"""

from typing import Iterable, Optional

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.config import RelevanceWeights
from advisor_discovery.models.result import ScoredAdvisor
from advisor_discovery.utils.logger import get_logger

EMPTY_QUERY_SCORE = 1


def normalize_query(text: Optional[str]) -> str:
    """Lower-case and trim a raw query string (None becomes empty)."""
    if text is None:
        return ""
    return text.strip().lower()


def query_terms(query: str) -> list[str]:
    """Split a normalized query on spaces, dropping empty terms."""
    return [term for term in query.split(" ") if term]


def searchable_text(advisor: AdvisorProfile) -> str:
    """Concatenate every searchable field into one lower-cased string."""
    persona = advisor.persona
    parts = [
        advisor.display_name,
        persona.title,
        persona.description or "",
        persona.one_liner or "",
        *persona.specialties,
        *persona.expertise,
        *advisor.tags,
        advisor.effective_category,
    ]
    return " ".join(parts).lower()


def calculate_relevance_score(
    advisor: AdvisorProfile,
    query: str,
    weights: Optional[RelevanceWeights] = None,
) -> int:
    """Score one advisor against a normalized query.

    Args:
        advisor: Candidate advisor
        query: Lower-cased, trimmed query string
        weights: Scoring weights (defaults apply when None)

    Returns:
        Non-negative integer relevance score
    """
    if not query:
        return EMPTY_QUERY_SCORE

    if weights is None:
        weights = RelevanceWeights()

    score = 0

    if query in advisor.display_name.lower():
        score += weights.name_match
    if query in advisor.persona.title.lower():
        score += weights.title_match

    text = searchable_text(advisor)
    specialties = [s.lower() for s in advisor.persona.specialties]
    expertise = [e.lower() for e in advisor.persona.expertise]

    for term in query_terms(query):
        score += text.count(term) * weights.term_occurrence

        if any(term in specialty for specialty in specialties):
            score += weights.specialty_match

        if any(term in entry for entry in expertise):
            score += weights.expertise_match

    if advisor.featured:
        score += weights.featured_boost

    return score


def score_candidates(
    candidates: Iterable[AdvisorProfile],
    query: str,
    weights: Optional[RelevanceWeights] = None,
    correlation_id: Optional[str] = None,
) -> list[ScoredAdvisor]:
    """Score candidates and drop those that do not match.

    A non-empty query acts as an implicit filter: zero-score candidates are
    excluded rather than ranked last. Input order is preserved.

    Args:
        candidates: Filtered candidates
        query: Lower-cased, trimmed query string
        weights: Scoring weights (defaults apply when None)
        correlation_id: Correlation ID for logging

    Returns:
        Matching candidates with their scores
    """
    logger = get_logger(
        correlation_id=correlation_id,
        phase="search",
        component="text_relevance",
    )

    scored = [
        ScoredAdvisor(advisor=a, score=calculate_relevance_score(a, query, weights))
        for a in candidates
    ]
    matches = [s for s in scored if s.score > 0]

    logger.debug(
        "Relevance scoring complete",
        candidates=len(scored),
        matches=len(matches),
        terms=len(query_terms(query)),
    )
    return matches

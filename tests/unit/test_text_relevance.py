"""Unit tests for text relevance scoring."""

import pytest

from advisor_discovery.engine.text_relevance import (
    EMPTY_QUERY_SCORE,
    calculate_relevance_score,
    normalize_query,
    query_terms,
    score_candidates,
    searchable_text,
)
from advisor_discovery.models.config import RelevanceWeights


@pytest.mark.parametrize(
    "raw,expected",
    [("  Fundraising ", "fundraising"), ("", ""), ("   ", ""), (None, "")],
)
def test_normalize_query(raw, expected):
    assert normalize_query(raw) == expected


def test_query_terms_drop_empty_tokens():
    assert query_terms("pitch  decks") == ["pitch", "decks"]


def test_searchable_text_includes_all_fields(make_advisor):
    """Test searchable text covers persona, tags and effective category."""
    advisor = make_advisor(
        description="Helps founders",
        one_liner="Ship it",
        specialties=["Pricing"],
        expertise=["SaaS"],
        tags=["B2B"],
    )

    text = searchable_text(advisor)

    for fragment in (
        "jordan lee",
        "growth advisor",
        "helps founders",
        "ship it",
        "pricing",
        "saas",
        "b2b",
        "general",
    ):
        assert fragment in text
    assert text == text.lower()


def test_specialty_match_on_featured_advisor(make_advisor):
    """Test a featured advisor matching one specialty term scores 60."""
    advisor = make_advisor(specialties=["fundraising", "pitch decks"], featured=True)

    score = calculate_relevance_score(advisor, "fundraising")

    # 1 occurrence (10) + specialty (30) + featured (20)
    assert score == 60


def test_name_match(make_advisor):
    """Test a query contained in the display name gets the name bonus."""
    advisor = make_advisor(name="Jordan Lee")

    score = calculate_relevance_score(advisor, "jordan")

    # name (100) + 1 occurrence in the display name (10)
    assert score == 110


def test_name_match_featured_with_repeated_term(make_advisor):
    advisor = make_advisor(
        name="Sam Rivera",
        description="Sam mentors early founders",
        featured=True,
    )

    score = calculate_relevance_score(advisor, "sam")

    # name (100) + 2 occurrences (20) + featured (20)
    assert score == 140


def test_title_match(make_advisor):
    advisor = make_advisor(title="Growth Advisor")

    # title (80) + one occurrence of each term (10 + 10)
    assert calculate_relevance_score(advisor, "growth advisor") == 80 + 10 + 10


def test_expertise_counts_once_per_term(make_advisor):
    """Test expertise bonus applies once per term, not per entry."""
    advisor = make_advisor(expertise=["go-to-market", "market sizing"])

    score = calculate_relevance_score(advisor, "market")

    # 2 occurrences (20) + expertise (25)
    assert score == 45


def test_substring_occurrences_are_counted(make_advisor):
    advisor = make_advisor(tags=["ops", "devops"])

    # "ops" appears in both tags
    assert calculate_relevance_score(advisor, "ops") == 20


def test_empty_query_scores_one(make_advisor):
    advisor = make_advisor(featured=True)
    assert calculate_relevance_score(advisor, "") == EMPTY_QUERY_SCORE == 1


def test_no_match_scores_zero(make_advisor):
    assert calculate_relevance_score(make_advisor(), "blockchain") == 0


def test_featured_boost_applies_without_text_match(make_advisor):
    """Test featured advisors keep a positive score for unrelated queries."""
    advisor = make_advisor(featured=True)

    score = calculate_relevance_score(advisor, "blockchain")

    assert score == 20


def test_custom_weights(make_advisor):
    advisor = make_advisor(specialties=["fundraising"])
    weights = RelevanceWeights(term_occurrence=1, specialty_match=2)

    assert calculate_relevance_score(advisor, "fundraising", weights) == 3


def test_score_candidates_drops_non_matches(make_advisor):
    """Test zero-score candidates are excluded and order is preserved."""
    advisors = [
        make_advisor("a", specialties=["pricing"]),
        make_advisor("b"),
        make_advisor("c", tags=["pricing"]),
    ]

    scored = score_candidates(advisors, "pricing")

    assert [s.advisor.id for s in scored] == ["a", "c"]
    assert all(s.score > 0 for s in scored)


def test_score_candidates_empty_query_keeps_all(make_advisor):
    advisors = [make_advisor("a"), make_advisor("b")]

    scored = score_candidates(advisors, "")

    assert [s.score for s in scored] == [1, 1]


@pytest.mark.parametrize(
    "extra",
    [
        {"tags": ["fundraising"]},
        {"description": "Fundraising coach"},
        {"one_liner": "Fundraising done right"},
        {"expertise": ["fundraising"]},
        {"category": "fundraising"},
        {"name": "Fundraising Fran"},
        {"title": "Fundraising Lead"},
    ],
)
@pytest.mark.parametrize("query", ["fundraising", "fundraising pitch"])
def test_extra_occurrence_never_lowers_score(make_advisor, extra, query):
    """Test one more matching field raises the score and never lowers it."""
    base = make_advisor(specialties=["fundraising", "pitch decks"])
    richer = make_advisor(specialties=["fundraising", "pitch decks"], **extra)

    before = calculate_relevance_score(base, query)
    after = calculate_relevance_score(richer, query)

    assert after > before

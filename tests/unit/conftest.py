"""
Unit Test Configuration

Shared factories for advisor catalog fixtures. Every test pins ``NOW_MS`` so
time-dependent scoring is deterministic.
"""

from typing import Any, Callable

import pytest

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.selection import SelectionEvent

NOW_MS = 1_760_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


def build_advisor(
    advisor_id: str = "adv-1",
    name: str = "Jordan Lee",
    title: str = "Growth Advisor",
    **overrides: Any,
) -> AdvisorProfile:
    """Build a visible advisor; keyword overrides go to the record or persona."""
    persona_keys = {"description", "one_liner", "experience", "specialties", "expertise"}
    persona: dict[str, Any] = {"name": name, "title": title}
    record: dict[str, Any] = {
        "id": advisor_id,
        "is_public": True,
        "status": "active",
        "created_at": NOW_MS - 365 * DAY_MS,
    }
    for key, value in overrides.items():
        if key in persona_keys:
            persona[key] = value
        else:
            record[key] = value
    record["persona"] = persona
    return AdvisorProfile.model_validate(record)


def build_selection(
    advisor_id: str,
    user_id: str = "user-1",
    days_ago: float = 1,
    **overrides: Any,
) -> SelectionEvent:
    return SelectionEvent(
        user_id=user_id,
        advisor_id=advisor_id,
        selected_at=int(NOW_MS - days_ago * DAY_MS),
        **overrides,
    )


@pytest.fixture
def make_advisor() -> Callable[..., AdvisorProfile]:
    """Factory fixture for AdvisorProfile records."""
    return build_advisor


@pytest.fixture
def make_selection() -> Callable[..., SelectionEvent]:
    """Factory fixture for SelectionEvent records."""
    return build_selection


@pytest.fixture
def now_ms() -> int:
    return NOW_MS

"""
Integration tests for discovery over an on-disk JSONL catalog.

Covers the full path: validate export -> load snapshot -> discovery operations.
Mark integration tests with @pytest.mark.integration
"""

import json
from pathlib import Path
from typing import Any

import pytest

from advisor_discovery.discovery import DiscoveryService
from advisor_discovery.models.config import DiscoveryParams
from advisor_discovery.models.query import AdvisorFilters, SearchQuery, TimeFrame
from advisor_discovery.utils.catalog_store import JsonlCatalogStore
from advisor_discovery.utils.clock import DAY_MS
from advisor_discovery.utils.validator import ConfigValidator

NOW_MS = 1_760_000_000_000


def _advisor(advisor_id: str, name: str, **fields: Any) -> dict[str, Any]:
    persona = {
        "name": name,
        "title": fields.pop("title", "Advisor"),
        "specialties": fields.pop("specialties", []),
        "expertise": fields.pop("expertise", []),
        "experience": fields.pop("experience", None),
    }
    record = {
        "id": advisor_id,
        "isPublic": True,
        "status": "active",
        "createdAt": NOW_MS - 200 * DAY_MS,
        "persona": persona,
    }
    record.update(fields)
    return record


def _write_jsonl(path: Path, records: list[dict[str, Any]]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record) + "\n")


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Write a marketplace export with advisors, selections and team templates."""
    _write_jsonl(
        tmp_path / "advisors.jsonl",
        [
            _advisor(
                "jordan",
                "Jordan Lee",
                title="Growth Advisor",
                category="marketing",
                specialties=["fundraising", "pitch decks"],
                featured=True,
                experience="8 years",
                tags=["saas", "b2b"],
                metadata={"teamAffiliations": [{"teamId": "startup-team"}]},
            ),
            _advisor(
                "priya",
                "Priya Shah",
                title="Fractional CFO",
                category="finance",
                specialties=["fundraising", "financial modeling"],
                expertise=["venture debt"],
                experience="15+ years",
                tags=["fintech"],
                createdAt=NOW_MS - 3 * DAY_MS,
                metadata={"teamAffiliations": [{"teamId": "startup-team"}]},
            ),
            _advisor(
                "sam",
                "Sam Rivera",
                title="Legal Counsel",
                category="legal",
                experience="4 years",
            ),
            _advisor(
                "draft",
                "Draft Advisor",
                specialties=["fundraising"],
                isPublic=False,
            ),
        ],
    )
    _write_jsonl(
        tmp_path / "selections.jsonl",
        [
            {"userId": "founder", "advisorId": "priya", "selectedAt": NOW_MS - DAY_MS},
            {"userId": "other", "advisorId": "priya", "selectedAt": NOW_MS - 2 * DAY_MS},
            {"userId": "other", "advisorId": "sam", "selectedAt": NOW_MS - 90 * DAY_MS},
            {"userId": "other", "advisorId": "draft", "selectedAt": NOW_MS - DAY_MS},
            {
                "userId": "founder",
                "advisorId": "jordan",
                "selectedAt": NOW_MS - DAY_MS,
                "source": "team",
                "teamId": "startup-team",
            },
        ],
    )
    _write_jsonl(
        tmp_path / "team_templates.jsonl",
        [
            {
                "id": "marketing-team",
                "name": "Marketing Team",
                "category": "marketing",
                "advisorIds": ["jordan"],
            },
            {
                "id": "startup-team",
                "name": "Startup Founding Team",
                "category": "startup",
                "advisorIds": ["jordan", "priya"],
                "featured": True,
                "sortOrder": 1,
            },
        ],
    )
    return tmp_path


@pytest.fixture
def service(catalog_dir: Path) -> DiscoveryService:
    store = JsonlCatalogStore(catalog_dir, validate_records=True)
    return DiscoveryService(store, params=DiscoveryParams(), correlation_id="it-run")


@pytest.mark.integration
def test_export_passes_schema_validation(catalog_dir: Path) -> None:
    # Act
    results = ConfigValidator().validate_all_configs(catalog_dir)

    # Assert
    assert results["advisor_count"] == 4


@pytest.mark.integration
def test_search_over_jsonl_catalog(service: DiscoveryService) -> None:
    # Act
    results = service.search(SearchQuery(text="fundraising"))

    # Assert
    # jordan: 10 + 30 + featured 20; priya: 10 + 30
    assert [(r.id, r.relevance_score) for r in results] == [
        ("jordan", 60),
        ("priya", 40),
    ]
    dumped = results[0].model_dump(by_alias=True)
    assert dumped["relevanceScore"] == 60
    assert dumped["experienceYears"] == 8


@pytest.mark.integration
def test_team_filter_and_tags(service: DiscoveryService) -> None:
    # Act
    team = service.list_advisors(AdvisorFilters(team_id="startup-team"))
    tagged = service.search(SearchQuery(tags=["fintech", "b2b"], sort_by="newest"))

    # Assert
    assert [r.id for r in team] == ["jordan", "priya"]
    assert [r.id for r in tagged] == ["priya", "jordan"]


@pytest.mark.integration
def test_suggestions_for_returning_user(service: DiscoveryService) -> None:
    # Act
    results = service.suggest(user_id="founder", exclude_selected=True, now_ms=NOW_MS)

    # Assert
    # founder picked priya (finance, 15y) and jordan (marketing, 8y)
    # sam: proximity max(0, 20 - 11)
    assert [(r.id, r.suggestion_score) for r in results] == [("sam", 9)]


@pytest.mark.integration
def test_popular_this_week(service: DiscoveryService) -> None:
    # Act
    results = service.popular(time_frame=TimeFrame.WEEK, now_ms=NOW_MS)

    # Assert
    assert [r.id for r in results] == ["priya", "jordan", "sam"]


@pytest.mark.integration
def test_stats_templates_and_board(service: DiscoveryService) -> None:
    # Act
    stats = service.stats()
    templates = service.team_templates()
    board = service.board("founder")

    # Assert
    assert stats.total_advisors == 3
    assert stats.experience_distribution.expert == 1
    assert [t.id for t in templates] == ["startup-team", "marketing-team"]
    assert [(e.id, e.selection_source.value) for e in board] == [
        ("priya", "marketplace"),
        ("jordan", "team"),
    ]


@pytest.mark.integration
@pytest.mark.slow
def test_large_catalog_search_is_bounded(tmp_path: Path) -> None:
    """Search over a few thousand advisors honours limit and visibility."""
    # Arrange
    records = [
        _advisor(
            f"adv-{i}",
            f"Advisor {i}",
            category="growth" if i % 2 else "finance",
            specialties=["fundraising"] if i % 3 == 0 else ["hiring"],
            isPublic=i % 10 != 0,
        )
        for i in range(3000)
    ]
    _write_jsonl(tmp_path / "advisors.jsonl", records)
    service = DiscoveryService(JsonlCatalogStore(tmp_path))

    # Act
    results = service.search(SearchQuery(text="fundraising", category="finance", limit=25))

    # Assert
    assert len(results) == 25
    assert all(r.category == "finance" for r in results)
    assert all(int(r.id.split("-")[1]) % 10 != 0 for r in results)

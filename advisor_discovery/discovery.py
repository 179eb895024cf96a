"""
Discovery Service Module

Entry operations of the advisor discovery engine. Every operation is a pure
function of an explicit catalog snapshot and its arguments; the
``DiscoveryService`` class adds a catalog store, configured parameters and
input validation on top, for callers that want a single object.

Pipelines:
    list_advisors  filter -> limit
    search         filter -> text relevance (drops zero scores) -> ranking -> limit
    suggest        visibility -> personalization -> descending score -> limit
    popular        visibility -> popularity -> descending score -> limit
"""

import uuid
from pathlib import Path
from typing import Optional, Sequence, TypeVar

from advisor_discovery.engine.filter_pipeline import apply_filters, visible_advisors
from advisor_discovery.engine.marketplace_stats import calculate_marketplace_stats
from advisor_discovery.engine.personalization import score_suggestions
from advisor_discovery.engine.popularity import score_popularity
from advisor_discovery.engine.ranking import sort_advisors
from advisor_discovery.engine.team_templates import list_team_templates
from advisor_discovery.engine.text_relevance import normalize_query, score_candidates
from advisor_discovery.models.config import DiscoveryParams
from advisor_discovery.models.query import AdvisorFilters, SearchQuery, TimeFrame
from advisor_discovery.models.result import BoardEntry, MarketplaceStats, RankedResult
from advisor_discovery.models.team import TeamTemplate
from advisor_discovery.utils.catalog_store import (
    CatalogSnapshot,
    CatalogStore,
    JsonlCatalogStore,
)
from advisor_discovery.utils.clock import current_time_ms
from advisor_discovery.utils.logger import configure_logging, get_logger

T = TypeVar("T")


def apply_limit(items: Sequence[T], limit: Optional[int]) -> list[T]:
    """Cap a finished ordering at ``limit`` items (None keeps everything)."""
    if limit is None:
        return list(items)
    return list(items[:limit])


def list_advisors(
    snapshot: CatalogSnapshot,
    filters: Optional[AdvisorFilters] = None,
    correlation_id: Optional[str] = None,
) -> list[RankedResult]:
    """List visible advisors matching hard filters, in catalog order.

    Args:
        snapshot: Catalog snapshot
        filters: Hard filters (visibility only when None)
        correlation_id: Correlation ID for logging

    Returns:
        Unscored results, capped at ``filters.limit``
    """
    candidates = apply_filters(snapshot.advisors, filters, correlation_id)
    limit = filters.limit if filters is not None else None
    return [RankedResult.from_advisor(a) for a in apply_limit(candidates, limit)]


def search(
    snapshot: CatalogSnapshot,
    query: SearchQuery,
    params: Optional[DiscoveryParams] = None,
    correlation_id: Optional[str] = None,
) -> list[RankedResult]:
    """Free-text search with hard filters and a ranking strategy.

    Args:
        snapshot: Catalog snapshot
        query: Search request
        params: Engine parameters (defaults apply when None)
        correlation_id: Correlation ID for logging

    Returns:
        Results carrying ``relevance_score``, in strategy order
    """
    if params is None:
        params = DiscoveryParams()

    candidates = apply_filters(snapshot.advisors, query, correlation_id)
    scored = score_candidates(
        candidates,
        normalize_query(query.text),
        weights=params.relevance,
        correlation_id=correlation_id,
    )
    ranked = sort_advisors(scored, query.sort_by, correlation_id)

    return [
        RankedResult.from_advisor(s.advisor, relevance_score=s.score)
        for s in apply_limit(ranked, query.limit)
    ]


def suggest(
    snapshot: CatalogSnapshot,
    user_id: Optional[str] = None,
    limit: Optional[int] = None,
    exclude_selected: bool = False,
    now_ms: Optional[int] = None,
    params: Optional[DiscoveryParams] = None,
    correlation_id: Optional[str] = None,
) -> list[RankedResult]:
    """Personalized advisor suggestions.

    Args:
        snapshot: Catalog snapshot
        user_id: Caller identity (None for anonymous callers)
        limit: Result cap (default from params, 6)
        exclude_selected: Drop advisors the caller already selected
        now_ms: Current time in epoch milliseconds (wall clock when None)
        params: Engine parameters (defaults apply when None)
        correlation_id: Correlation ID for logging

    Returns:
        Results carrying ``suggestion_score``, descending by score
    """
    if params is None:
        params = DiscoveryParams()
    if now_ms is None:
        now_ms = current_time_ms()
    if limit is None:
        limit = params.result_defaults.suggestion_limit

    scored = score_suggestions(
        visible_advisors(snapshot.advisors),
        snapshot.selections_for_user(user_id),
        snapshot.advisors_by_id,
        now_ms,
        exclude_selected=exclude_selected,
        weights=params.suggestions,
        correlation_id=correlation_id,
    )

    return [
        RankedResult.from_advisor(s.advisor, suggestion_score=s.score)
        for s in apply_limit(scored, limit)
    ]


def popular(
    snapshot: CatalogSnapshot,
    time_frame: TimeFrame = TimeFrame.MONTH,
    limit: Optional[int] = None,
    now_ms: Optional[int] = None,
    params: Optional[DiscoveryParams] = None,
    correlation_id: Optional[str] = None,
) -> list[RankedResult]:
    """Most selected advisors, favouring activity inside the time window.

    Args:
        snapshot: Catalog snapshot
        time_frame: Popularity window (default month)
        limit: Result cap (default from params, 10)
        now_ms: Current time in epoch milliseconds (wall clock when None)
        params: Engine parameters (defaults apply when None)
        correlation_id: Correlation ID for logging

    Returns:
        Unscored results in descending popularity order
    """
    if params is None:
        params = DiscoveryParams()
    if now_ms is None:
        now_ms = current_time_ms()
    if limit is None:
        limit = params.result_defaults.popular_limit

    scored = score_popularity(
        visible_advisors(snapshot.advisors),
        snapshot.selections,
        time_frame,
        now_ms,
        weights=params.popularity,
        correlation_id=correlation_id,
    )
    return [RankedResult.from_advisor(p.advisor) for p in apply_limit(scored, limit)]


def user_board(
    snapshot: CatalogSnapshot, user_id: Optional[str]
) -> list[BoardEntry]:
    """Advisors a user has selected, in selection-history order.

    Selections of advisors missing from the catalog are skipped. Anonymous
    callers have an empty board.
    """
    entries: list[BoardEntry] = []
    for event in snapshot.selections_for_user(user_id):
        advisor = snapshot.advisor_by_id(event.advisor_id)
        if advisor is None:
            continue
        base = RankedResult.from_advisor(advisor)
        entries.append(
            BoardEntry(
                **base.model_dump(),
                selected_at=event.selected_at,
                selection_source=event.source,
                team_id=event.team_id,
            )
        )
    return entries


class DiscoveryService:
    """
    Caller-facing discovery API over a catalog store.

    Takes a fresh snapshot per call and validates raw caller input
    (limits, time frames) before it reaches the engine.
    """

    def __init__(
        self,
        store: CatalogStore,
        params: Optional[DiscoveryParams] = None,
        correlation_id: Optional[str] = None,
    ):
        """
        Initialize DiscoveryService.

        Args:
            store: Catalog store supplying snapshots
            params: Engine parameters (defaults apply when None)
            correlation_id: Correlation ID for logging (auto-generated if None)
        """
        if correlation_id is None:
            correlation_id = str(uuid.uuid4())

        self.store = store
        self.params = params if params is not None else DiscoveryParams()
        self.correlation_id = correlation_id

    @classmethod
    def from_config(
        cls,
        catalog_dir: str | Path = "data/catalog",
        config_path: str | Path | None = None,
        log_file: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> "DiscoveryService":
        """
        Build a service over a JSONL catalog export using file configuration.

        Loads discovery parameters (see ``DiscoveryParams.load``), applies
        their log level and validates advisor records against the schema
        on every snapshot.

        Args:
            catalog_dir: Directory containing the catalog JSONL files
            config_path: Path to discovery_params.json (env/default if None)
            log_file: Optional log file in addition to stdout
            correlation_id: Correlation ID for logging (auto-generated if None)

        Raises:
            FileNotFoundError: If the parameters file doesn't exist
            ValueError: If parameter validation fails
        """
        params = DiscoveryParams.load(config_path)
        configure_logging(log_file=log_file, log_level=params.log_level)

        store = JsonlCatalogStore(catalog_dir, validate_records=True)
        service = cls(store, params=params, correlation_id=correlation_id)
        service._logger("init").info(
            "Discovery service configured",
            catalog_dir=str(catalog_dir),
            log_level=params.log_level,
        )
        return service

    def _logger(self, phase: str):
        return get_logger(
            correlation_id=self.correlation_id,
            phase=phase,
            component="discovery_service",
        )

    @staticmethod
    def _validate_limit(limit: Optional[int]) -> None:
        if limit is not None and limit <= 0:
            raise ValueError(f"limit must be a positive integer, got {limit}")

    def list_advisors(
        self, filters: Optional[AdvisorFilters] = None
    ) -> list[RankedResult]:
        logger = self._logger("list")
        results = list_advisors(self.store.snapshot(), filters, self.correlation_id)
        logger.info("Advisors listed", results=len(results))
        return results

    def search(self, query: SearchQuery) -> list[RankedResult]:
        logger = self._logger("search")
        results = search(
            self.store.snapshot(), query, self.params, self.correlation_id
        )
        logger.info(
            "Search completed",
            has_text=bool(normalize_query(query.text)),
            sort_by=query.sort_by,
            results=len(results),
        )
        return results

    def suggest(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = None,
        exclude_selected: bool = False,
        now_ms: Optional[int] = None,
    ) -> list[RankedResult]:
        """
        Personalized suggestions for a user.

        Raises:
            ValueError: If limit is not a positive integer
        """
        self._validate_limit(limit)
        logger = self._logger("suggest")
        results = suggest(
            self.store.snapshot(),
            user_id=user_id,
            limit=limit,
            exclude_selected=exclude_selected,
            now_ms=now_ms,
            params=self.params,
            correlation_id=self.correlation_id,
        )
        logger.info(
            "Suggestions computed",
            user_id=user_id,
            exclude_selected=exclude_selected,
            results=len(results),
        )
        return results

    def popular(
        self,
        time_frame: TimeFrame | str = TimeFrame.MONTH,
        limit: Optional[int] = None,
        now_ms: Optional[int] = None,
    ) -> list[RankedResult]:
        """
        Popular advisors for a time window.

        Raises:
            ValueError: If limit is not positive or time_frame is unknown
        """
        self._validate_limit(limit)
        time_frame = TimeFrame(time_frame)
        logger = self._logger("popular")
        results = popular(
            self.store.snapshot(),
            time_frame=time_frame,
            limit=limit,
            now_ms=now_ms,
            params=self.params,
            correlation_id=self.correlation_id,
        )
        logger.info(
            "Popular advisors computed",
            time_frame=time_frame.value,
            results=len(results),
        )
        return results

    def stats(self) -> MarketplaceStats:
        return calculate_marketplace_stats(
            self.store.snapshot().advisors,
            top_n=self.params.result_defaults.top_categories,
        )

    def team_templates(
        self, category: Optional[str] = None, featured: Optional[bool] = None
    ) -> list[TeamTemplate]:
        return list_team_templates(
            self.store.snapshot().team_templates, category=category, featured=featured
        )

    def board(self, user_id: Optional[str]) -> list[BoardEntry]:
        return user_board(self.store.snapshot(), user_id)

"""
Catalog Store Module

Read-only access to the advisor catalog and selection history. Discovery
operations never reach into ambient state: callers take a ``CatalogSnapshot``
from a store and pass it explicitly into every operation.

Example Usage:
    from advisor_discovery.utils.catalog_store import JsonlCatalogStore

    store = JsonlCatalogStore(catalog_dir="data/catalog")
    snapshot = store.snapshot()

    visible = [a for a in snapshot.advisors if a.is_visible()]
    history = snapshot.selections_for_user("user-42")

Directory layout for JsonlCatalogStore:
    <catalog_dir>/advisors.jsonl         one advisor record per line (required)
    <catalog_dir>/selections.jsonl       one selection event per line (optional)
    <catalog_dir>/team_templates.jsonl   one team template per line (optional)
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Protocol, TypeVar

import jsonlines
from pydantic import BaseModel, ValidationError

from advisor_discovery.models.advisor import AdvisorProfile
from advisor_discovery.models.selection import SelectionEvent
from advisor_discovery.models.team import TeamTemplate
from advisor_discovery.utils.logger import get_logger
from advisor_discovery.utils.validator import ConfigurationError, ConfigValidator

ADVISORS_FILE = "advisors.jsonl"
SELECTIONS_FILE = "selections.jsonl"
TEAM_TEMPLATES_FILE = "team_templates.jsonl"
ADVISOR_SCHEMA = "advisor_record_schema.json"

M = TypeVar("M", bound=BaseModel)


class CatalogStoreError(IOError):
    """Raised when the catalog cannot be read."""

    pass


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the catalog for one discovery request."""

    advisors: tuple[AdvisorProfile, ...] = ()
    selections: tuple[SelectionEvent, ...] = ()
    team_templates: tuple[TeamTemplate, ...] = ()
    _advisor_index: dict[str, AdvisorProfile] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # Frozen dataclass: populate the cached index through object.__setattr__
        object.__setattr__(
            self, "_advisor_index", {a.id: a for a in self.advisors}
        )

    @property
    def advisors_by_id(self) -> dict[str, AdvisorProfile]:
        return dict(self._advisor_index)

    def advisor_by_id(self, advisor_id: str) -> Optional[AdvisorProfile]:
        return self._advisor_index.get(advisor_id)

    def selections_for_user(self, user_id: Optional[str]) -> list[SelectionEvent]:
        """Return one user's selection events in history order.

        Args:
            user_id: User identifier; None (anonymous) yields no history

        Returns:
            List of SelectionEvent
        """
        if user_id is None:
            return []
        return [s for s in self.selections if s.user_id == user_id]


class CatalogStore(Protocol):
    """Anything that can hand out a catalog snapshot."""

    def snapshot(self) -> CatalogSnapshot: ...


class InMemoryCatalogStore:
    """Catalog store over caller-supplied records."""

    def __init__(
        self,
        advisors: Iterable[AdvisorProfile] = (),
        selections: Iterable[SelectionEvent] = (),
        team_templates: Iterable[TeamTemplate] = (),
    ):
        self._snapshot = CatalogSnapshot(
            advisors=tuple(advisors),
            selections=tuple(selections),
            team_templates=tuple(team_templates),
        )

    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot


class JsonlCatalogStore:
    """Catalog store backed by JSONL export files."""

    def __init__(
        self,
        catalog_dir: str | Path = "data/catalog",
        validate_records: bool = False,
        validator: Optional[ConfigValidator] = None,
    ):
        """
        Initialize JsonlCatalogStore.

        Args:
            catalog_dir: Directory containing the catalog JSONL files
            validate_records: Check advisor records against the JSON schema
                before model parsing (friendlier error messages)
            validator: ConfigValidator to use (created on demand)
        """
        self.catalog_dir = Path(catalog_dir)
        self.validate_records = validate_records
        self._validator = validator
        self.logger = get_logger(
            correlation_id="catalog-store",
            phase="catalog",
            component="jsonl_catalog_store",
        )

    def snapshot(self) -> CatalogSnapshot:
        """
        Read every catalog file into an immutable snapshot.

        Returns:
            CatalogSnapshot

        Raises:
            CatalogStoreError: If the advisors file is missing, or any file
                is corrupted or holds invalid records
        """
        advisors_path = self.catalog_dir / ADVISORS_FILE
        if not advisors_path.exists():
            raise CatalogStoreError(f"Advisor catalog not found: {advisors_path}")

        advisors = self._load(advisors_path, AdvisorProfile, schema=ADVISOR_SCHEMA)
        selections = self._load_optional(SELECTIONS_FILE, SelectionEvent)
        templates = self._load_optional(TEAM_TEMPLATES_FILE, TeamTemplate)

        self.logger.info(
            "Catalog snapshot loaded",
            catalog_dir=str(self.catalog_dir),
            advisors=len(advisors),
            selections=len(selections),
            team_templates=len(templates),
        )

        return CatalogSnapshot(
            advisors=tuple(advisors),
            selections=tuple(selections),
            team_templates=tuple(templates),
        )

    def _load_optional(self, filename: str, model: type[M]) -> list[M]:
        path = self.catalog_dir / filename
        if not path.exists():
            self.logger.debug("Optional catalog file missing", file=filename)
            return []
        return self._load(path, model)

    def _load(
        self, path: Path, model: type[M], schema: Optional[str] = None
    ) -> list[M]:
        """
        Parse one JSONL file into models.

        Args:
            path: JSONL file path
            model: Pydantic model for each record
            schema: JSON schema name to check records against (optional)

        Returns:
            Parsed records in file order

        Raises:
            CatalogStoreError: If the file is corrupted or a record is invalid
        """
        records: list[M] = []
        try:
            with jsonlines.open(path) as reader:
                for line_number, record in enumerate(reader, start=1):
                    if schema and self.validate_records:
                        self._get_validator().validate(record, schema)
                    records.append(model.model_validate(record))
        except (json.JSONDecodeError, jsonlines.InvalidLineError) as e:
            raise CatalogStoreError(f"Corrupted catalog file {path}: {e}") from e
        except ValidationError as e:
            raise CatalogStoreError(
                f"Invalid record at {path.name}:{line_number}: {e}"
            ) from e
        except ConfigurationError as e:
            raise CatalogStoreError(
                f"Schema violation at {path.name}:{line_number}: {e}"
            ) from e

        return records

    def _get_validator(self) -> ConfigValidator:
        if self._validator is None:
            self._validator = ConfigValidator()
        return self._validator

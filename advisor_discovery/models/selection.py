"""Selection history data model.

A selection event records that a user added an advisor to their board.
Events are read-only inputs to popularity and personalization scoring.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from advisor_discovery.models.advisor import CatalogModel


class SelectionSource(str, Enum):
    """How an advisor ended up on a user's board."""

    MARKETPLACE = "marketplace"
    TEAM = "team"
    MIGRATION = "migration"
    CUSTOM = "custom"


class SelectionEvent(CatalogModel):
    """Historical fact that a user selected an advisor.

    Attributes:
        user_id: Selecting user
        advisor_id: Selected advisor
        selected_at: Selection timestamp in epoch milliseconds
        source: Selection channel
        team_id: Team template id when selected as part of a team (optional)
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    advisor_id: str
    selected_at: int
    source: SelectionSource = SelectionSource.MARKETPLACE
    team_id: Optional[str] = None


class UserPreferenceProfile(CatalogModel):
    """Preferences derived from a user's past selections.

    Rebuilt per request, never stored. ``max_experience_years`` is None when
    the user has no resolvable history, which disables the experience
    proximity bonus.
    """

    model_config = ConfigDict(frozen=True)

    categories: frozenset[str] = Field(default_factory=frozenset)
    max_experience_years: Optional[int] = None

    def is_empty(self) -> bool:
        return not self.categories and self.max_experience_years is None

"""Team template data model."""

from typing import Optional

from pydantic import Field

from advisor_discovery.models.advisor import CatalogModel


class TeamTemplate(CatalogModel):
    """Predefined advisor team for one-click selection.

    Attributes:
        id: Human-readable id (e.g. "startup-founding-team")
        name: Display name
        description: Purpose of the team
        category: Team category (e.g. "startup", "marketing")
        advisor_ids: Member advisor ids
        icon: Icon URL (optional)
        featured: Featured team flag (optional)
        sort_order: Custom ordering key (optional, lower first)
        created_at: Creation timestamp in epoch milliseconds
        updated_at: Last update timestamp in epoch milliseconds
    """

    id: str
    name: str
    description: str = ""
    category: str
    advisor_ids: list[str] = Field(default_factory=list)
    icon: Optional[str] = None
    featured: Optional[bool] = None
    sort_order: Optional[int] = None
    created_at: int = 0
    updated_at: int = 0

"""Advisor catalog data model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from advisor_discovery.utils.experience import parse_experience_years

DEFAULT_CATEGORY = "general"


class CatalogModel(BaseModel):
    """Base for catalog records exported with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdvisorStatus(str, Enum):
    """Lifecycle status of an advisor profile."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class TeamAffiliation(CatalogModel):
    """Membership of an advisor in a team template."""

    team_id: str
    role: Optional[str] = None


class AdvisorMetadata(CatalogModel):
    """Loosely structured metadata attached to an advisor."""

    team_affiliations: list[TeamAffiliation] = Field(default_factory=list)


class Persona(CatalogModel):
    """Persona block describing how an advisor presents itself.

    Attributes:
        name: Persona display name (e.g. "Jordan Lee")
        title: Headline title (e.g. "Growth Advisor")
        description: Longer description (optional)
        one_liner: Short tagline (optional)
        experience: Free-text experience descriptor (optional, e.g. "5+ years")
        specialties: Specialty labels
        expertise: Expertise labels
    """

    name: str
    title: str = ""
    description: Optional[str] = None
    one_liner: Optional[str] = None
    experience: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    expertise: list[str] = Field(default_factory=list)


class AdvisorProfile(CatalogModel):
    """A marketplace catalog entry.

    Only profiles that are public and active are ever visible to discovery
    operations; see ``is_visible``.

    Attributes:
        id: Unique advisor identifier
        first_name: Given name (optional)
        last_name: Family name (optional)
        image_url: Avatar URL (optional)
        category: Taxonomy key (optional, see ``effective_category``)
        tags: Free-form tags, order preserved
        featured: Featured in the marketplace
        is_public: Listed in the marketplace
        status: Lifecycle status
        persona: Persona block
        metadata: Team affiliations and other metadata
        created_at: Creation timestamp in epoch milliseconds
    """

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    is_public: bool = False
    status: AdvisorStatus
    persona: Persona
    metadata: AdvisorMetadata = Field(default_factory=AdvisorMetadata)
    created_at: int = 0

    @property
    def display_name(self) -> str:
        """Persona name, falling back to first and last name."""
        if self.persona.name:
            return self.persona.name
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    @property
    def effective_category(self) -> str:
        """Category with the taxonomy default applied when absent."""
        if self.category is None or self.category == "":
            return DEFAULT_CATEGORY
        return self.category

    @property
    def experience_years(self) -> int:
        """Year count derived from the persona experience descriptor."""
        return parse_experience_years(self.persona.experience)

    @property
    def team_ids(self) -> list[str]:
        return [a.team_id for a in self.metadata.team_affiliations]

    def is_visible(self) -> bool:
        """Check if the profile may appear in any discovery result.

        Returns:
            True if the profile is public and active
        """
        return self.is_public and self.status == AdvisorStatus.ACTIVE

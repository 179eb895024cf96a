"""Discovery output models.

Results are request-scoped views of catalog entries; they are recomputed per
request and never persisted.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import Field

from advisor_discovery.models.advisor import AdvisorProfile, CatalogModel
from advisor_discovery.models.selection import SelectionSource


class PersonaSummary(CatalogModel):
    """Persona fields echoed in results."""

    name: str
    title: str
    description: Optional[str] = None
    one_liner: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    expertise: list[str] = Field(default_factory=list)


class RankedResult(CatalogModel):
    """One ranked discovery result.

    Exactly one score field is populated depending on the producing
    operation: ``relevance_score`` for search, ``suggestion_score`` for
    suggestions. Listings and popularity results expose neither.
    """

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: str
    image_url: Optional[str] = None
    category: str
    featured: bool
    experience_years: int
    persona: PersonaSummary
    tags: list[str] = Field(default_factory=list)
    created_at: int
    relevance_score: Optional[int] = None
    suggestion_score: Optional[int] = None

    @classmethod
    def from_advisor(
        cls,
        advisor: AdvisorProfile,
        relevance_score: Optional[int] = None,
        suggestion_score: Optional[int] = None,
    ) -> "RankedResult":
        """Build the visible view of an advisor profile.

        Args:
            advisor: Catalog entry
            relevance_score: Text relevance score (search only)
            suggestion_score: Personalization score (suggestions only)

        Returns:
            RankedResult with derived experience years and effective category
        """
        persona = advisor.persona
        return cls(
            id=advisor.id,
            first_name=advisor.first_name,
            last_name=advisor.last_name,
            display_name=advisor.display_name,
            image_url=advisor.image_url,
            category=advisor.effective_category,
            featured=advisor.featured,
            experience_years=advisor.experience_years,
            persona=PersonaSummary(
                name=persona.name,
                title=persona.title,
                description=persona.description,
                one_liner=persona.one_liner,
                specialties=list(persona.specialties),
                expertise=list(persona.expertise),
            ),
            tags=list(advisor.tags),
            created_at=advisor.created_at,
            relevance_score=relevance_score,
            suggestion_score=suggestion_score,
        )


class BoardEntry(RankedResult):
    """An advisor on a user's board together with how it got there."""

    selected_at: int
    selection_source: SelectionSource
    team_id: Optional[str] = None


@dataclass(frozen=True)
class ScoredAdvisor:
    """Advisor paired with a request-scoped integer score."""

    advisor: AdvisorProfile
    score: int


@dataclass(frozen=True)
class PopularityScore:
    """Popularity scorer output for one advisor."""

    advisor: AdvisorProfile
    total_selections: int
    recent_selections: int
    score: float


class ExperienceDistribution(CatalogModel):
    """Advisor counts per experience bracket."""

    entry: int = 0
    mid: int = 0
    senior: int = 0
    expert: int = 0


class CategoryCount(CatalogModel):
    category: str
    count: int


class MarketplaceStats(CatalogModel):
    """Aggregate statistics over visible advisors.

    ``average_rating`` and ``rated_advisors`` come from the rating stub and
    stay at zero until advisor reviews feed into ranking.
    """

    total_advisors: int
    featured_advisors: int
    category_counts: dict[str, int] = Field(default_factory=dict)
    average_rating: float = 0.0
    rated_advisors: int = 0
    experience_distribution: ExperienceDistribution = Field(
        default_factory=ExperienceDistribution
    )
    top_categories: list[CategoryCount] = Field(default_factory=list)

"""Team template listing."""

from typing import Iterable, Optional

from advisor_discovery.engine.ranking import name_sort_key
from advisor_discovery.models.team import TeamTemplate

UNSORTED_ORDER = 999


def list_team_templates(
    templates: Iterable[TeamTemplate],
    category: Optional[str] = None,
    featured: Optional[bool] = None,
) -> list[TeamTemplate]:
    """Filter team templates and order them for display.

    Templates are ordered ascending by ``sort_order`` (templates without one
    sort as 999), then by name.

    Args:
        templates: Team templates from the catalog snapshot
        category: Exact category match (optional)
        featured: Featured flag equality (optional)

    Returns:
        Ordered list of matching templates
    """
    selected = [
        t
        for t in templates
        if (not category or t.category == category)
        and (featured is None or bool(t.featured) == featured)
    ]
    return sorted(
        selected,
        key=lambda t: (
            t.sort_order if t.sort_order is not None else UNSORTED_ORDER,
            name_sort_key(t.name),
        ),
    )

"""Experience descriptor parsing.

Advisor personas carry a free-text experience descriptor such as
"5+ years" or "Over 12 years in fintech". Every place that needs a numeric
year count goes through ``parse_experience_years`` so the default-to-zero
behaviour lives in one place.
"""

import re
from typing import Optional

_FIRST_INTEGER = re.compile(r"(\d+)")


def parse_experience_years(descriptor: Optional[str]) -> int:
    """Extract the first integer token from an experience descriptor.

    Args:
        descriptor: Free-text experience descriptor (may be None or empty)

    Returns:
        First integer found in the descriptor, or 0 when the descriptor is
        absent or contains no digits

    Example:
        >>> parse_experience_years("5+ years")
        5
        >>> parse_experience_years("Seasoned operator")
        0
    """
    if not descriptor:
        return 0

    match = _FIRST_INTEGER.search(descriptor)
    if match is None:
        return 0

    return int(match.group(1))

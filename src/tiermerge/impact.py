"""
Business-impact index built from the reference export.
"""

from typing import Dict, Iterable, Optional

from .loader import Row

# The reference export uses lowercase column names, unlike the tier exports.
REFERENCE_DOMAIN_FIELD = "domain"
REFERENCE_IMPACT_FIELD = "businessImpact"


def build_impact_index(rows: Iterable[Row]) -> Dict[Optional[str], Optional[str]]:
    """
    Map each reference domain to its business impact.

    Later rows overwrite earlier ones for the same domain. Missing columns
    are not an error; they map to and from None.
    """
    index: Dict[Optional[str], Optional[str]] = {}
    for row in rows:
        index[row.get(REFERENCE_DOMAIN_FIELD)] = row.get(REFERENCE_IMPACT_FIELD)
    return index

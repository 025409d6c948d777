"""
Project merged rows onto the published output schema.
"""

from typing import Dict, Optional

from .loader import Row

# Output column -> source field. None marks a constant column.
COLUMN_MAP = {
    "Company Name": "COMPANY",
    "Domain": "DOMAIN",
    "Business Impact": "Business Impact",
    "Tier": "Tier",
    "Likelihood": "Likelihood",
    "Status": "Status",
    "Custom Tags": None,
}

FINAL_COLUMNS = list(COLUMN_MAP)


def project_record(row: Row) -> Dict[str, Optional[str]]:
    """Rename and select output fields; Custom Tags is always ""."""
    record: Dict[str, Optional[str]] = {}
    for column, source in COLUMN_MAP.items():
        record[column] = row.get(source) if source is not None else ""
    return record

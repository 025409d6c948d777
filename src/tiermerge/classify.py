"""
Decompose the colon-delimited TAGS field into classification fields.
"""

from types import MappingProxyType
from typing import Optional

from .loader import Row

TAGS_FIELD = "TAGS"
TAG_SEPARATOR = ":"

LIKELIHOOD_TAGS = MappingProxyType({
    "Breach Likelihood Assessment - Low": "low",
    "Breach Likelihood Assessment - Medium": "medium",
    "Breach Likelihood Assessment - High": "high",
    "Breach Likelihood Assessment - Critical": "critical",
})

STATUS_TAGS = MappingProxyType({
    "Active engagement - Proactive": "trending_down",
    "Active engagement - Reactive": "needs_attention",
    "Active engagement - Escalation": "risk_escalating",
    "Active engagement - Breach": "active_breach",
})

LIFECYCLE_TAGS = MappingProxyType({
    "Engagement lifecycle - Onboarding": "assess",
    "Engagement lifecycle - Assessment": "monitor",
    "Engagement lifecycle - Remediation": "respond",
    "Engagement lifecycle - Maintenance": "maintain",
})

# (output field, lookup table), checked in this order for each token
CLASSIFICATION_AXES = (
    ("Likelihood", LIKELIHOOD_TAGS),
    ("Status", STATUS_TAGS),
    ("Lifecycle", LIFECYCLE_TAGS),
)


def classify_tags(row: Row) -> Row:
    """
    Return a copy of row with Likelihood, Status and Lifecycle set from TAGS.

    Tokens are matched exactly, left to right; a later token for the same
    axis overwrites an earlier one. Unknown tokens are ignored.
    """
    fields: dict = {field: None for field, _ in CLASSIFICATION_AXES}

    tags: Optional[str] = row.get(TAGS_FIELD)
    if tags:
        for token in tags.split(TAG_SEPARATOR):
            for field, table in CLASSIFICATION_AXES:
                if token in table:
                    fields[field] = table[token]
                    break

    return {**row, **fields}

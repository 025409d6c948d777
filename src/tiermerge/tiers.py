"""
Tier vocabulary and tier inference from source file names.
"""

from enum import Enum
from typing import Optional


class Tier(Enum):
    PLATINUM = "platinum"
    GOLD = "gold"
    SILVER = "silver"


# Checked in this order; the first keyword found in the file name wins.
TIER_KEYWORDS = (Tier.PLATINUM, Tier.GOLD, Tier.SILVER)

# Explicit ordering for dedup tie-break.
# NOTE: Do NOT compare Tier.value strings lexicographically.
TIER_PRIORITY = {
    Tier.PLATINUM.value: 3,
    Tier.GOLD.value: 2,
    Tier.SILVER.value: 1,
}


def infer_tier(path: str) -> Optional[Tier]:
    """
    Infer a tier from a file path by case-insensitive substring match.

    "platinum" beats "gold" beats "silver" when several appear.
    Returns None when no keyword is present.
    """
    lowered = str(path).lower()
    for tier in TIER_KEYWORDS:
        if tier.value in lowered:
            return tier
    return None


def tier_priority(tier: Optional[str]) -> int:
    """Rank a row's Tier value; rows without a tier rank lowest (0)."""
    return TIER_PRIORITY.get(tier, 0)

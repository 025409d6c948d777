"""
Merge tiered sources into one row per domain.

Merge rule: highest tier wins per DOMAIN; on equal tier the first row seen
(in source-list order, then file order) is kept. Losing rows are dropped
whole, nothing is copied from them into the winner.

Output order: one row per domain in the order each domain first appeared.
Callers must not rely on it; use sort_by_domain() for a stable order.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .loader import Row, TIER_FIELD, load_source
from .tiers import tier_priority

logger = logging.getLogger(__name__)

DOMAIN_FIELD = "DOMAIN"
COMPANY_FIELD = "COMPANY"
IMPACT_FIELD = "Business Impact"

# Documented dedup tie-break order.
DEDUP_TIEBREAK_POLICY = ["tier_priority", "first_seen"]


def load_all(paths: Sequence[str]) -> List[Row]:
    """Concatenate rows of every source in list order; repeats are re-read."""
    rows: List[Row] = []
    for path in paths:
        rows.extend(load_source(path))
    return rows


def attach_business_impact(
    rows: Iterable[Row],
    impact_index: Dict[Optional[str], Optional[str]],
) -> List[Row]:
    """Return copies of rows with "Business Impact" looked up by DOMAIN."""
    return [
        {**row, IMPACT_FIELD: impact_index.get(row.get(DOMAIN_FIELD)) or None}
        for row in rows
    ]


def _outranks(candidate: Row, current: Row) -> bool:
    """True if candidate should replace current; ties keep current."""
    return tier_priority(candidate.get(TIER_FIELD)) > tier_priority(current.get(TIER_FIELD))


def _fold_by_domain(rows: Iterable[Row]) -> Tuple[Dict[Optional[str], Row], Dict[Optional[str], List[Row]]]:
    winners: Dict[Optional[str], Row] = {}
    candidates: Dict[Optional[str], List[Row]] = {}

    for row in rows:
        domain = row.get(DOMAIN_FIELD)
        candidates.setdefault(domain, []).append(row)

        current = winners.get(domain)
        if current is None:
            winners[domain] = row
        elif _outranks(row, current):
            logger.debug(
                f"Domain {domain!r}: {row.get(TIER_FIELD)} row replaces {current.get(TIER_FIELD)} row"
            )
            winners[domain] = row

    return winners, candidates


def deduplicate(rows: Iterable[Row]) -> List[Row]:
    """Collapse rows sharing a DOMAIN to the single highest-tier row."""
    winners, _ = _fold_by_domain(rows)
    return list(winners.values())


def _notes_from_fold(
    winners: Dict[Optional[str], Row],
    candidates: Dict[Optional[str], List[Row]],
) -> List[Dict]:
    notes = []
    for domain, group in candidates.items():
        if len(group) < 2:
            continue
        winner = winners[domain]
        notes.append({
            "domain": domain,
            "winner_tier": winner.get(TIER_FIELD),
            "winner_company": winner.get(COMPANY_FIELD),
            "candidates": [
                {"company": c.get(COMPANY_FIELD), "tier": c.get(TIER_FIELD)} for c in group
            ],
        })
    return notes


def merge_notes(rows: Iterable[Row]) -> List[Dict]:
    """
    Describe every domain that had more than one candidate row.

    Returns:
        One note per contested domain with the winning tier and company and
        all candidates in the order they were seen.
    """
    return _notes_from_fold(*_fold_by_domain(rows))


def sort_by_domain(rows: Iterable[Row]) -> List[Row]:
    """Sort rows by DOMAIN; rows without a domain go last."""
    return sorted(
        rows,
        key=lambda r: (r.get(DOMAIN_FIELD) is None, r.get(DOMAIN_FIELD) or ""),
    )


class MergedRows(list):
    """
    One row per domain, as returned by merge_sources().

    Also carries how many rows went into the merge and the notes for
    contested domains, for the merge report.
    """

    def __init__(self, rows: Iterable[Row], row_count: int = 0, notes: Optional[List[Dict]] = None):
        super().__init__(rows)
        self.row_count = row_count
        self.notes = notes if notes is not None else []


def merge_sources(
    paths: Sequence[str],
    impact_index: Dict[Optional[str], Optional[str]],
) -> MergedRows:
    """
    Load, enrich and deduplicate the tiered sources.

    Args:
        paths: Tier source CSV paths, concatenated in list order
        impact_index: Domain -> business impact mapping

    Returns:
        One row per unique DOMAIN (order unspecified, see module docstring),
        with row_count and notes attached
    """
    rows = attach_business_impact(load_all(paths), impact_index)
    winners, candidates = _fold_by_domain(rows)
    logger.info(f"Merged {len(rows)} row(s) into {len(winners)} unique domain(s)")
    return MergedRows(
        winners.values(),
        row_count=len(rows),
        notes=_notes_from_fold(winners, candidates),
    )

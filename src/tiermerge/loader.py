"""
Source loader: read one CSV export into tier-annotated rows.

A file that cannot be read never aborts the run; the failure is logged
and the source contributes no rows.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from .tiers import infer_tier

logger = logging.getLogger(__name__)

Row = Dict[str, Optional[str]]

TIER_FIELD = "Tier"


def read_csv_rows(path: Union[str, Path]) -> List[Row]:
    """
    Parse a CSV file into a list of row dicts keyed by header names.

    All cells are read as strings and empty cells stay "" rather than NaN.
    Cells missing from a short line become None; cells beyond the header
    width on a long line are dropped and the line is kept. Rows whose every
    field is empty are dropped.

    Raises:
        OSError: If the file cannot be opened
        UnicodeDecodeError: If the file is not valid UTF-8 (a leading BOM is stripped)
        pandas.errors.ParserError: If the CSV is malformed
        pandas.errors.EmptyDataError: If the file has no header
    """
    header = pd.read_csv(path, nrows=0, encoding="utf-8-sig")
    width = len(header.columns)

    def truncate_long_line(fields: List[str]) -> List[str]:
        logger.warning(f"{path}: ignoring {len(fields) - width} cell(s) beyond the header")
        return fields[:width]

    # index_col=False keeps pandas from turning the first column into the
    # index when every line carries a trailing delimiter.
    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
        engine="python",
        index_col=False,
        on_bad_lines=truncate_long_line,
    )
    # Short lines leave NaN in the trailing cells; those fields are absent.
    df = df.astype(object).where(df.notna(), None)

    rows: List[Row] = []
    for record in df.to_dict(orient="records"):
        if all(value in ("", None) for value in record.values()):
            continue
        rows.append(record)
    return rows


def load_source(path: Union[str, Path]) -> List[Row]:
    """
    Load a source CSV and tag every row with the tier inferred from its name.

    Args:
        path: Path to the CSV file

    Returns:
        Rows with an added "Tier" field ("platinum", "gold", "silver" or None).
        Empty list if the file could not be read.
    """
    tier = infer_tier(str(path))
    tier_value = tier.value if tier is not None else None

    try:
        rows = read_csv_rows(path)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"Error reading file {path}: {e}")
        return []

    logger.info(f"Loaded {len(rows)} row(s) from {path} (tier={tier_value})")
    return [{**row, TIER_FIELD: tier_value} for row in rows]

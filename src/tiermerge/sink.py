"""
Persist final records (and the optional merge report).

Write failures are logged and reported through the return value; they
never propagate out of the pipeline.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from .project import FINAL_COLUMNS

logger = logging.getLogger(__name__)


def write_records(
    path: Union[str, Path],
    records: Sequence[Dict[str, Optional[str]]],
    columns: List[str] = FINAL_COLUMNS,
) -> bool:
    """
    Serialize records to CSV with a fixed header order.

    None values are written as empty cells. An empty record list writes
    the header line only.

    Returns:
        True if the file was written, False on failure
    """
    path = Path(path)
    df = pd.DataFrame(list(records), columns=columns)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False, na_rep="", lineterminator="\n", encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing CSV file: {e}")
        return False

    logger.info(f'Mapped and filtered CSV file saved as "{path}"')
    return True


def write_report(path: Union[str, Path], report: Dict[str, Any]) -> bool:
    """Write the merge report as indented JSON. Returns False on failure."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
    except OSError as e:
        logger.error(f"Error writing merge report: {e}")
        return False

    logger.info(f"Wrote merge report: {path}")
    return True

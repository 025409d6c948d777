"""
End-to-end run: load -> index -> merge -> classify -> project -> write.

Always emits:
  - the merged CSV (unless the write fails, which is logged)
  - merge_report.json when a report path is configured
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .classify import classify_tags
from .config import PipelineConfig
from .impact import build_impact_index
from .loader import load_source
from .merge import merge_sources, sort_by_domain
from .project import project_record
from .sink import write_records, write_report

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    records: List[Dict[str, Optional[str]]] = field(default_factory=list)
    row_count: int = 0
    domain_count: int = 0
    written: bool = False
    report_written: bool = False


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """
    Run one merge over the configured sources.

    Never raises for read or write failures; those are logged and reflected
    in the returned PipelineResult.
    """
    impact_index = build_impact_index(load_source(config.reference))
    logger.info(f"Built business impact index with {len(impact_index)} domain(s)")

    merged = merge_sources(config.sources, impact_index)
    unique = sort_by_domain(merged) if config.sort_output else list(merged)

    records = [project_record(classify_tags(row)) for row in unique]

    result = PipelineResult(
        records=records,
        row_count=merged.row_count,
        domain_count=len(unique),
    )
    result.written = write_records(config.output, records)

    if config.report:
        report = {
            "row_count": result.row_count,
            "domain_count": result.domain_count,
            "merge_notes": merged.notes,
        }
        result.report_written = write_report(config.report, report)

    return result

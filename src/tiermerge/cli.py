"""
Command-line interface for the tier merge pipeline.

Reads config/pipeline.yaml by default; flags override individual settings.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional

from ..logging_config import configure_logging
from .config import DEFAULT_CONFIG_PATH, DEFAULT_OUTPUT, ConfigError, PipelineConfig, load_config
from .pipeline import run_pipeline

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "logs/tiermerge.log"


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """
    Resolve the run configuration from --config and override flags.

    Without --config, the default config file is used unless --source and
    --reference are both given on the command line.

    Raises:
        ConfigError: If the configuration cannot be resolved
    """
    if args.config or not (args.source and args.reference):
        config = load_config(args.config or DEFAULT_CONFIG_PATH)
    else:
        config = PipelineConfig(sources=list(args.source), reference=args.reference, output=DEFAULT_OUTPUT)

    overrides = {}
    if args.source:
        overrides["sources"] = list(args.source)
    if args.reference:
        overrides["reference"] = args.reference
    if args.output:
        overrides["output"] = args.output
    if args.report:
        overrides["report"] = args.report
    if args.sort_output:
        overrides["sort_output"] = True
    return replace(config, **overrides)


def main(argv: Optional[list] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="tiermerge",
        description="Merge tiered CSV exports into one deduplicated, classified CSV"
    )
    parser.add_argument("--config", help=f"Path to pipeline YAML (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument(
        "--source",
        action="append",
        help="Tier source CSV; repeat for several files (replaces configured sources)"
    )
    parser.add_argument("--reference", help="Business impact reference CSV")
    parser.add_argument("--output", "-o", help="Output CSV path")
    parser.add_argument("--report", help="Write a JSON merge report to this path")
    parser.add_argument("--sort-output", action="store_true", help="Sort output rows by domain")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help=f"Also append logs to this file (default: {DEFAULT_LOG_FILE})"
    )
    parser.add_argument("--no-log-file", action="store_true", help="Log to stderr only")
    args = parser.parse_args(argv)

    configure_logging(
        logging.DEBUG if args.verbose else logging.INFO,
        log_file=None if args.no_log_file else args.log_file,
    )

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = run_pipeline(config)
    if not result.written:
        logger.warning(f"Run finished without output; {result.domain_count} record(s) were not saved")
    return 0


if __name__ == "__main__":
    sys.exit(main())

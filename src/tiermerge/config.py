"""
Run configuration loading and validation.

The configuration names the tier sources, the business-impact reference
file and the output location. It is read from YAML and checked against
config/schemas/pipeline.schema.json before any source is touched.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
import yaml


DEFAULT_CONFIG_PATH = Path("config/pipeline.yaml")
DEFAULT_OUTPUT = "merged_output.csv"

# Shipped beside config/pipeline.yaml at the repository root
SCHEMA_PATH = Path(__file__).resolve().parents[2] / "config" / "schemas" / "pipeline.schema.json"


class ConfigError(Exception):
    """Raised when the run configuration cannot be loaded or is invalid."""
    pass


@dataclass
class PipelineConfig:
    sources: List[str]
    reference: str
    output: str = DEFAULT_OUTPUT
    sort_output: bool = False
    report: Optional[str] = None


def load_schema(schema_path: Path = SCHEMA_PATH) -> Dict[str, Any]:
    """Load the pipeline config JSON schema."""
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_config(raw: Any, schema_path: Optional[Path] = SCHEMA_PATH) -> None:
    """
    Validate a parsed configuration document.

    Uses the JSON schema at schema_path when it exists. The required keys
    are checked by hand in every case.

    Raises:
        ConfigError: If the document is not a valid run configuration
    """
    if schema_path is not None and schema_path.exists():
        try:
            jsonschema.validate(raw, load_schema(schema_path))
        except jsonschema.ValidationError as e:
            location = ".".join(str(p) for p in e.absolute_path)
            if location:
                raise ConfigError(f"Invalid config at '{location}': {e.message}")
            raise ConfigError(f"Invalid config: {e.message}")
        except (OSError, json.JSONDecodeError):
            # Fall through to manual validation if schema can't be loaded
            pass

    # Manual validation
    if not isinstance(raw, dict):
        raise ConfigError("Invalid config: expected a mapping")
    sources = raw.get("sources")
    if not isinstance(sources, list) or not sources:
        raise ConfigError("Invalid config at 'sources': expected a non-empty list")
    for i, source in enumerate(sources):
        if not isinstance(source, str) or not source:
            raise ConfigError(f"Invalid config at 'sources.{i}': expected a path")
    reference = raw.get("reference")
    if not isinstance(reference, str) or not reference:
        raise ConfigError("Invalid config at 'reference': expected a path")


def config_from_dict(raw: Dict[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from an already-parsed mapping."""
    validate_config(raw)
    return PipelineConfig(
        sources=list(raw["sources"]),
        reference=raw["reference"],
        output=raw.get("output", DEFAULT_OUTPUT),
        sort_output=raw.get("sort_output", False),
        report=raw.get("report"),
    )


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> PipelineConfig:
    """
    Load the run configuration from a YAML file.

    Args:
        path: Path to pipeline.yaml

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or fails
            schema validation
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse config {path}: {e}")

    return config_from_dict(raw)

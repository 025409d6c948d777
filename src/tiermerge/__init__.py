"""
Tier Merge - tiered risk-assessment CSV consolidation.

Merges platinum/gold/silver exports into one row per domain, joins business
impact from a reference export and classifies each domain from its tags.

Modules:
    tiers - Tier vocabulary, file-name inference and priority
    loader - CSV source loading with per-file failure isolation
    impact - Domain -> business impact index
    merge - Concatenation, impact join and tier-priority dedup
    classify - TAGS decomposition into Likelihood/Status/Lifecycle
    project - Final output schema
    sink - CSV and merge report writers
    config - YAML run configuration
    pipeline - End-to-end run
    cli - Command-line interface entrypoint
"""

from . import tiers
from . import loader
from . import impact
from . import merge
from . import classify
from . import project
from . import sink
from . import config
from . import pipeline

__version__ = "1.0.0"

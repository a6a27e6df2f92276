"""
Core data model for rule strings.

Contains:
- Neighborhood / Topology: neighbor adjacency and notation tags
- Configuration tables: isotropic letters and their neighbor bitmasks
- Condition / ConditionSet: normalized birth and survival conditions
- ParsedRule: the immutable result of a parse
"""

from .topology import Neighborhood, Topology, POPCOUNT, popcount
from .tables import (
    Configuration,
    CONFIGURATION_LETTERS,
    configurations_for,
    lookup_configuration,
    neighborhoods_with_count,
    embed_masks,
    project_mask,
)
from .conditions import Condition, ConditionSet
from .rule import Field, ParsedMap, ParsedRule

__all__ = [
    "Neighborhood",
    "Topology",
    "POPCOUNT",
    "popcount",
    # Tables
    "Configuration",
    "CONFIGURATION_LETTERS",
    "configurations_for",
    "lookup_configuration",
    "neighborhoods_with_count",
    "embed_masks",
    "project_mask",
    # Conditions
    "Condition",
    "ConditionSet",
    "Field",
    "ParsedRule",
    "ParsedMap",
]

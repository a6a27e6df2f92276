"""
Life-like Rule String Parser

Parses textual rule specifications of Life-like cellular automata into
normalized birth/survival condition sets, a neighborhood topology, and an
optional Generations state count.

Supported notations:
- B/S:        B3/S23, B2/S34H, B2ci3ai4c8/S02ae3eijkq4iz5ar6i7e
- S/B:        23/3
- Generations: B357/S3457/C5, 3457/357/5, g5b357s3457
- MAP:         MAPHmlphg, MAPHmlphg/3 (base64 lookup tables)

Main components:
- core: Neighborhoods, configuration tables, condition sets, ParsedRule
- parser: Notation detection, tokenizer, assembler
- traits: Abstract bases for parsing into caller-defined rule types
- rules: Ready-made numpy-backed rule representations
- config: Parse options
"""

__version__ = "0.1.0"
__author__ = "Rulestring Team"

from .core import (
    Condition,
    ConditionSet,
    Configuration,
    Field,
    Neighborhood,
    ParsedMap,
    ParsedRule,
    Topology,
    configurations_for,
)
from .parser import parse, parse_family, RuleFamily, LIFE, NT_LIFE, HEX, NT_HEX, NEUMANN, NT_NEUMANN
from .traits import (
    ParseLife,
    ParseLifeGen,
    ParseNtLife,
    ParseNtLifeGen,
    ParseHex,
    ParseHexGen,
    ParseNtHex,
    ParseNtHexGen,
    ParseNeumann,
    ParseNeumannGen,
    ParseNtNeumann,
    ParseNtNeumannGen,
)
from .rules import LifeRule, HexRule, NeumannRule, NtLifeRule, NtHexRule, NtNeumannRule
from .config import ParseOptions, strict_options, lifewiki_options
from .errors import (
    RuleParseError,
    RuleSyntaxError,
    UnsupportedTopologyError,
    DuplicateCountError,
    DuplicateSymbolError,
    OutOfRangeError,
    AmbiguousConditionError,
    UnknownConfigurationError,
    CombinedTopologyError,
    TrailingInputError,
)

__all__ = [
    "parse",
    "parse_family",
    "ParsedRule",
    "ParsedMap",
    "Condition",
    "ConditionSet",
    "Configuration",
    "Field",
    "Neighborhood",
    "Topology",
    "configurations_for",
    # Families
    "RuleFamily",
    "LIFE",
    "NT_LIFE",
    "HEX",
    "NT_HEX",
    "NEUMANN",
    "NT_NEUMANN",
    # Traits
    "ParseLife",
    "ParseLifeGen",
    "ParseNtLife",
    "ParseNtLifeGen",
    "ParseHex",
    "ParseHexGen",
    "ParseNtHex",
    "ParseNtHexGen",
    "ParseNeumann",
    "ParseNeumannGen",
    "ParseNtNeumann",
    "ParseNtNeumannGen",
    # Bundled rules
    "LifeRule",
    "HexRule",
    "NeumannRule",
    "NtLifeRule",
    "NtHexRule",
    "NtNeumannRule",
    # Config
    "ParseOptions",
    "strict_options",
    "lifewiki_options",
    # Errors
    "RuleParseError",
    "RuleSyntaxError",
    "UnsupportedTopologyError",
    "DuplicateCountError",
    "DuplicateSymbolError",
    "OutOfRangeError",
    "AmbiguousConditionError",
    "UnknownConfigurationError",
    "CombinedTopologyError",
    "TrailingInputError",
]

"""
Rule string parser.

Contains:
- grammar: Notation detection (MAP, B/S, S/B, Golly, Catagolue) and topology suffix
- tokenizer: Character-level state machine building the condition sets
- assembler: Final validation and ParsedRule construction
- maps: Decoder for base64 MAP rules
- family: Descriptors of the parse entry points

    raw string → detect_notation → Tokenizer.run → assemble → ParsedRule
    MAP string → detect_notation → parse_map → ParsedMap
"""

from __future__ import annotations
from typing import Optional, Union

from ..config import ParseOptions
from ..core.rule import ParsedMap, ParsedRule
from .assembler import assemble
from .family import ANY, HEX, LIFE, NEUMANN, NT_HEX, NT_LIFE, NT_NEUMANN, RuleFamily
from .grammar import Detection, Notation, detect_notation, detect_topology
from .maps import decode_map, parse_map
from .tokenizer import CountToken, ScanResult, Tokenizer


def parse_family(
    string: str,
    family: RuleFamily,
    options: Optional[ParseOptions] = None,
) -> Union[ParsedRule, ParsedMap]:
    """
    Parse a rule string as a member of `family`.

    MAP strings give a ParsedMap (isotropic families only), every other
    notation a ParsedRule.

    Raises:
        RuleParseError: any error of the taxonomy in rulestring.errors
    """
    detection = detect_notation(string)
    if detection.notation is Notation.MAP:
        return parse_map(string, detection, family, options)
    scan = Tokenizer(string, detection, family, options).run()
    return assemble(scan)


def parse(string: str, options: Optional[ParseOptions] = None) -> Union[ParsedRule, ParsedMap]:
    """
    Parse any supported rule string.

    Example:
        rule = parse("B2/S34H")
        rule.topology            # Topology.HEXAGONAL_TOTALISTIC
        rule.survivals.counts    # [3, 4]

        parse("MAPHmlphg").births    # frozenset of 4-bit bitmasks
    """
    return parse_family(string, ANY, options)


__all__ = [
    "parse",
    "parse_family",
    "assemble",
    "parse_map",
    "decode_map",
    "detect_notation",
    "detect_topology",
    "Detection",
    "Notation",
    "Tokenizer",
    "ScanResult",
    "CountToken",
    "RuleFamily",
    "LIFE",
    "NT_LIFE",
    "HEX",
    "NT_HEX",
    "NEUMANN",
    "NT_NEUMANN",
    "ANY",
]

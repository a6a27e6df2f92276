"""
MAP rule strings: base64-encoded lookup tables of non-isotropic rules.

After the "MAP" prefix comes one bit per arrangement of the neighborhood
together with its center cell, in reading order (NW first, SE last), most
significant bit first:

    neighborhood    cells   bits   base64 characters
    Moore           9       512    86
    hexagonal       7       128    22
    von Neumann     5       32     6

A set bit whose arrangement has the center cell dead is a birth, one with
the center alive a survival. Dropping the center bit from the arrangement
gives the neighborhood bitmask of rulestring.core.topology.

The data may be followed by '=' padding and, for Generations rules, by
'/<states>':

    MAPHmlphg       B2/S013V as a MAP rule
    MAPHmlphg/3     the same rule with 3 states
"""

from __future__ import annotations
import base64
import logging
import string as _string
from typing import FrozenSet, Optional, Tuple
import numpy as np

from ..config import DEFAULT_OPTIONS, ParseOptions
from ..core.rule import ParsedMap
from ..core.topology import Neighborhood
from ..errors import RuleSyntaxError, TrailingInputError, UnsupportedTopologyError
from .family import RuleFamily
from .grammar import DIGITS, MAP_PREFIX, MAP_WIDTHS, Detection
from .tokenizer import check_states

logger = logging.getLogger(__name__)

BASE64_ALPHABET = _string.ascii_uppercase + _string.ascii_lowercase + _string.digits + "+/"


def decode_map(data: str, neighborhood: Neighborhood) -> Tuple[FrozenSet[int], FrozenSet[int]]:
    """
    Decode validated base64 MAP data into birth and survival bitmasks.

    `data` must hold exactly MAP_WIDTHS[neighborhood] base64 characters.
    """
    size = neighborhood.size
    padded = data + "=" * (-len(data) % 4)
    raw = np.frombuffer(base64.b64decode(padded, validate=True), dtype=np.uint8)
    bits = np.unpackbits(raw)[:2 << size]

    index = np.flatnonzero(bits)
    center = 1 << (size // 2)
    right = center - 1
    left = right << (size // 2 + 1)
    masks = (index & left) >> 1 | (index & right)
    alive = (index & center) != 0

    births = frozenset(int(m) for m in masks[~alive])
    survivals = frozenset(int(m) for m in masks[alive])
    return births, survivals


def parse_map(
    string: str,
    detection: Detection,
    family: RuleFamily,
    options: Optional[ParseOptions] = None,
) -> ParsedMap:
    """
    Parse a MAP rule string as a member of `family`.

    Raises:
        RuleSyntaxError: family takes no MAP rules, bad base64, wrong length
        UnsupportedTopologyError: family does not take this neighborhood
        TrailingInputError: characters after the rule
        OutOfRangeError: invalid state count
    """
    options = options or DEFAULT_OPTIONS
    neighborhood = detection.neighborhood

    if not family.isotropic:
        raise RuleSyntaxError(
            f"MAP rules are not accepted by {family.name} rules",
            rule_string=string,
            position=0,
        )
    if not family.accepts(neighborhood):
        raise UnsupportedTopologyError(
            f"{family.name} rules do not take MAP rules on the "
            f"{neighborhood.value} neighborhood",
            rule_string=string,
            position=len(MAP_PREFIX),
        )

    start = len(MAP_PREFIX)
    end = start + MAP_WIDTHS[neighborhood]
    data = string[start:end]
    for offset, char in enumerate(data):
        if char not in BASE64_ALPHABET:
            raise RuleSyntaxError(
                f"{char!r} is not a base64 character",
                rule_string=string,
                position=start + offset,
            )
    # Bits past the end of the table must be zero
    unused = len(data) * 6 - (2 << neighborhood.size)
    if BASE64_ALPHABET.index(data[-1]) & ((1 << unused) - 1):
        raise RuleSyntaxError(
            "MAP data has bits set past the end of the table",
            rule_string=string,
            position=end - 1,
        )

    pos = end
    while pos < len(string) and string[pos] == "=":
        pos += 1

    states = None
    if pos < len(string):
        if string[pos] != "/":
            widths = ", ".join(str(w) for w in sorted(MAP_WIDTHS.values()))
            raise RuleSyntaxError(
                f"MAP data must be {widths} base64 characters long",
                rule_string=string,
                position=pos,
            )
        if not family.generations:
            raise TrailingInputError(
                f"unexpected trailing input {string[pos:]!r}",
                rule_string=string,
                position=pos,
            )
        digits_start = pos + 1
        pos = digits_start
        while pos < len(string) and string[pos] in DIGITS:
            pos += 1
        if pos == digits_start:
            raise RuleSyntaxError(
                "missing number of states",
                rule_string=string,
                position=digits_start,
            )
        if pos < len(string):
            raise TrailingInputError(
                f"unexpected trailing input {string[pos:]!r}",
                rule_string=string,
                position=pos,
            )
        states = check_states(string[digits_start:pos], string, digits_start, options)

    births, survivals = decode_map(data, neighborhood)
    rule = ParsedMap(births, survivals, neighborhood, states)
    logger.debug("Decoded %s MAP rule from %r", neighborhood.value, string)
    return rule

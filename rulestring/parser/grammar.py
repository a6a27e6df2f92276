"""
Notation detection.

Classifies a whole rule string into one grammar before any condition is
read. Predicates are evaluated top to bottom and the first match wins:

    1. MAP        "MAP" prefix                   MAPHmlphg, MAPHmlphg/3
    2. B/S        starts with B, contains S      B3/S23, B357/S3457/C5
    3. Catagolue  g<n> (or C<n>) prefix          g5b357s3457, G3/B3/S23
    4. S/B        digits, one '/'                23/3
       Golly      digits, two '/'                3457/357/5

The topology suffix (H = hexagonal, V = von Neumann) is located here as
well: those letters are never configuration letters or keywords, so their
presence anywhere fixes the neighborhood for the rest of the parse. MAP
strings carry no suffix; their neighborhood follows from the length of
the base64 data.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, List, Optional, Tuple

from ..core.topology import SUFFIX_LETTERS, Neighborhood
from ..errors import CombinedTopologyError, RuleSyntaxError

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")


class Notation(Enum):
    """Supported rule string grammars."""
    MAP = "MAP"
    BS = "B/S"
    CATAGOLUE = "gBS"
    SB = "S/B"
    GOLLY = "S/B/C"

    @property
    def is_generations_only(self) -> bool:
        """Grammars that always carry a state count."""
        return self in (Notation.CATAGOLUE, Notation.GOLLY)


# Base64 characters of MAP data: one bit per arrangement of the
# neighborhood plus the center cell
MAP_PREFIX = "MAP"
MAP_WIDTHS = {
    neighborhood: -(-(2 << neighborhood.size) // 6)
    for neighborhood in Neighborhood
}


@dataclass(frozen=True)
class Detection:
    """Result of classifying a rule string."""
    notation: Notation
    neighborhood: Neighborhood
    suffix_position: Optional[int] = None


def _starts_with_map(string: str) -> bool:
    return string.startswith(MAP_PREFIX)


def _starts_with_b(string: str) -> bool:
    return string[:1] in ("B", "b") and ("S" in string or "s" in string)


def _starts_with_states(string: str) -> bool:
    return len(string) >= 2 and string[0] in "gGcC" and string[1] in DIGITS


def _starts_with_digits(string: str) -> bool:
    return string[:1] == "/" or string[:1] in DIGITS


def _sb_groups(string: str) -> Notation:
    slashes = string.count("/")
    if slashes == 1:
        return Notation.SB
    if slashes == 2:
        return Notation.GOLLY
    raise RuleSyntaxError(
        f"S/B notation takes 2 or 3 '/'-separated groups, found {slashes + 1}",
        rule_string=string,
    )


_PREDICATES: List[Tuple[Callable[[str], bool], Callable[[str], Notation]]] = [
    (_starts_with_map, lambda s: Notation.MAP),
    (_starts_with_b, lambda s: Notation.BS),
    (_starts_with_states, lambda s: Notation.CATAGOLUE),
    (_starts_with_digits, _sb_groups),
]


def detect_topology(string: str) -> Tuple[Neighborhood, Optional[int]]:
    """
    Find the topology suffix letter.

    Returns the neighborhood and the position of its suffix letter
    (None when absent, i.e. the square grid).

    Raises:
        CombinedTopologyError: more than one suffix letter
    """
    positions = [i for i, c in enumerate(string) if c in SUFFIX_LETTERS]
    if not positions:
        return Neighborhood.MOORE, None
    if len(positions) > 1:
        first, second = string[positions[0]], string[positions[1]]
        if first.upper() == second.upper():
            reason = f"topology suffix {first.upper()!r} given twice"
        else:
            reason = f"topology suffixes {first.upper()!r} and {second.upper()!r} cannot be combined"
        raise CombinedTopologyError(reason, rule_string=string, position=positions[1])
    return Neighborhood.from_suffix(string[positions[0]]), positions[0]


def map_layout(string: str) -> Neighborhood:
    """
    Neighborhood of a MAP string, from the length of its data.

    The largest neighborhood whose data fits is chosen; anything after the
    data (padding, state count) is checked by the MAP parser.

    Raises:
        RuleSyntaxError: data too short for any neighborhood
    """
    length = len(string) - len(MAP_PREFIX)
    for neighborhood, width in sorted(MAP_WIDTHS.items(), key=lambda item: -item[1]):
        if width <= length:
            return neighborhood
    widths = ", ".join(str(w) for w in sorted(MAP_WIDTHS.values()))
    raise RuleSyntaxError(
        f"MAP data of {length} characters is too short, expected {widths}",
        rule_string=string,
        position=len(string),
    )


def detect_notation(string: str) -> Detection:
    """
    Classify a rule string.

    Raises:
        RuleSyntaxError: no grammar matches
        CombinedTopologyError: conflicting topology suffixes
    """
    if not string:
        raise RuleSyntaxError("empty rule string", rule_string=string)

    for predicate, select in _PREDICATES:
        if predicate(string):
            notation = select(string)
            break
    else:
        if string[:1] in ("B", "b"):
            reason = "B/S notation needs an 'S' field"
        else:
            reason = (
                f"unexpected {string[0]!r}: rule strings start with 'B', "
                "a Generations prefix like 'g3', or survival digits"
            )
        raise RuleSyntaxError(reason, rule_string=string, position=0)

    if notation is Notation.MAP:
        # Base64 data may contain H and V
        neighborhood, suffix_position = map_layout(string), None
    else:
        neighborhood, suffix_position = detect_topology(string)
    logger.debug(
        "Detected %s notation on %s neighborhood for %r",
        notation.value, neighborhood.value, string,
    )
    return Detection(notation, neighborhood, suffix_position)

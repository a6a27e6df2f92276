"""
Rule assembly: final cross-checks and the ParsedRule value.
"""

from __future__ import annotations
import logging

from ..core.rule import Field, ParsedRule
from ..core.topology import Neighborhood, Topology
from ..errors import OutOfRangeError, TrailingInputError, UnsupportedTopologyError
from .tokenizer import ScanResult

logger = logging.getLogger(__name__)


def _describe(neighborhood: Neighborhood) -> str:
    if neighborhood.suffix is None:
        return f"the {neighborhood.value} neighborhood (no suffix)"
    return f"the {neighborhood.value} neighborhood (suffix {neighborhood.suffix!r})"


def assemble(scan: ScanResult) -> ParsedRule:
    """
    Validate a scanned rule string and build the ParsedRule.

    Checks, in order:
    1. the detected neighborhood is accepted by the rule family
    2. the whole input was consumed
    3. every neighbor count is in range for the neighborhood

    Raises:
        UnsupportedTopologyError: family does not take this neighborhood
        TrailingInputError: characters left after the rule
        OutOfRangeError: neighbor count above the neighborhood size
    """
    string = scan.string
    neighborhood = scan.detection.neighborhood

    if not scan.family.accepts(neighborhood):
        expected = " or ".join(sorted(_describe(n) for n in scan.family.neighborhoods))
        raise UnsupportedTopologyError(
            f"{scan.family.name} rules take {expected}, not {_describe(neighborhood)}",
            rule_string=string,
            position=scan.detection.suffix_position,
        )

    if scan.consumed < len(string):
        raise TrailingInputError(
            f"unexpected trailing input {string[scan.consumed:]!r}",
            rule_string=string,
            position=scan.consumed,
        )

    for field, conditions in ((Field.BIRTH, scan.births), (Field.SURVIVAL, scan.survivals)):
        for count in conditions.seen_counts:
            if count > neighborhood.max_count:
                raise OutOfRangeError(
                    f"neighbor count {count} exceeds {neighborhood.max_count} "
                    f"on {_describe(neighborhood)}",
                    rule_string=string,
                    position=conditions.position_of(count),
                    field=field.value,
                )

    topology = Topology.of(neighborhood, scan.isotropic)
    rule = ParsedRule(
        births=scan.births.seal(),
        survivals=scan.survivals.seal(),
        topology=topology,
        states=scan.states,
    )
    logger.debug("Assembled %s rule from %r", topology.value, string)
    return rule

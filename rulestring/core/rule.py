"""
Parsed rule values handed to callers.

- ParsedRule: rules written with neighbor counts (B/S, S/B, Golly, Catagolue)
- ParsedMap: non-isotropic MAP rules, one flag per neighborhood bitmask
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from .conditions import ConditionSet
from .topology import Neighborhood, Topology, popcount


class Field(Enum):
    """Condition fields of a rule string."""
    BIRTH = "B"
    SURVIVAL = "S"


@dataclass(frozen=True)
class ParsedRule:
    """
    Normalized result of parsing a rule string.

    The same rule written in any supported notation parses to an equal
    ParsedRule:

        parse("B3/S23") == parse("23/3")
        parse("B357/S3457/C5") == parse("3457/357/5") == parse("g5b357s3457")

    Attributes:
        births: Conditions under which a dead cell is born
        survivals: Conditions under which a live cell survives
        topology: Neighborhood and notation of the rule
        states: Number of cell states for Generations syntax, else None
    """
    births: ConditionSet
    survivals: ConditionSet
    topology: Topology
    states: Optional[int] = None

    @property
    def neighborhood(self) -> Neighborhood:
        return self.topology.neighborhood

    @property
    def generations(self) -> int:
        """Number of cell states, 2 for ordinary (binary) rules."""
        return self.states if self.states is not None else 2

    def conditions(self, field: Field) -> ConditionSet:
        return self.births if field is Field.BIRTH else self.survivals

    def neighborhood_masks(self, field: Field) -> List[Tuple[int, int]]:
        """(count, bitmask) pairs triggering the event, ascending."""
        return self.conditions(field).neighborhood_masks(self.topology)


@dataclass(frozen=True)
class ParsedMap:
    """
    Result of parsing a MAP rule string.

    MAP rules list the triggering neighborhoods directly, so they need not
    be isotropic. Bitmasks use the layout of `neighborhood` (see
    rulestring.core.topology).

    Attributes:
        births: Bitmasks under which a dead cell is born
        survivals: Bitmasks under which a live cell survives
        neighborhood: Neighborhood the MAP data was written for
        states: Number of cell states for Generations syntax, else None
    """
    births: FrozenSet[int]
    survivals: FrozenSet[int]
    neighborhood: Neighborhood
    states: Optional[int] = None

    @property
    def generations(self) -> int:
        """Number of cell states, 2 for ordinary (binary) rules."""
        return self.states if self.states is not None else 2

    def masks(self, field: Field) -> FrozenSet[int]:
        return self.births if field is Field.BIRTH else self.survivals

    def neighborhood_masks(self, field: Field) -> List[Tuple[int, int]]:
        """(count, bitmask) pairs triggering the event, ascending."""
        return sorted((popcount(mask), mask) for mask in self.masks(field))

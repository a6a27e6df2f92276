"""
Extensibility layer: parse rule strings straight into caller-defined types.

A rule representation opts into a family of notations by subclassing one
of the abstract classes below and supplying its constructor. The parser
never builds a concrete rule itself; it calls the constructor once the
string has been parsed and validated.

    class Rule(ParseLife):
        def __init__(self, b, s):
            self.b, self.s = b, s

        @classmethod
        def from_bs(cls, b, s):
            return cls(b, s)

    life = Rule.parse_rule("B3/S23")
    life.b, life.s   # [3], [2, 3]

Data handed to the constructors:
- totalistic families: ascending lists of neighbor counts
- isotropic families: ascending lists of (count, bitmask) pairs, one per
  neighborhood that triggers the event; these families also take MAP
  rules, whose triggering neighborhoods need not be isotropic
- Generations families: additionally the number of states (2 when the
  rule string has none)

A representation should implement one family; the entry point is chosen
by which class it derives from, never by inspecting the string.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Union

from .config import ParseOptions
from .core.conditions import ConditionSet
from .core.rule import Field, ParsedMap, ParsedRule
from .core.tables import embed_masks
from .core.topology import Neighborhood
from .parser import HEX, LIFE, NEUMANN, NT_HEX, NT_LIFE, NT_NEUMANN, RuleFamily, parse_family

CountData = List[int]
MaskData = List[Tuple[int, int]]


def totalistic_data(conditions: ConditionSet) -> CountData:
    """Neighbor counts of a totalistic condition set."""
    return conditions.counts


def isotropic_data(rule: Union[ParsedRule, ParsedMap], field: Field, target: Neighborhood) -> MaskData:
    """
    (count, bitmask) pairs of one field of a rule on the `target` neighborhood.

    Rules written for a smaller neighborhood are embedded into the Moore
    neighborhood: every Moore bitmask whose restriction matches is listed,
    with the count of the original neighborhood.
    """
    pairs = rule.neighborhood_masks(field)
    if rule.neighborhood is target:
        return sorted(pairs)
    embedded = []
    for count, mask in pairs:
        embedded.extend((count, int(m)) for m in embed_masks([mask], rule.neighborhood))
    return sorted(embedded)


class TotalisticParser(ABC):
    """Base for totalistic families: constructor takes neighbor counts."""

    family: RuleFamily

    @classmethod
    @abstractmethod
    def from_bs(cls, b: CountData, s: CountData):
        """Construct the rule from birth and survival counts."""

    @classmethod
    def parse_rule(cls, string: str, options: Optional[ParseOptions] = None):
        rule = parse_family(string, cls.family, options)
        return cls.from_bs(totalistic_data(rule.births), totalistic_data(rule.survivals))


class TotalisticGenParser(ABC):
    """Base for totalistic Generations families."""

    family: RuleFamily

    @classmethod
    @abstractmethod
    def from_bsg(cls, b: CountData, s: CountData, states: int):
        """Construct the rule from birth and survival counts and the state count."""

    @classmethod
    def parse_rule(cls, string: str, options: Optional[ParseOptions] = None):
        rule = parse_family(string, cls.family.generations_variant(), options)
        return cls.from_bsg(
            totalistic_data(rule.births),
            totalistic_data(rule.survivals),
            rule.generations,
        )


class IsotropicParser(ABC):
    """Base for isotropic families: constructor takes (count, bitmask) pairs."""

    family: RuleFamily
    target: Neighborhood

    @classmethod
    @abstractmethod
    def from_bs(cls, b: MaskData, s: MaskData):
        """Construct the rule from birth and survival neighborhoods."""

    @classmethod
    def parse_rule(cls, string: str, options: Optional[ParseOptions] = None):
        rule = parse_family(string, cls.family, options)
        return cls.from_bs(
            isotropic_data(rule, Field.BIRTH, cls.target),
            isotropic_data(rule, Field.SURVIVAL, cls.target),
        )


class IsotropicGenParser(ABC):
    """Base for isotropic Generations families."""

    family: RuleFamily
    target: Neighborhood

    @classmethod
    @abstractmethod
    def from_bsg(cls, b: MaskData, s: MaskData, states: int):
        """Construct the rule from birth and survival neighborhoods and the state count."""

    @classmethod
    def parse_rule(cls, string: str, options: Optional[ParseOptions] = None):
        rule = parse_family(string, cls.family.generations_variant(), options)
        return cls.from_bsg(
            isotropic_data(rule, Field.BIRTH, cls.target),
            isotropic_data(rule, Field.SURVIVAL, cls.target),
            rule.generations,
        )


class ParseLife(TotalisticParser):
    """
    Totalistic Life-like rules on the square grid, e.g. `B3/S23`, `23/3`.
    """
    family = LIFE


class ParseLifeGen(TotalisticGenParser):
    """
    Totalistic Life-like Generations rules, e.g. `B357/S3457/C5`,
    `3457/357/5`, `g5b357s3457`.
    """
    family = LIFE


class ParseNtLife(IsotropicParser):
    """
    Isotropic non-totalistic rules on the square grid, e.g.
    `B2ci3ai4c8/S02ae3eijkq4iz5ar6i7e`.

    Totalistic square rules are accepted too, as are hexagonal (`H`) and
    von Neumann (`V`) rules, embedded into the Moore neighborhood. Bitmasks
    are 8-bit, bit 7 = NW ... bit 0 = SE.
    """
    family = NT_LIFE
    target = Neighborhood.MOORE


class ParseNtLifeGen(IsotropicGenParser):
    """Isotropic non-totalistic Generations rules on the square grid."""
    family = NT_LIFE
    target = Neighborhood.MOORE


class ParseHex(TotalisticParser):
    """Totalistic hexagonal rules, e.g. `B2/S34H`."""
    family = HEX


class ParseHexGen(TotalisticGenParser):
    """Totalistic hexagonal Generations rules, e.g. `B2/S34H/C4`."""
    family = HEX


class ParseNtHex(IsotropicParser):
    """
    Isotropic non-totalistic hexagonal rules, e.g. `B2o3-o4m/S12m3o4m5H`.

    Bitmasks are 6-bit (the Moore layout without NE and SW).
    """
    family = NT_HEX
    target = Neighborhood.HEXAGONAL


class ParseNtHexGen(IsotropicGenParser):
    """Isotropic non-totalistic hexagonal Generations rules."""
    family = NT_HEX
    target = Neighborhood.HEXAGONAL


class ParseNeumann(TotalisticParser):
    """Totalistic rules on the von Neumann neighborhood, e.g. `B2/S013V`."""
    family = NEUMANN


class ParseNeumannGen(TotalisticGenParser):
    """von Neumann Generations rules, e.g. `B2/S013V/C3`."""
    family = NEUMANN


class ParseNtNeumann(IsotropicParser):
    """
    Non-totalistic rules on the von Neumann neighborhood: totalistic `V`
    rules and MAP rules, e.g. `B2/S013V`, `MAPHmlphg`.

    Bitmasks are 4-bit, bit 3 = N, 2 = W, 1 = E, 0 = S.
    """
    family = NT_NEUMANN
    target = Neighborhood.VON_NEUMANN


class ParseNtNeumannGen(IsotropicGenParser):
    """Non-totalistic von Neumann Generations rules, e.g. `MAPHmlphg/3`."""
    family = NT_NEUMANN
    target = Neighborhood.VON_NEUMANN

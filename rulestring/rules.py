"""
Ready-made rule representations backed by numpy lookup arrays.

Each class implements a Generations family of the extensibility layer, so
it accepts both ordinary and Generations rule strings:

    life = LifeRule.parse_rule("B3/S23")
    life.born(3)          # True
    life.survives(4)      # False
    life.states           # 2

    brain = LifeRule.parse_rule("/2/3")
    brain.states          # 3

Totalistic rules index their arrays by neighbor count, isotropic rules by
neighborhood bitmask (see rulestring.core.topology for the bit layout).
Isotropic rules also take MAP rules, which need not be isotropic:

    NtLifeRule.parse_rule("MAPARYXfhZofugWaH7oaIDogBZofuhogOiAaIDogIAAgAAWaH7oaIDogGiA6ICAAIAAaIDogIAAgACAAIAAAAAAAA")
"""

from __future__ import annotations
from typing import Iterable, Tuple
import numpy as np

from .core.topology import Neighborhood
from .traits import (
    ParseHexGen,
    ParseLifeGen,
    ParseNeumannGen,
    ParseNtHexGen,
    ParseNtLifeGen,
    ParseNtNeumannGen,
)


class TotalisticRule:
    """
    Totalistic rule: births[n] / survivals[n] tell whether n live neighbors
    cause a birth / survival.
    """

    neighborhood: Neighborhood = Neighborhood.MOORE

    def __init__(self, births: Iterable[int], survivals: Iterable[int], states: int = 2):
        size = self.neighborhood.max_count + 1
        self.births = np.zeros(size, dtype=bool)
        self.survivals = np.zeros(size, dtype=bool)
        self.births[list(births)] = True
        self.survivals[list(survivals)] = True
        self.states = states

    @classmethod
    def from_bsg(cls, b, s, states: int):
        return cls(b, s, states)

    def born(self, count: int) -> bool:
        return bool(self.births[count])

    def survives(self, count: int) -> bool:
        return bool(self.survivals[count])

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (np.array_equal(self.births, other.births)
                and np.array_equal(self.survivals, other.survivals)
                and self.states == other.states)

    def __hash__(self) -> int:
        return hash((self.births.tobytes(), self.survivals.tobytes(), self.states))

    def __repr__(self) -> str:
        b = "".join(str(n) for n in np.flatnonzero(self.births))
        s = "".join(str(n) for n in np.flatnonzero(self.survivals))
        return f"{type(self).__name__}(B{b}/S{s}, states={self.states})"


class IsotropicRule:
    """
    Non-totalistic rule: births[mask] / survivals[mask] tell whether the
    neighborhood `mask` causes a birth / survival.
    """

    neighborhood: Neighborhood = Neighborhood.MOORE

    def __init__(
        self,
        births: Iterable[Tuple[int, int]],
        survivals: Iterable[Tuple[int, int]],
        states: int = 2,
    ):
        size = self.neighborhood.mask_count
        self.births = np.zeros(size, dtype=bool)
        self.survivals = np.zeros(size, dtype=bool)
        self.births[[mask for _, mask in births]] = True
        self.survivals[[mask for _, mask in survivals]] = True
        self.states = states

    @classmethod
    def from_bsg(cls, b, s, states: int):
        return cls(b, s, states)

    def born(self, mask: int) -> bool:
        return bool(self.births[mask])

    def survives(self, mask: int) -> bool:
        return bool(self.survivals[mask])

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (np.array_equal(self.births, other.births)
                and np.array_equal(self.survivals, other.survivals)
                and self.states == other.states)

    def __hash__(self) -> int:
        return hash((self.births.tobytes(), self.survivals.tobytes(), self.states))

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({int(self.births.sum())} birth / "
                f"{int(self.survivals.sum())} survival neighborhoods, states={self.states})")


class LifeRule(TotalisticRule, ParseLifeGen):
    """Totalistic square-grid rule."""
    neighborhood = Neighborhood.MOORE


class HexRule(TotalisticRule, ParseHexGen):
    """Totalistic hexagonal rule."""
    neighborhood = Neighborhood.HEXAGONAL


class NeumannRule(TotalisticRule, ParseNeumannGen):
    """Totalistic von Neumann rule."""
    neighborhood = Neighborhood.VON_NEUMANN


class NtLifeRule(IsotropicRule, ParseNtLifeGen):
    """Isotropic square-grid rule over 8-bit neighborhoods."""
    neighborhood = Neighborhood.MOORE


class NtHexRule(IsotropicRule, ParseNtHexGen):
    """Isotropic hexagonal rule over 6-bit neighborhoods."""
    neighborhood = Neighborhood.HEXAGONAL


class NtNeumannRule(IsotropicRule, ParseNtNeumannGen):
    """Von Neumann rule over 4-bit neighborhoods, as written by MAP rules."""
    neighborhood = Neighborhood.VON_NEUMANN


__all__ = [
    "TotalisticRule",
    "IsotropicRule",
    "LifeRule",
    "HexRule",
    "NeumannRule",
    "NtLifeRule",
    "NtHexRule",
    "NtNeumannRule",
]

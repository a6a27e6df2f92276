"""
Rule families: which rule strings a parse entry point accepts.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import FrozenSet

from ..core.topology import Neighborhood


@dataclass(frozen=True)
class RuleFamily:
    """
    Descriptor of a parse entry point.

    Attributes:
        name: Family name used in error messages
        neighborhoods: Neighborhoods (topology suffixes) accepted
        isotropic: Configuration letters, negation and MAP rules allowed
        generations: State-count syntax allowed
    """
    name: str
    neighborhoods: FrozenSet[Neighborhood]
    isotropic: bool = False
    generations: bool = False

    def accepts(self, neighborhood: Neighborhood) -> bool:
        return neighborhood in self.neighborhoods

    def generations_variant(self) -> "RuleFamily":
        """The same family with Generations syntax enabled."""
        if self.generations:
            return self
        return replace(self, name=f"{self.name} Generations", generations=True)


LIFE = RuleFamily("Life", frozenset({Neighborhood.MOORE}))
# Square isotropic rules also take hexagonal and von Neumann rules,
# embedded into the Moore neighborhood
NT_LIFE = RuleFamily("Isotropic Life", frozenset(Neighborhood), isotropic=True)
HEX = RuleFamily("Hexagonal", frozenset({Neighborhood.HEXAGONAL}))
NT_HEX = RuleFamily("Isotropic hexagonal", frozenset({Neighborhood.HEXAGONAL}), isotropic=True)
NEUMANN = RuleFamily("von Neumann", frozenset({Neighborhood.VON_NEUMANN}))
# No configuration letters exist on the von Neumann neighborhood; the flag
# admits MAP rules
NT_NEUMANN = RuleFamily("Non-totalistic von Neumann", frozenset({Neighborhood.VON_NEUMANN}), isotropic=True)

ANY = RuleFamily("Any", frozenset(Neighborhood), isotropic=True, generations=True)

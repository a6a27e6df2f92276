"""
Neighborhoods and topologies of Life-like rules.

A neighborhood fixes which cells around a cell are counted:

    Moore (8)        Hexagonal (6)      von Neumann (4)
    NW  N  NE        NW  N                  N
     W  _  E          W  _  E            W  _  E
    SW  S  SE             S  SE             S

Neighborhood bitmasks use the Moore layout with bit 7 = NW, 6 = N, 5 = NE,
4 = W, 3 = E, 2 = SW, 1 = S, 0 = SE. The hexagonal layout drops NE and SW
(6 bits), the von Neumann layout keeps N, W, E, S (4 bits).

A topology is a neighborhood together with the notation used to describe
conditions on it (totalistic counts or isotropic configuration letters).
"""

from __future__ import annotations
from enum import Enum
from typing import Optional
import numpy as np


# Number of set bits of every byte
POPCOUNT: np.ndarray = np.unpackbits(
    np.arange(256, dtype=np.uint8)[:, None], axis=1
).sum(axis=1).astype(np.int8)
POPCOUNT.flags.writeable = False


class Neighborhood(Enum):
    """Neighbor adjacency pattern, selected by the rule string suffix."""
    MOORE = "moore"              # no suffix
    HEXAGONAL = "hexagonal"      # suffix H
    VON_NEUMANN = "von_neumann"  # suffix V

    @property
    def size(self) -> int:
        """Number of neighbors."""
        return _SIZES[self]

    @property
    def max_count(self) -> int:
        """Largest valid neighbor count."""
        return _SIZES[self]

    @property
    def mask_count(self) -> int:
        """Number of distinct neighborhood bitmasks."""
        return 1 << _SIZES[self]

    @property
    def suffix(self) -> Optional[str]:
        """Rule string suffix letter, None for the default square grid."""
        return _SUFFIXES[self]

    @classmethod
    def from_suffix(cls, char: str) -> "Neighborhood":
        """Convert a suffix character (either case) to a Neighborhood."""
        upper = char.upper()
        for neighborhood, suffix in _SUFFIXES.items():
            if suffix == upper:
                return neighborhood
        raise ValueError(f"Unknown topology suffix: {char}")


_SIZES = {
    Neighborhood.MOORE: 8,
    Neighborhood.HEXAGONAL: 6,
    Neighborhood.VON_NEUMANN: 4,
}

_SUFFIXES = {
    Neighborhood.MOORE: None,
    Neighborhood.HEXAGONAL: "H",
    Neighborhood.VON_NEUMANN: "V",
}

SUFFIX_LETTERS = frozenset("HhVv")


class Topology(Enum):
    """Topology tag handed to simulation engines with the parsed rule."""
    SQUARE_TOTALISTIC = "square_totalistic"
    SQUARE_ISOTROPIC = "square_isotropic"
    HEXAGONAL_TOTALISTIC = "hexagonal_totalistic"
    HEXAGONAL_ISOTROPIC = "hexagonal_isotropic"
    VON_NEUMANN = "von_neumann"

    @property
    def neighborhood(self) -> Neighborhood:
        if self in (Topology.SQUARE_TOTALISTIC, Topology.SQUARE_ISOTROPIC):
            return Neighborhood.MOORE
        if self in (Topology.HEXAGONAL_TOTALISTIC, Topology.HEXAGONAL_ISOTROPIC):
            return Neighborhood.HEXAGONAL
        return Neighborhood.VON_NEUMANN

    @property
    def is_isotropic(self) -> bool:
        return self in (Topology.SQUARE_ISOTROPIC, Topology.HEXAGONAL_ISOTROPIC)

    @classmethod
    def of(cls, neighborhood: Neighborhood, isotropic: bool) -> "Topology":
        """
        Pick the topology for a neighborhood and notation.

        Von Neumann rules have no isotropic notation, so the flag is
        ignored for them.
        """
        if neighborhood is Neighborhood.MOORE:
            return cls.SQUARE_ISOTROPIC if isotropic else cls.SQUARE_TOTALISTIC
        if neighborhood is Neighborhood.HEXAGONAL:
            return cls.HEXAGONAL_ISOTROPIC if isotropic else cls.HEXAGONAL_TOTALISTIC
        return cls.VON_NEUMANN


def popcount(mask: int) -> int:
    """Number of live neighbors in a neighborhood bitmask."""
    return int(POPCOUNT[mask & 0xFF])

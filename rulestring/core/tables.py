"""
Neighbor-configuration tables for isotropic non-totalistic notation.

For every neighbor count an isotropic rule distinguishes the arrangements
of live neighbors up to rotation and reflection. Each equivalence class is
tagged with a letter; the same letter means different things at different
counts. For example, on the square grid:

    2c        2e        2k        2a        2i        2n
    1 . 1     . 1 .     . 1 .     1 1 .     . 1 .     1 . .
    . _ .     1 _ .     . _ .     . _ .     . _ .     . _ .
    . . .     . . .     1 . .     . . .     . 1 .     . . 1

Counts 0 and the maximum have a single implicit class and no letters.

Tables are module-level constants: read-only and shared by every parse.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, NamedTuple, Optional, Tuple
import numpy as np

from .topology import POPCOUNT, Neighborhood, Topology


class Configuration(NamedTuple):
    """One rotation/reflection class of neighbor arrangements."""
    symbol: str                # Letter used in rule strings
    mask: int                  # Canonical (smallest) bitmask of the class
    orbit: Tuple[int, ...]     # Every bitmask in the class, ascending


# Square grid (Hensel notation), bit layout described in topology.py
_MOORE_ORBITS: Dict[int, Dict[str, Tuple[int, ...]]] = {
    1: {
        "c": (0x01, 0x04, 0x20, 0x80),
        "e": (0x02, 0x08, 0x10, 0x40),
    },
    2: {
        "c": (0x05, 0x21, 0x84, 0xa0),
        "e": (0x0a, 0x12, 0x48, 0x50),
        "k": (0x0c, 0x11, 0x22, 0x30, 0x41, 0x44, 0x82, 0x88),
        "a": (0x03, 0x06, 0x09, 0x14, 0x28, 0x60, 0x90, 0xc0),
        "i": (0x18, 0x42),
        "n": (0x24, 0x81),
    },
    3: {
        "c": (0x25, 0x85, 0xa1, 0xa4),
        "e": (0x1a, 0x4a, 0x52, 0x58),
        "k": (0x32, 0x4c, 0x51, 0x8a),
        "a": (0x0b, 0x16, 0x68, 0xd0),
        "i": (0x07, 0x29, 0x94, 0xe0),
        "n": (0x0d, 0x15, 0x23, 0x61, 0x86, 0xa8, 0xb0, 0xc4),
        "y": (0x31, 0x45, 0x8c, 0xa2),
        "q": (0x26, 0x2c, 0x34, 0x64, 0x83, 0x89, 0x91, 0xc1),
        "j": (0x0e, 0x13, 0x2a, 0x49, 0x54, 0x70, 0x92, 0xc8),
        "r": (0x19, 0x1c, 0x38, 0x43, 0x46, 0x62, 0x98, 0xc2),
    },
    4: {
        "c": (0xa5,),
        "e": (0x5a,),
        "k": (0x33, 0x4d, 0x55, 0x71, 0x8e, 0xaa, 0xb2, 0xcc),
        "a": (0x0f, 0x17, 0x2b, 0x69, 0x96, 0xd4, 0xe8, 0xf0),
        "i": (0x1d, 0x63, 0xb8, 0xc6),
        "n": (0x27, 0x2d, 0x87, 0x95, 0xa9, 0xb4, 0xe1, 0xe4),
        "y": (0x35, 0x65, 0x8d, 0xa3, 0xa6, 0xac, 0xb1, 0xc5),
        "q": (0x36, 0x6c, 0x8b, 0xd1),
        "j": (0x3a, 0x4e, 0x53, 0x59, 0x5c, 0x72, 0x9a, 0xca),
        "r": (0x1b, 0x1e, 0x4b, 0x56, 0x6a, 0x78, 0xd2, 0xd8),
        "t": (0x39, 0x47, 0x9c, 0xe2),
        "w": (0x2e, 0x74, 0x93, 0xc9),
        "z": (0x3c, 0x66, 0x99, 0xc3),
    },
    5: {
        "c": (0x5b, 0x5e, 0x7a, 0xda),
        "e": (0xa7, 0xad, 0xb5, 0xe5),
        "k": (0x75, 0xae, 0xb3, 0xcd),
        "a": (0x2f, 0x97, 0xe9, 0xf4),
        "i": (0x1f, 0x6b, 0xd6, 0xf8),
        "n": (0x3b, 0x4f, 0x57, 0x79, 0x9e, 0xdc, 0xea, 0xf2),
        "y": (0x5d, 0x73, 0xba, 0xce),
        "q": (0x3e, 0x6e, 0x76, 0x7c, 0x9b, 0xcb, 0xd3, 0xd9),
        "j": (0x37, 0x6d, 0x8f, 0xab, 0xb6, 0xd5, 0xec, 0xf1),
        "r": (0x3d, 0x67, 0x9d, 0xb9, 0xbc, 0xc7, 0xe3, 0xe6),
    },
    6: {
        "c": (0x5f, 0x7b, 0xde, 0xfa),
        "e": (0xaf, 0xb7, 0xed, 0xf5),
        "k": (0x77, 0x7d, 0xbb, 0xbe, 0xcf, 0xdd, 0xee, 0xf3),
        "a": (0x3f, 0x6f, 0x9f, 0xd7, 0xeb, 0xf6, 0xf9, 0xfc),
        "i": (0xbd, 0xe7),
        "n": (0x7e, 0xdb),
    },
    7: {
        "c": (0x7f, 0xdf, 0xfb, 0xfe),
        "e": (0xbf, 0xef, 0xf7, 0xfd),
    },
}

# Hexagonal grid: o = ortho (adjacent), m = meta, p = para
_HEXAGONAL_ORBITS: Dict[int, Dict[str, Tuple[int, ...]]] = {
    1: {
        "o": (0x01, 0x02, 0x04, 0x08, 0x10, 0x20),
    },
    2: {
        "o": (0x03, 0x05, 0x0a, 0x14, 0x28, 0x30),
        "m": (0x06, 0x09, 0x11, 0x18, 0x22, 0x24),
        "p": (0x0c, 0x12, 0x21),
    },
    3: {
        "o": (0x07, 0x0b, 0x15, 0x2a, 0x34, 0x38),
        "m": (0x0d, 0x0e, 0x13, 0x16, 0x1a, 0x1c, 0x23, 0x25, 0x29, 0x2c, 0x31, 0x32),
        "p": (0x19, 0x26),
    },
    4: {
        "o": (0x0f, 0x17, 0x2b, 0x35, 0x3a, 0x3c),
        "m": (0x1b, 0x1d, 0x27, 0x2e, 0x36, 0x39),
        "p": (0x1e, 0x2d, 0x33),
    },
    5: {
        "o": (0x1f, 0x2f, 0x37, 0x3b, 0x3d, 0x3e),
    },
}


def _build_table(
    orbits: Dict[int, Dict[str, Tuple[int, ...]]],
) -> Mapping[int, Tuple[Configuration, ...]]:
    table = {}
    for count, classes in orbits.items():
        table[count] = tuple(
            Configuration(symbol, min(masks), tuple(sorted(masks)))
            for symbol, masks in classes.items()
        )
    return MappingProxyType(table)


_TABLES: Mapping[Topology, Mapping[int, Tuple[Configuration, ...]]] = MappingProxyType({
    Topology.SQUARE_ISOTROPIC: _build_table(_MOORE_ORBITS),
    Topology.HEXAGONAL_ISOTROPIC: _build_table(_HEXAGONAL_ORBITS),
})

# Letters per neighborhood, and every letter any table uses
ALPHABETS: Mapping[Neighborhood, frozenset] = MappingProxyType({
    Neighborhood.MOORE: frozenset(
        c.symbol for configs in _TABLES[Topology.SQUARE_ISOTROPIC].values() for c in configs
    ),
    Neighborhood.HEXAGONAL: frozenset(
        c.symbol for configs in _TABLES[Topology.HEXAGONAL_ISOTROPIC].values() for c in configs
    ),
    Neighborhood.VON_NEUMANN: frozenset(),
})
CONFIGURATION_LETTERS: frozenset = frozenset().union(*ALPHABETS.values())


def configurations_for(count: int, topology: Topology) -> Tuple[Configuration, ...]:
    """
    Ordered configuration classes for a neighbor count.

    Total over every (count, topology) pair: returns an empty tuple for
    totalistic topologies, for count 0 and the maximum count (single
    implicit class), and for counts outside the topology's range.
    """
    table = _TABLES.get(topology)
    if table is None:
        return ()
    return table.get(count, ())


def lookup_configuration(count: int, symbol: str, topology: Topology) -> Optional[Configuration]:
    """Find the class tagged `symbol` at `count`, or None."""
    for configuration in configurations_for(count, topology):
        if configuration.symbol == symbol:
            return configuration
    return None


def neighborhoods_with_count(count: int, neighborhood: Neighborhood) -> np.ndarray:
    """All bitmasks of `neighborhood` with exactly `count` live neighbors."""
    return np.flatnonzero(POPCOUNT[:neighborhood.mask_count] == count)


# Projection of every Moore bitmask onto each neighborhood
_MOORE_MASKS = np.arange(256, dtype=np.int64)
_PROJECTIONS: Mapping[Neighborhood, np.ndarray] = MappingProxyType({
    Neighborhood.MOORE: _MOORE_MASKS,
    Neighborhood.HEXAGONAL: (
        (_MOORE_MASKS & 0xc0) >> 2 | (_MOORE_MASKS & 0x18) >> 1 | (_MOORE_MASKS & 0x03)
    ),
    Neighborhood.VON_NEUMANN: (
        (_MOORE_MASKS & 0x40) >> 3 | (_MOORE_MASKS & 0x18) >> 2 | (_MOORE_MASKS & 0x02) >> 1
    ),
})


def project_mask(moore_mask: int, neighborhood: Neighborhood) -> int:
    """Restrict a Moore bitmask to the cells of `neighborhood`."""
    return int(_PROJECTIONS[neighborhood][moore_mask & 0xFF])


def embed_masks(masks: Iterable[int], neighborhood: Neighborhood) -> np.ndarray:
    """
    Embed neighborhood bitmasks into the Moore neighborhood.

    Returns every Moore bitmask whose projection onto `neighborhood` is one
    of `masks`; cells outside `neighborhood` are free.
    """
    wanted = np.fromiter(masks, dtype=np.int64)
    return np.flatnonzero(np.isin(_PROJECTIONS[neighborhood], wanted))

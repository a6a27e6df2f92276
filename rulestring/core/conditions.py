"""
Conditions and condition sets.

A condition says which neighborhoods trigger an event (birth or survival):
either every neighborhood with a given neighbor count (totalistic), or only
those in some configuration classes at that count (isotropic).

    Condition(3)                      # any 3 live neighbors
    Condition(2, frozenset("ak"))     # 2a or 2k

A ConditionSet collects the conditions of one event kind and enforces:
- no neighbor count appears twice
- within a count, no configuration letter repeats (checked by the tokenizer)
- a count is either totalistic or configuration-qualified, never both

Negated forms ("3-ai") are resolved by the tokenizer before insertion, so
a ConditionSet only ever holds positive symbol sets.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple
import numpy as np

from .topology import Topology
from .tables import configurations_for, lookup_configuration, neighborhoods_with_count
from ..errors import DuplicateCountError


@dataclass(frozen=True)
class Condition:
    """
    One neighbor-count condition.

    Attributes:
        count: Number of live neighbors
        symbols: Configuration letters, or None for every configuration
        position: Index in the rule string (not part of equality)
    """
    count: int
    symbols: Optional[FrozenSet[str]] = None
    position: Optional[int] = field(default=None, compare=False, hash=False)

    @property
    def is_totalistic(self) -> bool:
        return self.symbols is None

    def masks(self, topology: Topology) -> np.ndarray:
        """
        Bitmasks satisfying this condition, ascending.

        Symbols are looked up in the tables of `topology`; a totalistic
        condition covers every bitmask of the neighborhood with `count`
        live neighbors.
        """
        if self.symbols is None:
            return neighborhoods_with_count(self.count, topology.neighborhood)
        masks: List[int] = []
        for symbol in self.symbols:
            configuration = lookup_configuration(self.count, symbol, topology)
            if configuration is not None:
                masks.extend(configuration.orbit)
        return np.array(sorted(masks), dtype=np.int64)

    def __repr__(self) -> str:
        if self.symbols is None:
            return f"Condition({self.count})"
        return f"Condition({self.count}{''.join(sorted(self.symbols))})"


def normalize_symbols(
    count: int,
    symbols: FrozenSet[str],
    topology: Topology,
) -> Optional[FrozenSet[str]]:
    """Collapse a symbol set covering every class at `count` to None."""
    every = frozenset(c.symbol for c in configurations_for(count, topology))
    if symbols == every:
        return None
    return symbols


class ConditionSet:
    """
    Conditions for one event kind, keyed by neighbor count.

    Built incrementally by the tokenizer, then sealed by the assembler.
    Once sealed the set is immutable and hashable.

    Example:
        births = ConditionSet("B")
        births.add(Condition(3))
        births.add(Condition(3))   # raises DuplicateCountError
    """

    def __init__(self, field_name: Optional[str] = None):
        self.field_name = field_name
        self._conditions: Dict[int, Condition] = {}
        # Every count given, including ones that resolved to no configuration
        self._seen: Dict[int, Optional[int]] = {}
        self._sealed = False

    @classmethod
    def of(cls, *counts: int, field_name: Optional[str] = None) -> "ConditionSet":
        """Sealed totalistic set from plain counts."""
        result = cls(field_name)
        for count in counts:
            result.add(Condition(count))
        return result.seal()

    def add(self, condition: Condition) -> "ConditionSet":
        """
        Insert a condition.

        A condition with an empty symbol set (every class excluded) marks
        the count as used without storing anything.

        Raises:
            DuplicateCountError: count already present
        """
        if self._sealed:
            raise TypeError("ConditionSet is sealed")
        if condition.count in self._seen:
            raise DuplicateCountError(
                f"neighbor count {condition.count} given twice",
                position=condition.position,
                field=self.field_name,
            )
        self._seen[condition.count] = condition.position
        if condition.symbols is None or condition.symbols:
            self._conditions[condition.count] = condition
        return self

    def seal(self) -> "ConditionSet":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def counts(self) -> List[int]:
        """Counts with at least one triggering configuration, ascending."""
        return sorted(self._conditions)

    @property
    def seen_counts(self) -> List[int]:
        """Every count given in the rule string, ascending."""
        return sorted(self._seen)

    def position_of(self, count: int) -> Optional[int]:
        return self._seen.get(count)

    def get(self, count: int) -> Optional[Condition]:
        return self._conditions.get(count)

    def totalistic_counts(self) -> List[int]:
        """Counts whose condition covers every configuration."""
        return [c.count for c in self if c.is_totalistic]

    def neighborhood_masks(self, topology: Topology) -> List[Tuple[int, int]]:
        """All (count, bitmask) pairs triggering the event, ascending."""
        pairs: List[Tuple[int, int]] = []
        for condition in self:
            pairs.extend((condition.count, int(m)) for m in condition.masks(topology))
        return pairs

    def __contains__(self, count: object) -> bool:
        return count in self._conditions

    def __iter__(self) -> Iterator[Condition]:
        for count in sorted(self._conditions):
            yield self._conditions[count]

    def __len__(self) -> int:
        return len(self._conditions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConditionSet):
            return NotImplemented
        return self._conditions == other._conditions

    def __hash__(self) -> int:
        if not self._sealed:
            raise TypeError("unhashable: ConditionSet is not sealed")
        return hash(frozenset(self._conditions.values()))

    def __repr__(self) -> str:
        inner = ", ".join(repr(c) for c in self)
        return f"ConditionSet({self.field_name or ''}: {inner})"

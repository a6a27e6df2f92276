"""
Character-level state machine over a detected grammar.

All grammars share one shape: fields of count tokens separated by keywords
or '/', followed by optional suffixes. They differ only in delimiters and
field order:

    B/S        B <births> [/] S <survivals> {suffix}
    S/B        <survivals> / <births> {suffix}
    Golly      <survivals> / <births> / <states> {suffix}
    Catagolue  g <states> [/] b <births> [/] s <survivals> {suffix}

A count token is one digit, optionally followed (isotropic families only)
by '-' and configuration letters:

    2ci     count 2, configurations c and i
    3-ai    count 3, every configuration except a and i

Suffixes after the last field (topology letter, state count) may appear in
any order, each at most once.

The tokenizer produces raw tokens first; once the whole string is scanned
it knows whether the rule uses isotropic notation and builds the condition
sets.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import DEFAULT_OPTIONS, ParseOptions
from ..core.conditions import Condition, ConditionSet, normalize_symbols
from ..core.rule import Field
from ..core.tables import CONFIGURATION_LETTERS, configurations_for, lookup_configuration
from ..core.topology import SUFFIX_LETTERS, Topology
from ..errors import (
    AmbiguousConditionError,
    DuplicateCountError,
    DuplicateSymbolError,
    OutOfRangeError,
    RuleParseError,
    RuleSyntaxError,
    UnknownConfigurationError,
)
from .family import RuleFamily
from .grammar import DIGITS, Detection, Notation

_B = frozenset("Bb")
_S = frozenset("Ss")
_FIELD_KEYWORDS = _B | _S
_STATE_KEYWORDS = frozenset("CcGg")


@dataclass
class CountToken:
    """A neighbor count as written, before resolution."""
    count: int
    position: int
    symbols: str = ""
    negated: bool = False

    @property
    def qualified(self) -> bool:
        """Written in isotropic notation."""
        return self.negated or bool(self.symbols)


@dataclass
class ScanResult:
    """Everything the tokenizer extracted from a rule string."""
    string: str
    detection: Detection
    family: RuleFamily
    births: ConditionSet
    survivals: ConditionSet
    isotropic: bool
    states: Optional[int]
    consumed: int
    tokens: Dict[Field, List[CountToken]] = field(default_factory=dict)


def check_states(digits: str, string: str, position: int, options: ParseOptions) -> int:
    """
    Validate a Generations state count written as `digits` at `position`.

    Raises:
        OutOfRangeError: fewer than 2 states or above options.max_states
    """
    states = int(digits)
    if states < 2:
        raise OutOfRangeError(
            f"Generations rules need at least 2 states, got {states}",
            rule_string=string,
            position=position,
        )
    if options.max_states is not None and states > options.max_states:
        raise OutOfRangeError(
            f"number of states {states} exceeds the limit {options.max_states}",
            rule_string=string,
            position=position,
        )
    return states


class Tokenizer:
    """
    Walks a rule string according to its detected notation.

    Example:
        detection = detect_notation("B3/S23")
        scan = Tokenizer("B3/S23", detection, LIFE).run()
        scan.survivals.counts   # [2, 3]
    """

    def __init__(
        self,
        string: str,
        detection: Detection,
        family: RuleFamily,
        options: Optional[ParseOptions] = None,
    ):
        self.string = string
        self.detection = detection
        self.family = family
        self.options = options or DEFAULT_OPTIONS
        self.neighborhood = detection.neighborhood
        self.pos = 0
        self.states: Optional[int] = None
        self._suffix_seen = False
        self._tokens: Dict[Field, List[CountToken]] = {}

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Optional[str]:
        index = self.pos + offset
        if index < len(self.string):
            return self.string[index]
        return None

    def advance(self) -> str:
        char = self.string[self.pos]
        self.pos += 1
        return char

    def accept(self, chars: frozenset) -> bool:
        """Consume the next character if it is one of `chars`."""
        if self.peek() in chars:
            self.pos += 1
            return True
        return False

    def error(
        self,
        cls: type,
        reason: str,
        position: Optional[int] = None,
        field: Optional[Field] = None,
    ) -> RuleParseError:
        return cls(
            reason,
            rule_string=self.string,
            position=self.pos if position is None else position,
            field=field.value if field is not None else None,
        )

    def unexpected(self, expected: str, field: Optional[Field] = None) -> RuleParseError:
        """Error for the character at the cursor when `expected` was due."""
        char = self.peek()
        if char is None:
            return self.error(RuleSyntaxError, f"missing {expected}", field=field)
        if char in SUFFIX_LETTERS:
            return self.error(
                RuleSyntaxError,
                f"topology suffix {char!r} must follow the last field",
                field=field,
            )
        if (char in CONFIGURATION_LETTERS or char == "-") and not self.family.isotropic:
            return self.error(
                RuleSyntaxError,
                f"{char!r} is isotropic notation, not accepted by {self.family.name} rules",
                field=field,
            )
        return self.error(RuleSyntaxError, f"unexpected {char!r}, expected {expected}", field=field)

    # ------------------------------------------------------------------
    # Grammars
    # ------------------------------------------------------------------

    def run(self) -> ScanResult:
        notation = self.detection.notation
        if notation is Notation.BS:
            self._scan_bs()
        elif notation is Notation.CATAGOLUE:
            self._scan_catagolue()
        else:
            self._scan_sb()
        self._scan_suffixes(notation)

        isotropic = self.family.isotropic and any(
            token.qualified for tokens in self._tokens.values() for token in tokens
        )
        return ScanResult(
            string=self.string,
            detection=self.detection,
            family=self.family,
            births=self._build(Field.BIRTH, isotropic),
            survivals=self._build(Field.SURVIVAL, isotropic),
            isotropic=isotropic,
            states=self.states,
            consumed=self.pos,
            tokens=self._tokens,
        )

    def _scan_bs(self) -> None:
        self.advance()  # B
        self._scan_field(Field.BIRTH)
        self.accept(frozenset("/"))
        if not self.accept(_S):
            raise self.unexpected("'S'", Field.BIRTH)
        self._scan_field(Field.SURVIVAL)

    def _scan_catagolue(self) -> None:
        if not self.family.generations:
            raise self.error(
                RuleSyntaxError,
                f"Generations prefix {self.string[:2]!r} not accepted by {self.family.name} rules",
                position=0,
            )
        self.advance()  # g
        self.states = self._scan_states()
        self.accept(frozenset("/"))
        if not self.accept(_B):
            raise self.unexpected("'b'")
        self._scan_field(Field.BIRTH)
        self.accept(frozenset("/"))
        if not self.accept(_S):
            raise self.unexpected("'s'", Field.BIRTH)
        self._scan_field(Field.SURVIVAL)

    def _scan_sb(self) -> None:
        self._scan_field(Field.SURVIVAL)
        if not self.accept(frozenset("/")):
            raise self.unexpected("'/'", Field.SURVIVAL)
        self._scan_field(Field.BIRTH)

    def _scan_suffixes(self, notation: Notation) -> None:
        """Topology letter and state count, in any order."""
        while self.peek() is not None:
            char = self.peek()
            if char in SUFFIX_LETTERS and not self._suffix_seen:
                self.advance()
                self._suffix_seen = True
            elif char == "/" and self.peek(1) in _FIELD_KEYWORDS:
                raise self.error(
                    DuplicateCountError,
                    f"field {self.peek(1).upper()} given twice",
                    position=self.pos + 1,
                )
            elif self._at_state_count(notation):
                if not self.family.generations:
                    break
                if self.states is not None:
                    raise self.error(RuleSyntaxError, "number of states given twice")
                self.accept(frozenset("/"))
                if notation is Notation.BS:
                    self.accept(_STATE_KEYWORDS)
                self.states = self._scan_states()
            elif (char in CONFIGURATION_LETTERS or char == "-") and not self.family.isotropic:
                raise self.unexpected("end of rule")
            else:
                break

    def _at_state_count(self, notation: Notation) -> bool:
        char = self.peek()
        if notation is Notation.BS:
            if char == "/":
                return self.peek(1) in DIGITS or self.peek(1) in _STATE_KEYWORDS
            return char in _STATE_KEYWORDS and self.peek(1) in DIGITS
        if notation is Notation.GOLLY:
            return char == "/"
        return False

    def _scan_states(self) -> int:
        """Generations state count: a plain integer, at least 2."""
        start = self.pos
        while self.peek() in DIGITS:
            self.pos += 1
        if start == self.pos:
            raise self.unexpected("number of states")
        return check_states(self.string[start:self.pos], self.string, start, self.options)

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def _scan_field(self, field: Field) -> None:
        tokens: List[CountToken] = []
        seen = set()
        while self.peek() in DIGITS:
            position = self.pos
            count = int(self.advance())
            if count in seen:
                raise self.error(
                    DuplicateCountError,
                    f"neighbor count {count} given twice",
                    position=position,
                    field=field,
                )
            seen.add(count)
            token = CountToken(count, position)
            if self.family.isotropic:
                self._scan_configurations(token, field)
            tokens.append(token)

        if self.options.require_ordered_counts:
            for previous, token in zip(tokens, tokens[1:]):
                if token.count < previous.count:
                    raise self.error(
                        RuleSyntaxError,
                        f"neighbor counts must increase, got {token.count} after {previous.count}",
                        position=token.position,
                        field=field,
                    )
        self._tokens[field] = tokens

    def _scan_configurations(self, token: CountToken, field: Field) -> None:
        """Optional '-' and configuration letters after a count."""
        topology = Topology.of(self.neighborhood, isotropic=True)
        if self.peek() == "-":
            if len(configurations_for(token.count, topology)) < 2:
                raise self.error(
                    RuleSyntaxError,
                    f"nothing to negate after count {token.count} on the "
                    f"{self.neighborhood.value} neighborhood",
                    field=field,
                )
            self.advance()
            token.negated = True
        while self.peek() in CONFIGURATION_LETTERS:
            letter = self.peek()
            if lookup_configuration(token.count, letter, topology) is None:
                raise self.error(
                    UnknownConfigurationError,
                    f"no configuration {token.count}{letter} on the "
                    f"{self.neighborhood.value} neighborhood",
                    field=field,
                )
            if letter in token.symbols:
                raise self.error(
                    DuplicateSymbolError,
                    f"configuration {token.count}{letter} listed twice",
                    field=field,
                )
            token.symbols += letter
            self.advance()

    def _build(self, field: Field, isotropic: bool) -> ConditionSet:
        conditions = ConditionSet(field.value)
        topology = Topology.of(self.neighborhood, isotropic)
        for token in self._tokens.get(field, []):
            conditions.add(self._resolve(token, topology, field))
        return conditions

    def _resolve(self, token: CountToken, topology: Topology, field: Field) -> Condition:
        """Turn a token into a positive condition."""
        if not topology.is_isotropic:
            return Condition(token.count, position=token.position)

        configurations = configurations_for(token.count, topology)
        letters = frozenset(c.symbol for c in configurations)
        if token.negated:
            symbols = letters - frozenset(token.symbols)
        elif token.symbols:
            symbols = frozenset(token.symbols)
        elif len(configurations) > 1 and not self.options.allow_bare_isotropic_counts:
            raise self.error(
                AmbiguousConditionError,
                f"bare count {token.count} is ambiguous in isotropic notation, "
                f"name its configurations ({''.join(c.symbol for c in configurations)})",
                position=token.position,
                field=field,
            )
        else:
            return Condition(token.count, position=token.position)
        return Condition(
            token.count,
            normalize_symbols(token.count, symbols, topology),
            position=token.position,
        )

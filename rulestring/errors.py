"""
Errors raised while parsing rule strings.

Every error is terminal for the parse call that raised it: no partial rule
is ever returned. All errors derive from RuleParseError (itself a
ValueError), so callers can catch the whole family at once:

    try:
        rule = parse("B3/S23")
    except RuleParseError as e:
        print(e)   # message with position and field
"""

from __future__ import annotations
from typing import Optional


class RuleParseError(ValueError):
    """
    Base class for rule string errors.

    Attributes:
        reason: Human-readable description without location
        rule_string: The input being parsed (if known)
        position: Index of the offending character (if known)
        field: Field being parsed when the error occurred ("B", "S", ...)
    """

    def __init__(
        self,
        reason: str,
        rule_string: Optional[str] = None,
        position: Optional[int] = None,
        field: Optional[str] = None,
    ):
        self.reason = reason
        self.rule_string = rule_string
        self.position = position
        self.field = field
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.field is not None:
            where.append(f"field {self.field}")
        if self.position is not None:
            where.append(f"position {self.position}")
        message = self.reason
        if where:
            message += f" ({', '.join(where)})"
        if self.rule_string is not None:
            message += f" in rule {self.rule_string!r}"
        return message


class RuleSyntaxError(RuleParseError):
    """Unexpected character, missing delimiter, or no grammar matched."""


class UnsupportedTopologyError(RuleSyntaxError):
    """The rule family being parsed does not accept this neighborhood."""


class DuplicateCountError(RuleParseError):
    """The same neighbor count (or field) appears twice."""


class DuplicateSymbolError(DuplicateCountError):
    """A configuration letter is listed twice for the same count."""


class OutOfRangeError(RuleParseError):
    """A neighbor count or state count is outside its valid range."""


class AmbiguousConditionError(RuleParseError):
    """Bare count used in isotropic notation where several classes exist."""


class UnknownConfigurationError(RuleParseError):
    """A configuration letter is not defined for the (count, topology) pair."""


class CombinedTopologyError(RuleParseError):
    """Conflicting or repeated topology suffixes."""


class TrailingInputError(RuleParseError):
    """Unconsumed characters after an otherwise complete rule."""

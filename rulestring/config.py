"""
Configuration for rule string parsing.

Parsing is strict by default. The lenient preset accepts the looser
conventions found in rule strings collected from LifeWiki and similar
sources (bare counts mixed into isotropic strings, unordered counts).
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import List, Optional
import json
from pathlib import Path


@dataclass(frozen=True)
class ParseOptions:
    """
    Options controlling how strictly rule strings are validated.

    Example:
        options = ParseOptions(allow_bare_isotropic_counts=True)
        rule = parse("B35y/S1e2-ci3-a5i", options)
    """
    # Counts in a field must be strictly increasing ("B32/S" is rejected)
    require_ordered_counts: bool = True

    # In isotropic strings a bare count with several configuration
    # classes means "every class" instead of raising AmbiguousConditionError
    allow_bare_isotropic_counts: bool = False

    # Upper bound for the Generations state count (None = unbounded)
    max_states: Optional[int] = None

    def __post_init__(self):
        issues = self.validate()
        if issues:
            raise ValueError(f"Invalid parse options: {'; '.join(issues)}")

    def save(self, path: str | Path) -> None:
        """Save options to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "ParseOptions":
        """Load options from JSON file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls(**data)

    def validate(self) -> List[str]:
        """Validate options, return list of issues."""
        issues = []
        if self.max_states is not None and self.max_states < 2:
            issues.append("max_states must be at least 2")
        return issues


# Preset configurations
def strict_options() -> ParseOptions:
    """Default: reject anything the notation does not define exactly."""
    return ParseOptions()


def lifewiki_options() -> ParseOptions:
    """Lenient options matching common LifeWiki rule strings."""
    return ParseOptions(
        require_ordered_counts=False,
        allow_bare_isotropic_counts=True,
    )


DEFAULT_OPTIONS = strict_options()

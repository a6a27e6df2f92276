"""
Tests for notation detection.
"""

import pytest
from rulestring.core import Neighborhood
from rulestring.parser import Notation, detect_notation, detect_topology
from rulestring.errors import CombinedTopologyError, RuleSyntaxError


class TestDetectNotation:
    """Tests for grammar classification."""

    @pytest.mark.parametrize("string, notation", [
        ("B3/S23", Notation.BS),
        ("B3S23", Notation.BS),
        ("b3s23", Notation.BS),
        ("B357/S3457/C5", Notation.BS),
        ("g5b357s3457", Notation.CATAGOLUE),
        ("G3/B3/S23", Notation.CATAGOLUE),
        ("C3/B3/S23", Notation.CATAGOLUE),
        ("23/3", Notation.SB),
        ("/3", Notation.SB),
        ("3457/357/5", Notation.GOLLY),
    ])
    def test_notations(self, string, notation):
        """Each example selects its grammar."""
        assert detect_notation(string).notation is notation

    def test_generations_only(self):
        """Catagolue and Golly always carry states."""
        assert Notation.GOLLY.is_generations_only
        assert not Notation.BS.is_generations_only

    def test_empty(self):
        """Empty input matches nothing."""
        with pytest.raises(RuleSyntaxError):
            detect_notation("")

    def test_b_without_s(self):
        """B/S notation needs the survival keyword."""
        with pytest.raises(RuleSyntaxError, match="'S' field"):
            detect_notation("B3/23")

    def test_unknown_start(self):
        """Strings starting with anything else are rejected at position 0."""
        with pytest.raises(RuleSyntaxError) as exc:
            detect_notation("Life")
        assert exc.value.position == 0

    def test_too_many_groups(self):
        """S/B notation takes at most three groups."""
        with pytest.raises(RuleSyntaxError):
            detect_notation("2/3/4/5")


class TestDetectTopology:
    """Tests for topology suffix detection."""

    def test_default_square(self):
        """No suffix means the Moore neighborhood."""
        assert detect_topology("B3/S23") == (Neighborhood.MOORE, None)

    def test_hexagonal(self):
        """H suffix with its position."""
        assert detect_topology("B2/S34H") == (Neighborhood.HEXAGONAL, 6)
        assert detect_notation("B2/S34h").neighborhood is Neighborhood.HEXAGONAL

    def test_von_neumann(self):
        """V suffix."""
        assert detect_notation("B2/S013V").neighborhood is Neighborhood.VON_NEUMANN

    def test_combined(self):
        """H and V together are rejected."""
        with pytest.raises(CombinedTopologyError) as exc:
            detect_notation("B2/S34HV")
        assert exc.value.position == 7

    def test_repeated(self):
        """The same suffix twice is rejected."""
        with pytest.raises(CombinedTopologyError, match="given twice"):
            detect_notation("B2/S34HH")

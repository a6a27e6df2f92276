"""
Tests for parsing whole rule strings.
"""

import pytest
from rulestring import parse, parse_family, LIFE, HEX, NEUMANN, NT_LIFE
from rulestring.config import ParseOptions, lifewiki_options
from rulestring.core import Topology
from rulestring.errors import (
    RuleParseError,
    RuleSyntaxError,
    UnsupportedTopologyError,
    DuplicateCountError,
    DuplicateSymbolError,
    OutOfRangeError,
    AmbiguousConditionError,
    UnknownConfigurationError,
    CombinedTopologyError,
    TrailingInputError,
)


class TestTotalistic:
    """Tests for totalistic rule strings."""

    def test_life(self):
        """Conway's Life."""
        rule = parse("B3/S23")
        assert rule.births.counts == [3]
        assert rule.survivals.counts == [2, 3]
        assert rule.topology is Topology.SQUARE_TOTALISTIC
        assert rule.states is None

    def test_sb_equivalent(self):
        """S/B notation gives the same rule."""
        assert parse("B3/S23") == parse("23/3")

    def test_slash_optional(self):
        """The slash between B and S is optional, keywords any case."""
        assert parse("B3S23") == parse("B3/S23") == parse("b3s23")

    def test_empty_fields(self):
        """Fields may be empty."""
        rule = parse("B/S")
        assert len(rule.births) == 0
        assert len(rule.survivals) == 0
        assert parse("/3").survivals.counts == []

    def test_zero_and_max(self):
        """Counts 0 and 8 are valid on the square grid."""
        rule = parse("B0/S8")
        assert rule.births.counts == [0]
        assert rule.survivals.counts == [8]

    def test_hexagonal(self):
        """H suffix selects the hexagonal topology."""
        rule = parse("B2/S34H")
        assert rule.topology is Topology.HEXAGONAL_TOTALISTIC
        assert rule.births.counts == [2]
        assert rule.survivals.counts == [3, 4]

    def test_von_neumann(self):
        """V suffix selects the von Neumann topology."""
        rule = parse("B2/S013V")
        assert rule.topology is Topology.VON_NEUMANN
        assert rule.survivals.counts == [0, 1, 3]

    @pytest.mark.parametrize("suffix,max_count", [("", 8), ("H", 6), ("V", 4)])
    def test_every_count(self, suffix, max_count):
        """Each count from 0 to the maximum parses on its own."""
        for count in range(max_count + 1):
            rule = parse(f"B{count}/S{suffix}")
            assert rule.births.counts == [count]
            assert rule.survivals.counts == []

    @pytest.mark.parametrize("string", [
        "B3/S23",
        "B2ci3ai4c8/S02ae3eijkq4iz5ar6i7e",
        "B357/S3457/C5",
    ])
    def test_parse_twice(self, string):
        """Parsing the same string twice gives equal, equally hashed rules."""
        first, second = parse(string), parse(string)
        assert first == second
        assert hash(first) == hash(second)


class TestGenerations:
    """Tests for Generations syntax."""

    def test_equivalent_notations(self):
        """B/S/C, Golly and Catagolue forms agree."""
        a = parse("B357/S3457/C5")
        assert a == parse("3457/357/5") == parse("g5b357s3457")
        assert a.states == 5
        assert a.births.counts == [3, 5, 7]
        assert a.survivals.counts == [3, 4, 5, 7]

    @pytest.mark.parametrize("string", [
        "B2/S/C3", "B2/S/3", "B2/S/G3", "B2/SC3", "B2/SG3", "G3/B2/S", "g3b2s",
    ])
    def test_state_forms(self, string):
        """Every accepted spelling of the state count."""
        rule = parse(string)
        assert rule.states == 3
        assert rule.births.counts == [2]

    def test_suffix_order(self):
        """Topology letter and state count in either order."""
        assert parse("B2/S34H/C4") == parse("B2/S34/C4H")
        assert parse("B2/S34H/C4").states == 4

    def test_large_state_count(self):
        """State counts are multi-digit integers."""
        assert parse("B2/S/C256").states == 256

    def test_too_few_states(self):
        """At least two states."""
        with pytest.raises(OutOfRangeError):
            parse("B3/S23/C1")

    def test_state_limit(self):
        """max_states bounds the state count."""
        options = ParseOptions(max_states=4)
        assert parse("B3/S23/C4", options).states == 4
        with pytest.raises(OutOfRangeError, match="limit 4"):
            parse("B3/S23/C5", options)

    def test_missing_states(self):
        """A state keyword needs a number."""
        with pytest.raises(RuleSyntaxError, match="missing number of states"):
            parse("B3/S23/C")

    def test_states_twice(self):
        """Only one state count."""
        with pytest.raises(RuleSyntaxError, match="given twice"):
            parse("B3/S23/C3/C4")

    def test_not_generations_family(self):
        """Plain families reject state counts."""
        with pytest.raises(TrailingInputError):
            parse_family("B3/S23/C3", LIFE)
        with pytest.raises(RuleSyntaxError):
            parse_family("g3b3s23", LIFE)
        assert parse_family("B3/S23/C3", LIFE.generations_variant()).states == 3


class TestIsotropic:
    """Tests for isotropic non-totalistic rule strings."""

    def test_hensel(self):
        """A full Hensel-notation rule."""
        rule = parse("B2ci3ai4c8/S02ae3eijkq4iz5ar6i7e")
        assert rule.topology is Topology.SQUARE_ISOTROPIC
        assert rule.births.counts == [2, 3, 4, 8]
        assert rule.births.get(2).symbols == frozenset("ci")
        assert rule.births.get(8).is_totalistic
        assert rule.survivals.counts == [0, 2, 3, 4, 5, 6, 7]
        assert rule.survivals.get(3).symbols == frozenset("eijkq")

    def test_negation(self):
        """Negation is stored as the positive complement."""
        rule = parse("B2-a/S")
        assert rule.births.get(2).symbols == frozenset("cekin")
        assert rule == parse("B2ceikn/S")

    def test_full_set_collapses(self):
        """Naming every class is the same as the bare count."""
        rule = parse("B1ce/S")
        assert rule.births.get(1).is_totalistic

    def test_negating_everything(self):
        """Excluding every class leaves the count out."""
        rule = parse("B2-cekain3a/S")
        assert rule.births.counts == [3]
        assert rule.births.seen_counts == [2, 3]

    def test_bare_single_class(self):
        """A bare count is fine where only one class exists."""
        rule = parse("B2o3-o4m/S12m3o4m5H")
        assert rule.topology is Topology.HEXAGONAL_ISOTROPIC
        assert rule.survivals.get(1).is_totalistic
        assert rule.survivals.get(5).is_totalistic
        assert rule.births.get(3).symbols == frozenset("mp")

    def test_ambiguous_bare_count(self):
        """A bare count with several classes is rejected in isotropic strings."""
        with pytest.raises(AmbiguousConditionError) as exc:
            parse("B3/S2a")
        assert exc.value.field == "B"
        assert exc.value.position == 1

    def test_bare_count_lifewiki(self):
        """Lenient options read a bare count as every class."""
        rule = parse("B3/S2a", lifewiki_options())
        assert rule.births.get(3).is_totalistic
        assert rule.survivals.get(2).symbols == frozenset("a")

    def test_unknown_configuration(self):
        """Letters must exist for the count and neighborhood."""
        with pytest.raises(UnknownConfigurationError):
            parse("B2z/S")
        with pytest.raises(UnknownConfigurationError):
            parse("B2k/S2oH")

    def test_nothing_to_negate(self):
        """'-' needs a count with more than one class."""
        for string in ("B8-/S2a", "B0-/S2a", "B2o5-/S2oH", "B2-/S3V"):
            with pytest.raises(RuleSyntaxError, match="nothing to negate"):
                parse(string)

    def test_negation_position(self):
        """The error points at the '-'."""
        with pytest.raises(RuleSyntaxError) as exc:
            parse("B8-/S2a")
        assert exc.value.position == 2
        assert exc.value.field == "B"

    def test_duplicate_symbol(self):
        """A letter may appear once per count."""
        with pytest.raises(DuplicateSymbolError):
            parse("B2aa/S")
        with pytest.raises(DuplicateCountError):
            parse("B3-jj/S")

    def test_letters_in_totalistic_family(self):
        """Totalistic families reject configuration letters."""
        with pytest.raises(RuleSyntaxError, match="isotropic notation"):
            parse_family("B2a/S23", LIFE)
        with pytest.raises(RuleSyntaxError, match="isotropic notation"):
            parse_family("B3/S23a", LIFE)


class TestErrors:
    """Tests for the error taxonomy."""

    def test_duplicate_field(self):
        """A field given twice."""
        with pytest.raises(DuplicateCountError):
            parse("B3/S23/S5")

    def test_duplicate_count(self):
        """A count given twice in one field."""
        with pytest.raises(DuplicateCountError) as exc:
            parse("B33/S23")
        assert exc.value.position == 2
        with pytest.raises(DuplicateCountError):
            parse("B2a2c/S")

    def test_out_of_range(self):
        """Counts above the neighborhood size."""
        with pytest.raises(OutOfRangeError) as exc:
            parse("B9/S23")
        assert exc.value.field == "B"
        assert exc.value.position == 1
        with pytest.raises(OutOfRangeError):
            parse("B7/S2H")
        with pytest.raises(OutOfRangeError):
            parse("B5/S2V")

    def test_unordered_counts(self):
        """Counts must increase unless options allow otherwise."""
        with pytest.raises(RuleSyntaxError, match="must increase"):
            parse("B32/S")
        rule = parse("B32/S", ParseOptions(require_ordered_counts=False))
        assert rule.births.counts == [2, 3]

    def test_trailing_input(self):
        """Characters after a complete rule."""
        with pytest.raises(TrailingInputError) as exc:
            parse("B3/S23x")
        assert exc.value.position == 6


    def test_slash_before_suffix(self):
        """A topology letter after '/' is trailing input."""
        with pytest.raises(TrailingInputError) as exc:
            parse("B3/S23/H")
        assert exc.value.position == 6

    def test_missing_s(self):
        """B/S needs a survival keyword after the birth field."""
        with pytest.raises(RuleSyntaxError):
            parse("B3/xS23")

    def test_combined_topology(self):
        """Conflicting suffixes."""
        with pytest.raises(CombinedTopologyError):
            parse("B3/S23HV")

    def test_suffix_inside_field(self):
        """Topology letters belong after the last field."""
        with pytest.raises(RuleSyntaxError, match="must follow the last field"):
            parse("B2H/S34")

    def test_unsupported_topology(self):
        """Families reject neighborhoods they do not handle."""
        with pytest.raises(UnsupportedTopologyError):
            parse_family("B2/S34H", LIFE)
        with pytest.raises(UnsupportedTopologyError):
            parse_family("B3/S23", HEX)
        with pytest.raises(UnsupportedTopologyError):
            parse_family("B2/S34H", NEUMANN)
        assert parse_family("B2/S013V", NT_LIFE).topology is Topology.VON_NEUMANN

    def test_common_base(self):
        """All errors are RuleParseError and ValueError."""
        with pytest.raises(ValueError):
            parse("nonsense")
        with pytest.raises(RuleParseError):
            parse("B9/S")

    def test_message_has_location(self):
        """Messages name the field, position and input."""
        with pytest.raises(OutOfRangeError) as exc:
            parse("B9/S23")
        message = str(exc.value)
        assert "field B" in message
        assert "position 1" in message
        assert "'B9/S23'" in message

"""
Tests for the pattern compiler.

Covers tokenizing, tree construction, validation of ambiguous field
combinations and regenerating patterns from compiled trees.
"""

import pytest  # type: ignore
from src.location_format.exceptions import LocationException
from src.location_format.formats import (
    Composite,
    Field,
    FieldKind,
    Literal,
    OptionalGroup,
    SignField,
    SignKind,
    Unit,
    compile_pattern,
    tokenize,
)
from src.location_format.formats.compiler import TokenType
from src.location_format.formatter import CANNED_PATTERNS, LocationFormatter


F = TokenType.FIELD
T = TokenType.LITERAL


class TestTokenize:
    """Test cases for splitting patterns into tokens."""

    @pytest.mark.parametrize("pattern,expected", [
        ("LL", [(F, "LL")]),
        ("LL''", [(F, "LL"), (T, "'")]),
        ("LL.LLL", [(F, "LL.LLL")]),
        ("LL,LLL", [(F, "LL,LLL")]),
        ("LLDD", [(F, "LL"), (F, "DD")]),
        ("LL.LDD", [(F, "LL.L"), (F, "DD")]),
        ("LL.L123DD.DDD", [(F, "LL.L"), (T, "123"), (F, "DD.DDD")]),
        (".DD", [(T, "."), (F, "DD")]),
        ("DD.", [(F, "DD"), (T, ".")]),
        ("'D='D", [(T, "D="), (F, "D")]),
        ("'it''s'", [(T, "it's")]),
        ("DD°MM''SS.SSS\"X", [
            (F, "DD"), (T, "°"), (F, "MM"), (T, "'"), (F, "SS.SSS"), (T, "\""),
            (TokenType.HEMISPHERE, "X"),
        ]),
        ("+DD.DD[SSS]'XXX'sss.smm", [
            (TokenType.SIGN, "+"), (F, "DD.DD"), (TokenType.OPTIONAL_START, "["),
            (F, "SSS"), (TokenType.OPTIONAL_END, "]"), (T, "XXX"), (F, "sss.s"),
            (F, "mm"),
        ]),
    ])
    def test_tokenize(self, pattern, expected):
        """Test token types and texts."""
        assert [(t.type, t.text) for t in tokenize(pattern)] == expected

    def test_token_positions(self):
        """Test tokens remember their pattern position."""
        assert [t.position for t in tokenize("+DD°X")] == [0, 1, 3, 4]

    def test_unclosed_quote(self):
        """Test an unclosed quote is an error."""
        with pytest.raises(LocationException, match="Missing closing '"):
            tokenize("+DD.DD[SSS]'XXXsss.smm")

    def test_multiple_separators(self):
        """Test a numeric field can't have two decimal separators."""
        with pytest.raises(LocationException, match="more than one decimal separator"):
            tokenize("DD.DD.DD")


class TestCompilePattern:
    """Test cases for building the format tree."""

    def test_tree(self):
        """Test node types of a compiled pattern."""
        composite = compile_pattern("+DD'x'[ HH]")
        nodes = list(composite)

        assert nodes[0] == SignField(SignKind.LATITUDE_SIGN)
        assert isinstance(nodes[1], Field)
        assert nodes[1].kind is FieldKind.DEGREE_OF_LATITUDE
        assert nodes[2] == Literal("x")
        assert isinstance(nodes[3], OptionalGroup)
        assert len(nodes[3].composite) == 2

    def test_sign_takes_axis_of_following_field(self):
        """Test '+' binds to the field after it."""
        assert list(compile_pattern("+d"))[0].kind is SignKind.LONGITUDE_SIGN
        assert list(compile_pattern("+H"))[0].kind is SignKind.ELEVATION_SIGN

    def test_hemispheres(self):
        """Test hemisphere letters."""
        nodes = list(compile_pattern("DXdx"))

        assert nodes[1].kind is SignKind.NORTH_SOUTH
        assert nodes[3].kind is SignKind.EAST_WEST

    def test_nested_optional(self):
        """Test nested optional groups."""
        composite = compile_pattern("DD[ MM[ SS]]")
        inner = list(list(composite)[1].composite)[2]

        assert isinstance(inner, OptionalGroup)
        assert inner.to_pattern() == "[ SS]"

    def test_empty_pattern(self):
        """Test the empty pattern compiles to an empty composite."""
        assert compile_pattern("") == Composite([])

    def test_none_pattern(self):
        """Test None is rejected."""
        with pytest.raises(LocationException):
            compile_pattern(None)

    def test_adjacent_fields_are_bounded(self):
        """Test only fields directly followed by another field read a fixed width."""
        nodes = list(compile_pattern("+DDMMSS.SS+ddd"))

        assert nodes[1].bounded
        assert nodes[2].bounded
        assert not nodes[3].bounded
        assert not nodes[5].bounded

    def test_bounded_across_brackets(self):
        """Test brackets don't separate adjacent fields."""
        nodes = list(compile_pattern("DD[MM]"))

        assert nodes[0].bounded
        assert not list(compile_pattern("DD[ MM]"))[0].bounded

    def test_single_letter_fields_are_not_bounded(self):
        """Test one letter fields read greedily even in front of another field."""
        nodes = list(compile_pattern("DMM"))

        assert not nodes[0].bounded
        assert not nodes[1].bounded

    def test_resolution_is_finest_unit_of_axis(self):
        """Test angle fields know the finest unit rendered for their axis."""
        nodes = list(compile_pattern("DD MM SS.SSS d m.mm"))

        assert [node.resolution for node in nodes[0:5:2]] == [(Unit.SECOND, 3)] * 3
        assert nodes[6].resolution == (Unit.MINUTE, 2)
        assert nodes[8].resolution == (Unit.MINUTE, 2)

    def test_resolution_across_brackets(self):
        """Test fields inside optional groups count for the resolution."""
        nodes = list(compile_pattern("DD[ MM]"))

        assert nodes[0].resolution == (Unit.MINUTE, 0)
        assert list(compile_pattern("+DD.DD"))[1].resolution == (Unit.DEGREE, 2)


class TestValidation:
    """Test cases for rejecting ambiguous patterns."""

    @pytest.mark.parametrize("pattern", [
        # same location part twice
        "D D", "M M", "S S", "d d", "m m", "s s", "L D", "l d", "E H", "H H",
        "D[D]",
        # more than one sign source
        "+DX", "+dx", "LX", "lx", "+LL", "+ll", "+E", "XDX",
        # minutes and seconds need their parent
        "M", "m", "S", "s", "M S", "D S", "d s", "L M", "l m",
        # fractions followed by smaller units
        "D.D M", "D.D M S", "d.d m", "D M.MM S", "d m.mm s",
        # brackets
        "DD[MM", "DD]MM", "[[DD]", "]", "[",
        # signs
        "+", "+[DD]", "+'a'DD", "X+", "+X",
        # quotes and separators
        "'DD", "DD'", "DD.DD.DD",
    ])
    def test_illegal_pattern(self, pattern):
        """Test illegal patterns raise."""
        with pytest.raises(LocationException):
            LocationFormatter.of_pattern(pattern)

    @pytest.mark.parametrize("pattern", [
        "D", "DX", "+D", "L", "D M S", "D M.M", "D.D", "d m s.sss x", "E", "+H",
        "H", "DD[ MM[ SS]]", "[[DD]]", "", "X", "'+'DD", "LL'm''s'",
    ])
    def test_legal_pattern(self, pattern):
        """Test legal patterns compile."""
        assert LocationFormatter.of_pattern(pattern) is not None

    def test_error_names_position(self):
        """Test bracket errors name the position."""
        with pytest.raises(LocationException, match="position 2"):
            LocationFormatter.of_pattern("DD[MM")


class TestToPattern:
    """Test cases for regenerating patterns."""

    @pytest.mark.parametrize("pattern", list(CANNED_PATTERNS.values()) + [
        ".DDf",
        "DD[gg]",
        "DD[g''g]",
        "'D='D",
        "[[DD]]",
        "DD[ MM[ SS]]",
        "LL,LL",
        "'+'DD",
    ])
    def test_round_trip(self, pattern):
        """Test to_pattern reproduces the pattern."""
        assert LocationFormatter.of_pattern(pattern).to_pattern() == pattern

    def test_canonical_quoting(self):
        """Test unnecessary quotes are dropped and required ones kept."""
        formatter = LocationFormatter.of_pattern("DD'm'")

        assert formatter.to_pattern() == "DD'm'"
        assert LocationFormatter.of_pattern("DD'g'").to_pattern() == "DDg"

    def test_recompiled_pattern_is_equal(self):
        """Test the regenerated pattern compiles to an equal formatter."""
        formatter = LocationFormatter.of_pattern("DD'g'MM")

        assert LocationFormatter.of_pattern(formatter.to_pattern()) == formatter

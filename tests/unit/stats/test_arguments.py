"""Tests for positional tag arguments."""
import pytest

from lineage.stats.arguments import INTEGER_LIMIT, TagArgs


class TestTagArgs:
    """Tests for TagArgs accessors."""

    def test_raw_treats_blank_as_missing(self):
        """Blank and absent arguments are both None."""
        args = TagArgs(["", "  ", "x"])
        assert args.raw(0) is None
        assert args.raw(1) is None
        assert args.raw(2) == "x"
        assert args.raw(5) is None

    def test_integer(self):
        """Integers parse with surrounding whitespace."""
        assert TagArgs([" 5 "]).integer(0, 10) == 5

    def test_integer_falls_back_to_default(self):
        """Missing or malformed integers use the default."""
        assert TagArgs([]).integer(0, 10) == 10
        assert TagArgs(["ten"]).integer(0, 10) == 10

    def test_integer_minimum(self):
        """Values below the minimum also use the default."""
        assert TagArgs(["0"]).integer(0, 10, minimum=1) == 10
        assert TagArgs(["-3"]).integer(0, 10) == -3

    @pytest.mark.parametrize("value", ["inf", "-inf", "1e999", "nan"])
    def test_integer_non_finite(self, value):
        """Non-finite numbers use the default."""
        assert TagArgs([value]).integer(0, 10, minimum=1) == 10

    def test_integer_clamped(self):
        """Oversized integers are clamped to the query-safe range."""
        assert TagArgs(["99999999999999999999"]).integer(0, 10) == INTEGER_LIMIT
        assert TagArgs(["-99999999999999999999"]).integer(0, 10) == -INTEGER_LIMIT
        assert TagArgs(["1e20"]).integer(0, 10, minimum=1) == INTEGER_LIMIT

    def test_flag(self):
        """Flags accept yes/no words; other words count as set."""
        assert TagArgs(["yes"]).flag(0) is True
        assert TagArgs(["no"]).flag(0) is False
        assert TagArgs(["anything"]).flag(0) is True
        assert TagArgs([]).flag(0) is False

    def test_choice_is_case_insensitive(self):
        """Choices match regardless of case and return the canonical spelling."""
        args = TagArgs(["RCOUNT", "bogus"])
        assert args.choice(0, ("alpha", "count", "rcount"), "alpha") == "rcount"
        assert args.choice(1, ("alpha", "count", "rcount"), "alpha") == "alpha"

    def test_size(self):
        """Sizes parse as WxH and fall back to the default."""
        assert TagArgs(["300x100"]).size(0, "440x125") == (300, 100)
        assert TagArgs(["big"]).size(0, "440x125") == (440, 125)
        assert TagArgs([]).size(0, "440x125") == (440, 125)

    def test_color(self):
        """Colours are normalized to lowercase hex without '#'."""
        assert TagArgs(["#FF0000"]).color(0, "ffffff") == "ff0000"
        assert TagArgs(["red"]).color(0, "ffffff") == "ffffff"

    def test_rest_skips_blank_values(self):
        """rest returns the non-blank arguments from an index on."""
        assert TagArgs(["a", "", "b "]).rest() == ["a", "b"]
        assert TagArgs(["a", "b", "c"]).rest(1) == ["b", "c"]

    def test_of(self):
        """TagArgs.of builds from positional values."""
        assert list(TagArgs.of("1", "2")) == ["1", "2"]
        assert len(TagArgs.of("1")) == 1

"""Tests for the tag whitelist and its handlers."""
from unittest.mock import MagicMock

import pytest

from lineage.core.exceptions import UnknownTagError
from lineage.stats.arguments import TagArgs
from lineage.stats.config import StatsConfig
from lineage.stats.registry import NOT_ALLOWED, TAGS, TagResolver, build_tags
from lineage.stats.renderer import OutputShape


@pytest.fixture
def stats():
    """Mock facade with the default configuration."""
    mock = MagicMock()
    mock.config = StatsConfig()
    return mock


class TestWhitelist:
    """Tests for the tag tables."""

    def test_tag_count(self):
        """Every area contributes its tags."""
        assert len(TAGS) == 202

    def test_denied_names_absent(self):
        """No denied name makes it into the table."""
        assert not NOT_ALLOWED & set(TAGS)

    def test_chart_tags(self):
        """Chart tags share the 'chart' prefix, century charts the 'stats' one."""
        assert [name for name in sorted(TAGS) if name.startswith("chart")] == [
            "chartCommonGiven",
            "chartCommonSurnames",
            "chartFamsWithSources",
            "chartIndisWithSources",
            "chartLargestFamilies",
            "chartMortality",
            "chartNoChildrenFamilies",
            "chartSex",
        ]
        assert sorted(name for name in TAGS if name.startswith("stats")) == [
            "statsBirth",
            "statsDeath",
            "statsDiv",
            "statsMarr",
        ]

    def test_build_is_repeatable(self):
        """Building the table again gives the same names."""
        assert set(build_tags()) == set(TAGS)


class TestTagResolver:
    """Tests for TagResolver."""

    def test_resolve_known(self):
        """Known names resolve to their handler."""
        assert TagResolver().resolve("totalIndividuals") is TAGS["totalIndividuals"]

    def test_resolve_unknown(self):
        """Unknown names resolve to None."""
        assert TagResolver().resolve("noSuchTag") is None

    def test_denied_even_when_present(self):
        """Denied names are rejected before the table is consulted."""
        resolver = TagResolver(tags={"embedTags": lambda stats, args: "x"})
        assert resolver.resolve("embedTags") is None
        assert resolver.names() == []

    def test_require(self):
        """require raises for unknown names."""
        with pytest.raises(UnknownTagError, match="Unknown tag: statsPlaces"):
            TagResolver().require("statsPlaces")

    def test_names_sorted(self):
        """Names are listed in sorted order."""
        names = TagResolver().names()
        assert names == sorted(names)
        assert len(names) == 202


class TestHandlers:
    """Tests for argument handling in the handlers."""

    def test_top_list_count(self, stats):
        """The first argument is the number of rows."""
        TAGS["topTenOldestList"](stats, TagArgs.of("5"))
        stats.top_oldest.assert_called_once_with(None, 5, OutputShape.LIST)

    @pytest.mark.parametrize("value", ["ten", "0", ""])
    def test_malformed_count_defaults(self, stats, value):
        """Missing, malformed and non-positive counts become 10."""
        TAGS["topTenOldestFemale"](stats, TagArgs.of(value))
        stats.top_oldest.assert_called_once_with("F", 10, OutputShape.INLINE)

    def test_chart_size_and_colors(self, stats):
        """Chart tags parse the size and colour arguments."""
        TAGS["chartSex"](stats, TagArgs.of("300x100", "ff0000"))
        stats.chart_sex.assert_called_once_with((300, 100), "ff0000", None, None)

    def test_chart_default_size(self, stats):
        """Without a size, the configured chart size is used."""
        TAGS["chartCommonSurnames"](stats, TagArgs())
        stats.chart_common_surnames.assert_called_once_with((900, 200), None, None, 10)

    def test_childless_chart_years(self, stats):
        """Year bounds are optional integers."""
        TAGS["chartNoChildrenFamilies"](stats, TagArgs.of("", "1800", "1900"))
        stats.chart_childless.assert_called_once_with((220, 200), 1800, 1900)
        stats.reset_mock()
        TAGS["chartNoChildrenFamilies"](stats, TagArgs())
        stats.chart_childless.assert_called_once_with((220, 200), None, None)

    def test_common_surnames_arguments(self, stats):
        """Threshold, count and sorting arrive in that order."""
        TAGS["commonSurnamesListTotals"](stats, TagArgs.of("2", "5", "alpha"))
        stats.common_surnames.assert_called_once_with(
            threshold=2, limit=5, sorting="alpha", totals=True, shape=OutputShape.LIST
        )

    def test_common_surnames_default_sorting(self, stats):
        """Unknown sortings fall back to the variant's default."""
        TAGS["commonSurnamesTotals"](stats, TagArgs.of("1", "3", "sideways"))
        stats.common_surnames.assert_called_once_with(
            threshold=1, limit=3, sorting="rcount", totals=True, shape=OutputShape.INLINE
        )

    def test_lifespan_years_flag(self, stats):
        """averageLifespan takes a show-years flag."""
        TAGS["averageLifespanMale"](stats, TagArgs.of("yes"))
        stats.average_lifespan.assert_called_once_with("M", True)

    def test_event_fields(self, stats):
        """Extremal event tags carry their facts, direction and field."""
        TAGS["lastDeathPlace"](stats, TagArgs())
        stats.extremal_event.assert_called_once_with(("DEAT",), True, "place")

    def test_events_with_exclusions(self, stats):
        """totalEvents passes every argument through."""
        TAGS["totalEvents"](stats, TagArgs.of("BIRT", "!DEAT"))
        stats.total_events.assert_called_once_with(["BIRT", "!DEAT"])

    def test_user_date_format(self, stats):
        """The registration date takes an optional format."""
        TAGS["latestUserRegDate"](stats, TagArgs.of("%Y"))
        stats.latest_user_info.assert_called_once_with("date", "%Y")

    def test_tree_field(self, stats):
        """Tree tags map to tree fields."""
        TAGS["gedcomRootId"](stats, TagArgs())
        stats.tree_info.assert_called_once_with("root")

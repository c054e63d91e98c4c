"""Tests for chart series scaling, encoding and rendering."""
from unittest.mock import MagicMock

from lineage.stats.charts import (
    ChartSeries,
    ChartSeriesBuilder,
    GoogleChartSink,
    century_buckets,
    color_gradient,
    extended_encoding,
    scale_to_peak,
    scale_to_total,
)
from lineage.stats.formatting import LocaleFormatter
from lineage.stats.renderer import StatsRenderer


class TestEncoding:
    """Tests for the extended chart encoding."""

    def test_extended_encoding(self):
        """Values encode as two symbols; overflow and missing values are marked."""
        assert extended_encoding([0, 1861, 3722, 5000, None]) == "AAdF6K..__"

    def test_negative_values_are_missing(self):
        """Negative values encode like missing ones."""
        assert extended_encoding([-1]) == "__"

    def test_maximum_value(self):
        """4095 is the largest encodable value."""
        assert extended_encoding([4095]) == ".."


class TestScaling:
    """Tests for value scaling."""

    def test_scale_to_peak(self):
        """Values are scaled against the peak plus one unit of headroom."""
        assert scale_to_peak([5, 10, 0]) == [1861, 3722, 0]

    def test_scale_to_peak_empty(self):
        """Empty and all-zero input yield None."""
        assert scale_to_peak([]) is None
        assert scale_to_peak([0, 0]) is None

    def test_scaled_values_stay_in_range(self):
        """Scaled values never exceed the fixed maximum."""
        values = scale_to_peak([1, 1000000, 999999])
        assert max(values) < 4095

    def test_scale_to_total(self):
        """Pie values are shares of the fixed maximum."""
        assert scale_to_total([1, 3]) == [1023, 3071]
        assert scale_to_total([0, 0]) is None


class TestColorGradient:
    """Tests for colour gradients."""

    def test_gradient_endpoints(self):
        """The gradient starts and ends at the given colours."""
        assert color_gradient("000000", "ffffff", 3) == ["000000", "7f7f7f", "ffffff"]

    def test_single_step(self):
        """A one-step gradient is the start colour."""
        assert color_gradient("ABCDEF", "000000", 1) == ["abcdef"]

    def test_no_steps(self):
        """Zero steps yield no colours."""
        assert color_gradient("000000", "ffffff", 0) == []


class TestCenturyBuckets:
    """Tests for grouping years into centuries."""

    def test_buckets_in_century_order(self):
        """Centuries are sorted and the unknown bucket comes last."""
        buckets = century_buckets({1950: 1, 1850: 2, 1899: 1, 0: 3}, unknown=1)
        assert buckets == [(19, 3), (20, 1), (None, 4)]

    def test_no_unknown_bucket_without_unknowns(self):
        """The unknown bucket is omitted when empty."""
        assert century_buckets({1850: 2}) == [(19, 2)]


class TestChartSeriesBuilder:
    """Tests for ChartSeriesBuilder."""

    def test_pie_series(self):
        """Pie series carry scaled values, counts and legends."""
        series = ChartSeriesBuilder(LocaleFormatter()).pie(
            {"A": 1, "B": 3}, "Title", ["ff0000", "00ff00"], (440, 125)
        )
        assert series.kind == "pie"
        assert series.values == [1023, 3071]
        assert series.counts == [1, 3]
        assert series.legend == ["A - 25.0%", "B - 75.0%"]

    def test_empty_series_is_none(self):
        """No data yields no series."""
        builder = ChartSeriesBuilder(LocaleFormatter())
        assert builder.pie({}, "Title", [], (440, 125)) is None
        assert builder.bars({"A": 0}, "Title", [], (440, 125)) is None

    def test_century_labels(self):
        """Century buckets are labelled by name, unknown last."""
        series = ChartSeriesBuilder(LocaleFormatter()).centuries(
            [(19, 2), (None, 1)], "Births", ["ffffff"], (440, 125)
        )
        assert series.kind == "bar"
        assert series.labels == ["19th century", "Unknown"]


class TestGoogleChartSink:
    """Tests for the Google chart sink."""

    def _series(self, kind):
        return ChartSeries(
            kind=kind,
            values=[1861, 3722],
            counts=[5, 10],
            labels=["A", "B"],
            legend=["A - 33.3%", "B - 66.7%"],
            colors=["ffffff", "84beff"],
            title="Test",
            size=(300, 100),
        )

    def test_pie_url(self):
        """Pie URLs use the 3D pie type and the legend labels."""
        url = GoogleChartSink(MagicMock(), "https://charts.example/chart").url(self._series("pie"))
        assert url.startswith("https://charts.example/chart?")
        assert "cht=p3" in url
        assert "chd=e%3AdF6K" in url
        assert "chs=300x100" in url
        assert "chm=" not in url

    def test_bar_url_marks_counts(self):
        """Bar URLs carry the raw counts as value markers."""
        url = GoogleChartSink(MagicMock(), "https://charts.example/chart").url(self._series("bar"))
        assert "cht=bvg" in url
        assert "chm=" in url

    def test_render_image_fragment(self):
        """render produces an escaped image tag with the chart size."""
        sink = GoogleChartSink(StatsRenderer(), "https://charts.example/chart")
        html = sink.render(self._series("pie"))
        assert html.startswith('<img src="https://charts.example/chart?cht=p3&amp;')
        assert 'width="300"' in html
        assert 'height="100"' in html
        assert 'alt="Test"' in html

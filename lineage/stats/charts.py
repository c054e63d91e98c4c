"""
Chart Series Utilities
----------------------

Turn aggregation results into size-bounded series for a chart sink.

Functions:
    - extended_encoding: Google chart "extended" text encoding
    - scale_to_peak: Scale counts to [0, fixed_max] with one unit of headroom
    - scale_to_total: Scale counts to shares of fixed_max (pie charts)
    - color_gradient: Linear gradient of hex colours
    - century_buckets: Group year counts by century, unknown bucket last

Classes:
    - ChartSeries: Chart-ready values, labels and metadata
    - ChartSeriesBuilder: Builds pie and bar series from category counts
    - ChartSink / GoogleChartSink: Consumers of a series
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple
from urllib.parse import urlencode

# --- Local imports ---
from .dates import century_name, century_of
from .formatting import LocaleFormatter

EXTENDED_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-."
EXTENDED_MAX = 4095
UNKNOWN_BUCKET = "Unknown"


def extended_encoding(values: Iterable[Optional[int]]) -> str:
    """
    Encode values with the 64-symbol extended chart alphabet.

    Each value takes two characters. Values above 4095 encode as '..',
    missing or negative values as '__'.

    Example:
        >>> extended_encoding([0, 1861, 3722, 5000, None])
        'AAdF6K..__'
    """
    encoded = []
    for value in values:
        if value is None or value < 0:
            encoded.append("__")
        elif value > EXTENDED_MAX:
            encoded.append("..")
        else:
            encoded.append(
                EXTENDED_ALPHABET[value // 64] + EXTENDED_ALPHABET[value % 64]
            )
    return "".join(encoded)


def scale_to_peak(values: Sequence[int], fixed_max: int = EXTENDED_MAX) -> Optional[List[int]]:
    """
    Scale counts to [0, fixed_max] relative to the peak.

    Each value maps to floor(fixed_max * value / (peak + 1)), leaving one
    unit of headroom above the observed peak.

    Returns:
        Scaled values, or None for empty or all-zero input

    Example:
        >>> scale_to_peak([5, 10, 0])
        [1861, 3722, 0]
    """
    if not values or not any(values):
        return None
    peak = max(values)
    return [fixed_max * value // (peak + 1) for value in values]


def scale_to_total(values: Sequence[int], fixed_max: int = EXTENDED_MAX) -> Optional[List[int]]:
    """
    Scale counts to their share of fixed_max: floor(fixed_max * value / total).

    Returns:
        Scaled values, or None for empty or all-zero input
    """
    total = sum(values)
    if not values or total <= 0:
        return None
    return [fixed_max * value // total for value in values]


def _rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def color_gradient(start: str, end: str, steps: int) -> List[str]:
    """
    Linear gradient between two hex colours.

    Args:
        start: First colour ('rrggbb')
        end: Last colour
        steps: Number of colours to produce

    Returns:
        List of lowercase hex colours, start and end included
    """
    if steps <= 0:
        return []
    if steps == 1:
        return [start.lower()]
    r1, g1, b1 = _rgb(start)
    r2, g2, b2 = _rgb(end)
    colors = []
    for step in range(steps):
        r = r1 + (r2 - r1) * step // (steps - 1)
        g = g1 + (g2 - g1) * step // (steps - 1)
        b = b1 + (b2 - b1) * step // (steps - 1)
        colors.append(f"{r:02x}{g:02x}{b:02x}")
    return colors


def century_buckets(
    year_counts: Mapping[int, int], unknown: int = 0
) -> List[Tuple[Optional[int], int]]:
    """
    Group per-year counts into centuries.

    Args:
        year_counts: year -> count; year 0 means unknown
        unknown: Extra count for the unknown bucket

    Returns:
        (century, count) pairs in century order, followed by
        (None, unknown_total) when any unknown rows exist
    """
    centuries: Dict[int, int] = {}
    for year, count in year_counts.items():
        if not year:
            unknown += count
            continue
        century = century_of(year)
        centuries[century] = centuries.get(century, 0) + count
    buckets: List[Tuple[Optional[int], int]] = sorted(centuries.items())
    if unknown > 0:
        buckets.append((None, unknown))
    return buckets


@dataclass
class ChartSeries:
    """
    A chart ready for rendering.

    Attributes:
        kind: 'pie' or 'bar'
        values: Scaled values in [0, fixed_max]
        counts: Raw counts behind the values
        labels: One label per value
        legend: Label plus percentage per value
        colors: Hex colours (one per value, or gradient end points)
        title: Chart title
        size: (width, height) in pixels
    """

    kind: str
    values: List[int]
    counts: List[int]
    labels: List[str]
    legend: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    title: str = ""
    size: Tuple[int, int] = (440, 125)

    @property
    def encoded(self) -> str:
        return extended_encoding(self.values)


class ChartSeriesBuilder:
    """
    Build chart series from category counts.

    Empty or all-zero input yields None, which callers render as the
    "not available" text.
    """

    def __init__(self, formatter: LocaleFormatter, fixed_max: int = EXTENDED_MAX) -> None:
        self.formatter = formatter
        self.fixed_max = fixed_max

    def _legend(self, labels: Sequence[str], counts: Sequence[int]) -> List[str]:
        total = sum(counts)
        return [
            f"{label} - {self.formatter.percentage(count, total)}"
            for label, count in zip(labels, counts)
        ]

    def pie(
        self,
        counts: Mapping[str, int],
        title: str,
        colors: Sequence[str],
        size: Tuple[int, int],
    ) -> Optional[ChartSeries]:
        """Pie chart: each slice is its share of the total."""
        labels = list(counts)
        raw = [counts[label] for label in labels]
        values = scale_to_total(raw, self.fixed_max)
        if values is None:
            return None
        return ChartSeries(
            kind="pie",
            values=values,
            counts=raw,
            labels=labels,
            legend=self._legend(labels, raw),
            colors=list(colors),
            title=title,
            size=size,
        )

    def bars(
        self,
        counts: Mapping[str, int],
        title: str,
        colors: Sequence[str],
        size: Tuple[int, int],
    ) -> Optional[ChartSeries]:
        """Bar chart: values are scaled relative to the peak."""
        labels = list(counts)
        raw = [counts[label] for label in labels]
        values = scale_to_peak(raw, self.fixed_max)
        if values is None:
            return None
        return ChartSeries(
            kind="bar",
            values=values,
            counts=raw,
            labels=labels,
            legend=self._legend(labels, raw),
            colors=list(colors),
            title=title,
            size=size,
        )

    def centuries(
        self,
        buckets: Sequence[Tuple[Optional[int], int]],
        title: str,
        colors: Sequence[str],
        size: Tuple[int, int],
        pie: bool = False,
    ) -> Optional[ChartSeries]:
        """Century chart; the unknown bucket keeps its last position."""
        translate = self.formatter.translate
        counts: Dict[str, int] = {}
        for century, count in buckets:
            label = translate(UNKNOWN_BUCKET) if century is None else century_name(century, translate)
            counts[label] = counts.get(label, 0) + count
        if pie:
            return self.pie(counts, title, colors, size)
        return self.bars(counts, title, colors, size)


class ChartSink(Protocol):
    """Consumer of chart series, producing a renderable fragment."""

    def render(self, series: ChartSeries) -> str: ...


class GoogleChartSink:
    """
    Render series as an image tag pointing at a Google-style chart service.

    Args:
        renderer: StatsRenderer used for the image fragment
        base_url: Chart service URL
    """

    def __init__(self, renderer, base_url: str) -> None:
        self.renderer = renderer
        self.base_url = base_url

    def url(self, series: ChartSeries) -> str:
        width, height = series.size
        params = {
            "cht": "p3" if series.kind == "pie" else "bvg",
            "chd": f"e:{series.encoded}",
            "chs": f"{width}x{height}",
            "chco": ",".join(series.colors),
            "chf": "bg,s,ffffff00",
            "chl": "|".join(series.legend if series.kind == "pie" else series.labels),
        }
        if series.kind == "bar":
            params["chm"] = "|".join(
                f"t{count},000000,0,{index},11,1" for index, count in enumerate(series.counts)
            )
        return f"{self.base_url}?{urlencode(params)}"

    def render(self, series: ChartSeries) -> str:
        width, height = series.size
        return self.renderer.render(
            "chart.jinja2",
            {
                "url": self.url(series),
                "width": width,
                "height": height,
                "title": series.title,
            },
        )

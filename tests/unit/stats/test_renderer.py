"""
Tests for the Jinja2 fragment renderer.

Uses the package templates for the output shapes and DictLoader
templates for loader behaviour.
"""
import pytest

from lineage.stats.renderer import ListItem, OutputShape, StatsRenderer


@pytest.fixture
def renderer():
    """Renderer on the package templates."""
    return StatsRenderer()


@pytest.fixture
def items():
    """Two ranked rows, one linked and one redacted."""
    return [
        ListItem("John Smith", "/tree/t/individual/I1", "80 years"),
        ListItem("Private", None, "75 years"),
    ]


class TestStatsRendererSetup:
    """Tests for loader selection."""

    def test_dict_templates(self):
        """Dict templates are rendered and stripped."""
        renderer = StatsRenderer(templates={"t.jinja2": "  Hello {{ name }}  \n"})
        assert renderer.render("t.jinja2", {"name": "World"}) == "Hello World"

    def test_both_loaders_rejected(self, tmp_path):
        """A templates directory and dict templates are mutually exclusive."""
        with pytest.raises(ValueError):
            StatsRenderer(templates_dir=tmp_path, templates={"t.jinja2": ""})

    def test_autoescape(self):
        """Values are HTML-escaped."""
        renderer = StatsRenderer(templates={"t.jinja2": "{{ name }}"})
        assert renderer.render("t.jinja2", {"name": "<b>"}) == "&lt;b&gt;"


class TestRecordFragments:
    """Tests for record links."""

    def test_link(self, renderer):
        """Names with a URL become anchors."""
        assert renderer.link("John", "/i/I1") == '<a href="/i/I1">John</a>'

    def test_link_without_url(self, renderer):
        """Names without a URL stay plain text."""
        assert renderer.link("Private", None) == "Private"

    def test_record_with_detail(self, renderer):
        """Full records append their details."""
        html = renderer.record("John", "/i/I1", "1900-1980")
        assert html == '<a href="/i/I1">John</a> <span class="details">1900-1980</span>'


class TestTopList:
    """Tests for the list output shapes."""

    def test_list_shape(self, renderer, items):
        """LIST renders an unordered list."""
        html = renderer.top_list(items, OutputShape.LIST)
        assert html == (
            '<ul><li><a href="/tree/t/individual/I1">John Smith</a> (80 years)</li>'
            "<li>Private (75 years)</li></ul>"
        )

    def test_inline_shape(self, renderer, items):
        """INLINE joins the rows with semicolons."""
        html = renderer.top_list(items, OutputShape.INLINE)
        assert html == (
            '<a href="/tree/t/individual/I1">John Smith</a> (80 years); Private (75 years)'
        )

    def test_table_shape(self, renderer, items):
        """TABLE renders headers and one row per item."""
        html = renderer.top_list(items, OutputShape.TABLE, headers=("Name", "Age"))
        assert html.startswith('<table class="list-table"><thead><tr><th>Name</th><th>Age</th>')
        assert "<td>80 years</td>" in html
        assert html.count("<tr>") == 3

    def test_shape_accepts_strings(self, renderer, items):
        """Shapes can be given by value."""
        assert renderer.top_list(items, "list").startswith("<ul>")

    def test_rows_without_detail(self, renderer):
        """Rows without details have no parentheses."""
        html = renderer.top_list([ListItem("Smith")], OutputShape.INLINE)
        assert html == "Smith"

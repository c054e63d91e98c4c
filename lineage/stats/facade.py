#!/usr/bin/env python3
"""
facade.py
--------------------
The statistics facade.

Stats turns aggregation results into display-ready text for one tree and
one viewer. Each aggregation is computed once and rendered through an
output-shape adapter, so list, inline and table variants of a statistic
share the same query.

Presentation rules applied here:
    - Records failing the visibility gate are redacted with the private text
      (aggregate numbers stay visible)
    - An aggregation without rows yields the "not available" text
    - Lists get right-to-left marks for RTL locales

Usage:
    with db.session_scope() as session:
        stats = Stats(session, tree_id=1, context=StatsContext.for_locale("fr"))
        stats.longest_life(field="name")
        stats.top_oldest(limit=5, shape=OutputShape.LIST)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Any, Dict, List, Optional, Sequence, Tuple

# --- Third party imports ---
from markupsafe import escape
from sqlalchemy.orm import Session

# --- Local imports ---
from lineage.core.logging_manager import LineageLogger
from lineage.database.models import (
    BIRTH_EVENTS,
    DEATH_EVENTS,
    DIVORCE_EVENTS,
    EVENT_LABELS,
    MARRIAGE_EVENTS,
    DateFact,
    Family,
    Individual,
    Tree,
    User,
)
from .charts import ChartSeries, ChartSeriesBuilder, ChartSink, GoogleChartSink, century_buckets, color_gradient
from .config import StatsConfig
from .dates import DAYS_PER_YEAR, classify_age, parse_gedcom_date, today_julian_day, year_display
from .formatting import LocaleFormatter
from .queries import EventQueries, FamilyQueries, IndividualQueries, NameQueries, TotalsQueries
from .queries.names import NameCount
from .renderer import ListItem, OutputShape, StatsRenderer
from .visibility import LivingPrivacyGate, RecordVisibilityGate, ViewerContext


@dataclass
class StatsContext:
    """
    Everything a computation needs besides the data: who is looking, in
    which locale, against which reference date, and how to render.

    Attributes:
        viewer: The viewer the visibility gate decides for
        formatter: Locale formatting and translation
        reference_jd: "Today" as a Julian day
        config: Engine defaults
        gate: Visibility gate (LivingPrivacyGate by default)
        renderer: Jinja2 fragment renderer
        chart_sink: Consumer of chart series
        logger: Optional logger for queries and tags
    """

    viewer: ViewerContext = field(default_factory=ViewerContext.anonymous)
    formatter: LocaleFormatter = field(default_factory=LocaleFormatter)
    reference_jd: int = field(default_factory=today_julian_day)
    config: StatsConfig = field(default_factory=StatsConfig)
    gate: Optional[RecordVisibilityGate] = None
    renderer: Optional[StatsRenderer] = None
    chart_sink: Optional[ChartSink] = None
    logger: Optional[LineageLogger] = None

    def __post_init__(self) -> None:
        if self.gate is None:
            self.gate = LivingPrivacyGate(self.reference_jd, self.config.max_alive_age)
        if self.renderer is None:
            self.renderer = StatsRenderer()
        if self.chart_sink is None:
            self.chart_sink = GoogleChartSink(self.renderer, self.config.chart_base_url)

    @classmethod
    def for_locale(
        cls,
        locale: Optional[str] = None,
        viewer: Optional[ViewerContext] = None,
        config: Optional[StatsConfig] = None,
        catalog: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> "StatsContext":
        """Build a context for a locale, defaulting to the configured one."""
        config = config or StatsConfig()
        return cls(
            viewer=viewer or ViewerContext.anonymous(),
            formatter=LocaleFormatter(locale or config.default_locale, catalog),
            config=config,
            **kwargs,
        )


class Stats:
    """
    Statistics of one tree, for one viewer.

    The instance is request-scoped: it memoizes the latest registered user
    and the tree record, and must not be shared between computations.
    """

    def __init__(
        self, session: Session, tree_id: int, context: Optional[StatsContext] = None
    ) -> None:
        self.session = session
        self.tree_id = tree_id
        self.context = context or StatsContext()

        logger = self.context.logger
        self.events = EventQueries(session, tree_id, logger)
        self.individuals = IndividualQueries(session, tree_id, logger)
        self.families = FamilyQueries(session, tree_id, logger)
        self.names = NameQueries(session, tree_id, logger)
        self.totals = TotalsQueries(session, tree_id, logger)
        self.charts = ChartSeriesBuilder(self.formatter, self.config.chart_max)

    # ---- Context shortcuts ----
    @property
    def formatter(self) -> LocaleFormatter:
        return self.context.formatter

    @property
    def config(self) -> StatsConfig:
        return self.context.config

    @property
    def renderer(self) -> StatsRenderer:
        return self.context.renderer

    @property
    def logger(self) -> Optional[LineageLogger]:
        return self.context.logger

    def _(self, text: str) -> str:
        return self.formatter.translate(text)

    def _number(self, value: float, decimals: int = 0) -> str:
        return self.formatter.format_number(value, decimals)

    def _age(self, days: float) -> str:
        return self.formatter.age(classify_age(days))

    def _years(self, days: float) -> str:
        return self._number(int(days / DAYS_PER_YEAR))

    # ---- Records ----
    @cached_property
    def tree(self) -> Optional[Tree]:
        return self.totals.tree()

    @cached_property
    def latest_user(self) -> Optional[User]:
        return self.totals.latest_user()

    def can_show(self, record: Any) -> bool:
        return self.context.gate.can_show(record, self.context.viewer)

    def url(self, record: Any) -> Optional[str]:
        """Link to an individual or family page."""
        if isinstance(record, Individual):
            kind = "individual"
        elif isinstance(record, Family):
            kind = "family"
        else:
            return None
        tree = self.tree.name if self.tree is not None else self.tree_id
        return self.config.record_url.format(tree=tree, kind=kind, xref=record.xref)

    def _detail(self, record: Any) -> str:
        if isinstance(record, Individual):
            years = []
            for tag in ("BIRT", "DEAT"):
                fact = record.fact(tag)
                years.append(year_display(fact.year, self._) if fact and fact.year else "")
            return "-".join(years) if any(years) else ""
        if isinstance(record, Family):
            married = record.fact("MARR")
            if married is not None and married.is_dated:
                return self.formatter.date(parse_gedcom_date(married.date_text))
        return ""

    def name_link(self, record: Any, label: Optional[str] = None) -> str:
        """Linked name, or the private text when the record is hidden."""
        if not self.can_show(record):
            return self.formatter.private()
        return self.renderer.link(label or record.full_name, self.url(record))

    def full_record(self, record: Any, detail: Optional[str] = None) -> str:
        """Linked name with its dates, or the private text."""
        if not self.can_show(record):
            return self.formatter.private()
        if detail is None:
            detail = self._detail(record)
        return self.renderer.record(record.full_name, self.url(record), detail)

    def list_item(self, record: Any, detail: str = "", label: Optional[str] = None) -> ListItem:
        if not self.can_show(record):
            return ListItem(self.formatter.private(), None, detail)
        return ListItem(label or record.full_name, self.url(record), detail)

    def render_list(
        self,
        items: Sequence[ListItem],
        shape: OutputShape = OutputShape.INLINE,
        headers: Sequence[str] = ("", ""),
    ) -> str:
        """Render ranked rows, the "not available" text when there are none."""
        if not items:
            return self.formatter.no_data()
        html = self.renderer.top_list(items, OutputShape(shape), headers)
        return self.formatter.rtl_fixup(html)

    def render_chart(self, series: Optional[ChartSeries]) -> str:
        if series is None:
            return self.formatter.no_data()
        return self.context.chart_sink.render(series)

    # ---- Tree ----
    def tree_info(self, field: str) -> str:
        """
        Tree metadata.

        Args:
            field: 'filename', 'id', 'title', 'root', 'date' (header date) or
                'updated' (latest change)
        """
        if field == "id":
            return str(self.tree_id)
        if field in ("date", "updated"):
            fact = self.events.tree_fact("HEAD") if field == "date" else self.events.latest_fact("CHAN")
            if fact is None or not fact.date_text:
                return self.formatter.no_data()
            return self.formatter.date(parse_gedcom_date(fact.date_text))
        tree = self.tree
        if tree is None:
            return self.formatter.no_data()
        value = {"filename": tree.name, "title": tree.title, "root": tree.root_xref}.get(field)
        return str(escape(value)) if value else self.formatter.no_data()

    # ---- Totals ----
    def total(self, kind: str) -> str:
        return self._number(self.totals.count(kind))

    def total_percentage(self, kind: str) -> str:
        """Share of one record kind among all records."""
        return self.formatter.percentage(self.totals.count(kind), self.totals.count_all())

    def total_records(self) -> str:
        return self._number(self.totals.count_all())

    def total_with_sources(self, kind: str) -> str:
        queries = self.individuals if kind == "individuals" else self.families
        return self._number(queries.count_with_sources())

    def total_sex(self, sex: str) -> str:
        return self._number(self.individuals.count(sex))

    def sex_percentage(self, sex: str) -> str:
        return self.formatter.percentage(self.individuals.count(sex), self.individuals.count())

    def _living_deceased(self) -> Tuple[int, int]:
        deceased = self.individuals.count_deceased()
        return self.individuals.count() - deceased, deceased

    def total_living(self) -> str:
        return self._number(self._living_deceased()[0])

    def total_deceased(self) -> str:
        return self._number(self._living_deceased()[1])

    def living_percentage(self, living: bool = True) -> str:
        alive, dead = self._living_deceased()
        return self.formatter.percentage(alive if living else dead, alive + dead)

    def total_events(self, facts: Sequence[str] = ()) -> str:
        """
        Number of events.

        Args:
            facts: Tags to include; entries starting with '!' are excluded instead
        """
        include = [fact for fact in facts if not fact.startswith("!")]
        exclude = [fact[1:] for fact in facts if fact.startswith("!")]
        return self._number(self.events.count_events(include, exclude))

    def total_event_group(self, group: str, whole: bool = False) -> str:
        """
        Births, deaths, marriages or divorces.

        Args:
            group: 'birth', 'death', 'marriage', 'divorce' or 'other'
            whole: Count every fact of the group (BIRT, CHR, BAPM, ADOP, ...)
                instead of the main fact only
        """
        if group == "other":
            return self._number(self.events.count_other_events())
        facts = {
            "birth": ("BIRT", BIRTH_EVENTS),
            "death": ("DEAT", DEATH_EVENTS),
            "marriage": ("MARR", MARRIAGE_EVENTS),
            "divorce": ("DIV", DIVORCE_EVENTS),
        }[group]
        include = facts[1] if whole else (facts[0],)
        return self._number(self.events.count_events(include))

    def total_married(self, sex: str) -> str:
        return self._number(self.individuals.count_married(sex))

    def total_children(self) -> str:
        return self._number(self.families.total_children())

    def average_children(self) -> str:
        return self._number(self.families.average_children(), 2)

    def total_surnames(self, surnames: Sequence[str] = ()) -> str:
        return self._number(self.names.count_surnames(surnames))

    def total_given_names(self, names: Sequence[str] = ()) -> str:
        return self._number(self.names.count_given_names(names))

    # ---- Extremal events ----
    def extremal_event(
        self, facts: Sequence[str], latest: bool = False, field: str = "full"
    ) -> str:
        """
        Earliest or latest event of the given kinds.

        Args:
            facts: GEDCOM tags
            latest: Latest instead of earliest
            field: 'full', 'year', 'name', 'place' or 'type'
        """
        fact: Optional[DateFact] = self.events.extremal_event(facts, latest)
        if fact is None:
            return self.formatter.no_data()
        record = fact.owner
        if field == "year":
            return year_display(fact.year, self._)
        if field == "type":
            return self._(EVENT_LABELS.get(fact.fact, fact.fact))
        if field == "place":
            if not self.can_show(record):
                return self._("Private")
            return str(escape(fact.place)) if fact.place else self.formatter.no_data()
        if field == "name":
            return self.name_link(record)
        return self.full_record(record, self.formatter.date(parse_gedcom_date(fact.date_text)))

    # ---- Lifespans ----
    def longest_life(self, sex: Optional[str] = None, field: str = "full") -> str:
        """The longest lived individual: 'full', 'name' or 'age' (in years)."""
        rows = self.individuals.longest_lived(sex, limit=1)
        if not rows:
            return self.formatter.no_data()
        top = rows[0]
        if field == "age":
            return self._years(top.days)
        if field == "name":
            return self.name_link(top.individual)
        return self.full_record(top.individual)

    def top_oldest(
        self,
        sex: Optional[str] = None,
        limit: Optional[int] = None,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        rows = self.individuals.longest_lived(sex, limit=limit or self.config.default_top_n)
        items = [self.list_item(row.individual, self._age(row.days)) for row in rows]
        return self.render_list(items, shape)

    def top_oldest_alive(
        self,
        sex: Optional[str] = None,
        limit: Optional[int] = None,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        """Oldest individuals without a death fact; members only."""
        if not self.context.viewer.is_privileged:
            return self.formatter.private()
        rows = self.individuals.oldest_alive(
            self.context.reference_jd, sex, limit=limit or self.config.default_top_n
        )
        items = [self.list_item(row.individual, self._age(row.days)) for row in rows]
        return self.render_list(items, shape)

    def average_lifespan(self, sex: Optional[str] = None, show_years: bool = False) -> str:
        """Average lifespan in whole years, or as an age ("72 years") with show_years."""
        days = self.individuals.average_lifespan(sex)
        if not days:
            return self.formatter.no_data()
        return self._age(days) if show_years else self._years(days)

    # ---- Ages at family events ----
    def marriage_age(
        self, sex: str, youngest: bool, field: str = "full", show_years: bool = False
    ) -> str:
        """Youngest or oldest husband ('M') or wife ('F') at marriage."""
        rows = self.individuals.age_at_marriage(sex, youngest, limit=1)
        if not rows:
            return self.formatter.no_data()
        top = rows[0]
        if field == "age":
            return self._age(top.days) if show_years else self._years(top.days)
        if field == "name":
            if not self.can_show(top.individual):
                return self.formatter.private()
            return self.renderer.link(top.individual.full_name, self.url(top.family))
        return self.full_record(top.family)

    def parent_age(
        self, sex: str, youngest: bool, field: str = "full", show_years: bool = False
    ) -> str:
        """Youngest or oldest father ('M') or mother ('F') at a child's birth."""
        rows = self.individuals.age_at_child_birth(sex, youngest, limit=1)
        if not rows:
            return self.formatter.no_data()
        top = rows[0]
        if field == "age":
            return self._age(top.days) if show_years else self._years(top.days)
        if field == "name":
            return self.name_link(top.individual)
        return self.full_record(top.individual)

    def spouse_age_gaps(
        self,
        elder: str = "M",
        limit: Optional[int] = None,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        rows = self.families.spouse_age_gaps(elder, limit=limit or self.config.default_top_n)
        items = [self.list_item(row.family, self._age(row.value)) for row in rows]
        return self.render_list(items, shape)

    def marriage_duration(self, longest: bool = True, field: str = "name") -> str:
        """Longest or shortest marriage: the family link ('name') or its 'age'."""
        rows = self.families.marriage_durations(longest, limit=1)
        if not rows:
            return self.formatter.no_data()
        if field == "age":
            return self._age(rows[0].value)
        return self.name_link(rows[0].family)

    def marriage_durations(
        self,
        longest: bool = True,
        limit: Optional[int] = None,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        rows = self.families.marriage_durations(longest, limit=limit or self.config.default_top_n)
        items = [self.list_item(row.family, self._age(row.value)) for row in rows]
        return self.render_list(items, shape)

    # ---- Family size ----
    def largest_family(self, field: str = "full") -> str:
        """The family with most children: 'full', 'name' or 'size'."""
        rows = self.families.largest(limit=1)
        if not rows:
            return self.formatter.no_data()
        top = rows[0]
        if field == "size":
            return self._number(top.value)
        if field == "name":
            return self.name_link(top.family)
        return self.full_record(top.family)

    def _children_label(self, count: int, noun: str = "child") -> str:
        plural = "children" if noun == "child" else f"{noun}ren"
        return f"{self._number(count)} {self._(noun if count == 1 else plural)}"

    def largest_families(
        self, limit: Optional[int] = None, shape: OutputShape = OutputShape.INLINE
    ) -> str:
        rows = self.families.largest(limit=limit or self.config.default_top_n)
        items = [
            self.list_item(row.family, self._children_label(row.value))
            for row in rows
            if row.value > 0
        ]
        return self.render_list(items, shape)

    def most_grandchildren(
        self, limit: Optional[int] = None, shape: OutputShape = OutputShape.INLINE
    ) -> str:
        rows = self.families.most_grandchildren(limit=limit or self.config.default_top_n)
        items = [
            self.list_item(row.family, self._children_label(row.value, "grandchild"))
            for row in rows
        ]
        return self.render_list(items, shape)

    def childless_count(self) -> str:
        return self._number(self.families.count_childless())

    def childless_families(self, shape: OutputShape = OutputShape.LIST) -> str:
        items = [self.list_item(family) for family in self.families.childless()]
        return self.render_list(items, shape)

    def sibling_age_gaps(
        self,
        limit: Optional[int] = None,
        one_per_family: bool = False,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        """Sibling pairs with the widest gaps between their births."""
        rows = self.families.sibling_age_gaps(
            limit=limit or self.config.default_top_n, one_per_family=one_per_family
        )
        items = []
        for row in rows:
            detail = self._age(row.days)
            if self.can_show(row.elder) and self.can_show(row.younger):
                label = f"{row.younger.full_name} {self._('and')} {row.elder.full_name}"
                items.append(ListItem(label, self.url(row.family), detail))
            else:
                items.append(ListItem(self.formatter.private(), None, detail))
        return self.render_list(items, shape)

    def sibling_age_gap(self, field: str = "name", one_per_family: bool = False) -> str:
        """The widest sibling gap: both names ('name') or the gap ('age')."""
        rows = self.families.sibling_age_gaps(limit=1, one_per_family=one_per_family)
        if not rows:
            return self.formatter.no_data()
        top = rows[0]
        if field == "age":
            return self._age(top.days)
        return f"{self.name_link(top.younger)} {self._('and')} {self.name_link(top.elder)}"

    # ---- Names ----
    def _name_items(self, rows: Sequence[NameCount], totals: bool) -> List[ListItem]:
        return [
            ListItem(row.name, None, self._number(row.count) if totals else "")
            for row in rows
        ]

    def common_surname(self) -> str:
        rows = self.names.common_surnames(threshold=1, limit=1, sorting="rcount")
        return str(escape(rows[0].name)) if rows else self.formatter.no_data()

    def common_surnames(
        self,
        threshold: int = 1,
        limit: Optional[int] = None,
        sorting: str = "alpha",
        totals: bool = False,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        rows = self.names.common_surnames(
            threshold, limit or self.config.default_top_n, sorting
        )
        return self.render_list(self._name_items(rows, totals), shape)

    def common_given(
        self,
        sex: Optional[str] = None,
        threshold: int = 1,
        limit: Optional[int] = None,
        totals: bool = False,
        shape: OutputShape = OutputShape.INLINE,
    ) -> str:
        rows = self.names.common_given(sex, threshold, limit or self.config.default_top_n)
        if shape == OutputShape.TABLE:
            return self.render_list(
                self._name_items(rows, True), shape, (self._("Name"), self._("Count"))
            )
        return self.render_list(self._name_items(rows, totals), shape)

    # ---- Latest user ----
    def latest_user_info(self, field: str, date_format: Optional[str] = None) -> str:
        """
        The most recently registered user.

        Args:
            field: 'id', 'username', 'name', 'date' or 'time'
            date_format: strftime pattern for 'date' and 'time'
        """
        user = self.latest_user
        if user is None:
            return self.formatter.no_data()
        if field == "id":
            return str(user.id)
        if field == "username":
            return str(escape(user.username))
        if field == "name":
            return str(escape(user.real_name or user.username))
        registered: datetime = user.registered_at
        if field == "time":
            return registered.strftime(date_format or "%H:%M:%S")
        return registered.strftime(date_format or "%d %B %Y")

    # ---- Distributions ----
    def birth_months(
        self, split_by_sex: bool = False, year1: Optional[int] = None, year2: Optional[int] = None
    ):
        return self.events.month_counts("BIRT", split_by_sex, year1, year2)

    def death_months(
        self, split_by_sex: bool = False, year1: Optional[int] = None, year2: Optional[int] = None
    ):
        return self.events.month_counts("DEAT", split_by_sex, year1, year2)

    def first_child_months(
        self, split_by_sex: bool = False, year1: Optional[int] = None, year2: Optional[int] = None
    ):
        return self.events.first_child_month_counts(split_by_sex, year1, year2)

    def century_counts(self, fact: str) -> List[Tuple[Optional[int], int]]:
        """
        Facts of one kind per century; undated facts form the last bucket.
        """
        years = self.events.year_counts((fact,))
        unknown = self.events.count_events((fact,)) - sum(years.values())
        return century_buckets(years, max(unknown, 0))

    # ---- Charts ----
    def _size(self, size: Optional[Tuple[int, int]], large: bool = False) -> Tuple[int, int]:
        if size:
            return size
        default = self.config.large_chart_size if large else self.config.small_chart_size
        width, _, height = default.partition("x")
        return int(width), int(height)

    def _gradient(self, steps: int, color_from: Optional[str], color_to: Optional[str]) -> List[str]:
        return color_gradient(
            color_from or self.config.color_from, color_to or self.config.color_to, steps
        )

    def chart_sex(
        self,
        size: Optional[Tuple[int, int]] = None,
        color_female: Optional[str] = None,
        color_male: Optional[str] = None,
        color_unknown: Optional[str] = None,
    ) -> str:
        counts = {
            self._("Females"): self.individuals.count("F"),
            self._("Males"): self.individuals.count("M"),
            self._("Unknown"): self.individuals.count("U"),
        }
        colors = [
            color_female or self.config.color_female,
            color_male or self.config.color_male,
            color_unknown or self.config.color_unknown,
        ]
        series = self.charts.pie(counts, self._("Individuals, by sex"), colors, self._size(size))
        return self.render_chart(series)

    def chart_mortality(
        self,
        size: Optional[Tuple[int, int]] = None,
        color_living: Optional[str] = None,
        color_dead: Optional[str] = None,
    ) -> str:
        living, deceased = self._living_deceased()
        counts = {self._("Living"): living, self._("Dead"): deceased}
        colors = [color_living or self.config.color_living, color_dead or self.config.color_dead]
        series = self.charts.pie(counts, self._("Mortality"), colors, self._size(size))
        return self.render_chart(series)

    def chart_with_sources(
        self,
        kind: str = "individuals",
        size: Optional[Tuple[int, int]] = None,
        color_from: Optional[str] = None,
        color_to: Optional[str] = None,
    ) -> str:
        """Records of one kind with and without source citations."""
        queries = self.individuals if kind == "individuals" else self.families
        total = queries.count()
        cited = queries.count_with_sources()
        counts = {self._("With sources"): cited, self._("Without sources"): total - cited}
        title = self._(
            "Individuals with sources" if kind == "individuals" else "Families with sources"
        )
        series = self.charts.pie(
            counts, title, self._gradient(2, color_from, color_to), self._size(size)
        )
        return self.render_chart(series)

    def chart_centuries(
        self,
        fact: str,
        size: Optional[Tuple[int, int]] = None,
        color_from: Optional[str] = None,
        color_to: Optional[str] = None,
    ) -> str:
        """Pie of births, deaths, marriages or divorces by century."""
        buckets = self.century_counts(fact)
        title = self._(f"{EVENT_LABELS.get(fact, fact).capitalize()} by century")
        series = self.charts.centuries(
            buckets,
            title,
            self._gradient(len(buckets), color_from, color_to),
            self._size(size),
            pie=True,
        )
        return self.render_chart(series)

    def chart_largest_families(
        self,
        size: Optional[Tuple[int, int]] = None,
        color_from: Optional[str] = None,
        color_to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> str:
        rows = self.families.largest(limit=limit or self.config.default_top_n)
        counts: Dict[str, int] = {}
        for row in rows:
            label = row.family.full_name if self.can_show(row.family) else self.formatter.private()
            counts[label] = counts.get(label, 0) + row.value
        series = self.charts.pie(
            counts,
            self._("Largest families"),
            self._gradient(len(counts), color_from, color_to),
            self._size(size, large=True),
        )
        return self.render_chart(series)

    def chart_childless(
        self,
        size: Optional[Tuple[int, int]] = None,
        year1: Optional[int] = None,
        year2: Optional[int] = None,
    ) -> str:
        """Bars of childless families by marriage century; undated ones last."""
        years = self.families.childless_marriage_years(year1, year2)
        unknown = 0
        if year1 is None and year2 is None:
            unknown = max(self.families.count_childless() - sum(years.values()), 0)
        buckets = century_buckets(years, unknown)
        series = self.charts.centuries(
            buckets,
            self._("Number of families without children"),
            [self.config.color_to],
            size or (220, 200),
        )
        return self.render_chart(series)

    def _chart_names(
        self,
        rows: Sequence[NameCount],
        title: str,
        size: Optional[Tuple[int, int]],
        color_from: Optional[str],
        color_to: Optional[str],
    ) -> str:
        counts = {row.name: row.count for row in rows}
        other = self.individuals.count() - sum(counts.values())
        if counts and other > 0:
            counts[self._("Other")] = other
        series = self.charts.pie(
            counts,
            title,
            self._gradient(len(counts), color_from, color_to),
            self._size(size, large=True),
        )
        return self.render_chart(series)

    def chart_common_surnames(
        self,
        size: Optional[Tuple[int, int]] = None,
        color_from: Optional[str] = None,
        color_to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> str:
        rows = self.names.common_surnames(1, limit or self.config.default_top_n, "rcount")
        return self._chart_names(rows, self._("Top surnames"), size, color_from, color_to)

    def chart_common_given(
        self,
        size: Optional[Tuple[int, int]] = None,
        color_from: Optional[str] = None,
        color_to: Optional[str] = None,
        limit: int = 7,
    ) -> str:
        rows = self.names.common_given(None, 1, limit)
        return self._chart_names(rows, self._("Top given names"), size, color_from, color_to)

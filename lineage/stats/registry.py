#!/usr/bin/env python3
"""
registry.py
--------------------
The tag whitelist.

TAGS maps every embeddable tag name to a handler ``(stats, args) -> str``.
The mapping is built once at import time from the explicit tables below;
nothing is discovered by inspecting the Stats object. Names listed in
NOT_ALLOWED are rejected before the mapping is consulted.

Handlers receive their positional arguments as a TagArgs value and decide
their own defaults (a missing or malformed count becomes 10, a missing
size becomes the configured chart size).

Usage:
    resolver = TagResolver()
    handler = resolver.resolve("topTenOldestList")
    html = handler(stats, TagArgs.of("5"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, List, Mapping, Optional

# --- Local imports ---
from lineage.core.exceptions import UnknownTagError
from .arguments import TagArgs
from .renderer import OutputShape

if TYPE_CHECKING:
    from .facade import Stats

TagHandler = Callable[["Stats", TagArgs], str]

DEFAULT_TOTAL = 10

NOT_ALLOWED: FrozenSet[str] = frozenset(
    {
        "__construct",
        "__init__",
        "embedTags",
        "getAllTagsTable",
        "getAllTagsText",
        "statsPlaces",
        "statsBirthQuery",
        "statsDeathQuery",
        "statsMarrQuery",
        "statsAgeQuery",
        "monthFirstChildQuery",
        "statsChildrenQuery",
        "statsMarrAgeQuery",
        "iso3166",
        "getAllCountries",
    }
)

INLINE = OutputShape.INLINE
LIST = OutputShape.LIST
TABLE = OutputShape.TABLE


def _total(args: TagArgs, index: int = 0) -> int:
    return args.integer(index, DEFAULT_TOTAL, minimum=1)


def _optional_int(args: TagArgs, index: int) -> Optional[int]:
    value = args.integer(index, -1)
    return None if value < 0 else value


# ---- Tree and totals ----
def _tree_tags() -> Dict[str, TagHandler]:
    fields = {
        "gedcomFilename": "filename",
        "gedcomId": "id",
        "gedcomTitle": "title",
        "gedcomDate": "date",
        "gedcomUpdated": "updated",
        "gedcomRootId": "root",
    }
    return {
        name: (lambda stats, args, field=field: stats.tree_info(field))
        for name, field in fields.items()
    }


def _total_tags() -> Dict[str, TagHandler]:
    tags: Dict[str, TagHandler] = {
        "totalRecords": lambda stats, args: stats.total_records(),
        "totalIndisWithSources": lambda stats, args: stats.total_with_sources("individuals"),
        "totalFamsWithSources": lambda stats, args: stats.total_with_sources("families"),
        "totalSurnames": lambda stats, args: stats.total_surnames(args.rest()),
        "totalGivennames": lambda stats, args: stats.total_given_names(args.rest()),
        "totalEvents": lambda stats, args: stats.total_events(args.rest()),
        "totalEventsOther": lambda stats, args: stats.total_event_group("other"),
        "totalLiving": lambda stats, args: stats.total_living(),
        "totalLivingPercentage": lambda stats, args: stats.living_percentage(True),
        "totalDeceased": lambda stats, args: stats.total_deceased(),
        "totalDeceasedPercentage": lambda stats, args: stats.living_percentage(False),
        "totalMarriedMales": lambda stats, args: stats.total_married("M"),
        "totalMarriedFemales": lambda stats, args: stats.total_married("F"),
        "totalChildren": lambda stats, args: stats.total_children(),
        "averageChildren": lambda stats, args: stats.average_children(),
        "noChildrenFamilies": lambda stats, args: stats.childless_count(),
    }
    kinds = {
        "Individuals": "individuals",
        "Families": "families",
        "Sources": "sources",
        "Notes": "notes",
        "Repositories": "repositories",
    }
    for suffix, kind in kinds.items():
        tags[f"total{suffix}"] = lambda stats, args, kind=kind: stats.total(kind)
        tags[f"total{suffix}Percentage"] = (
            lambda stats, args, kind=kind: stats.total_percentage(kind)
        )
    for suffix, sex in (("Males", "M"), ("Females", "F"), ("Unknown", "U")):
        tags[f"totalSex{suffix}"] = lambda stats, args, sex=sex: stats.total_sex(sex)
        tags[f"totalSex{suffix}Percentage"] = (
            lambda stats, args, sex=sex: stats.sex_percentage(sex)
        )
    groups = (
        ("Birth", "Births", "birth"),
        ("Death", "Deaths", "death"),
        ("Marriage", "Marriages", "marriage"),
        ("Divorce", "Divorces", "divorce"),
    )
    for event, plural, group in groups:
        tags[f"totalEvents{event}"] = (
            lambda stats, args, group=group: stats.total_event_group(group, whole=True)
        )
        tags[f"total{plural}"] = lambda stats, args, group=group: stats.total_event_group(group)
    return tags


# ---- Extremal events ----
def _event_tags() -> Dict[str, TagHandler]:
    tags: Dict[str, TagHandler] = {}
    kinds = {
        "Birth": ("BIRT",),
        "Death": ("DEAT",),
        "Marriage": ("MARR",),
        "Divorce": ("DIV",),
        "Event": ("BIRT", "DEAT", "MARR", "ADOP", "BURI", "CENS"),
    }
    fields = {"": "full", "Year": "year", "Name": "name", "Place": "place"}
    for direction, latest in (("first", False), ("last", True)):
        for kind, facts in kinds.items():
            kind_fields = dict(fields, Type="type") if kind == "Event" else fields
            for suffix, field in kind_fields.items():
                tags[f"{direction}{kind}{suffix}"] = (
                    lambda stats, args, facts=facts, latest=latest, field=field:
                    stats.extremal_event(facts, latest, field)
                )
    return tags


# ---- Lifespans ----
def _lifespan_tags() -> Dict[str, TagHandler]:
    tags: Dict[str, TagHandler] = {}
    for infix, sex in (("", None), ("Female", "F"), ("Male", "M")):
        for suffix, field in (("", "full"), ("Age", "age"), ("Name", "name")):
            tags[f"longestLife{infix}{suffix}"] = (
                lambda stats, args, sex=sex, field=field: stats.longest_life(sex, field)
            )
        tags[f"topTenOldest{infix}"] = (
            lambda stats, args, sex=sex: stats.top_oldest(sex, _total(args), INLINE)
        )
        tags[f"topTenOldest{infix}List"] = (
            lambda stats, args, sex=sex: stats.top_oldest(sex, _total(args), LIST)
        )
        tags[f"topTenOldest{infix}Alive"] = (
            lambda stats, args, sex=sex: stats.top_oldest_alive(sex, _total(args), INLINE)
        )
        tags[f"topTenOldest{infix}ListAlive"] = (
            lambda stats, args, sex=sex: stats.top_oldest_alive(sex, _total(args), LIST)
        )
        tags[f"averageLifespan{infix}"] = (
            lambda stats, args, sex=sex: stats.average_lifespan(sex, args.flag(0))
        )
    return tags


# ---- Marriages and parents ----
def _age_tags() -> Dict[str, TagHandler]:
    tags: Dict[str, TagHandler] = {}
    for prefix, youngest in (("youngest", True), ("oldest", False)):
        for infix, sex in (("Female", "F"), ("Male", "M")):
            for suffix, field in (("", "full"), ("Name", "name"), ("Age", "age")):
                tags[f"{prefix}Marriage{infix}{suffix}"] = (
                    lambda stats, args, sex=sex, youngest=youngest, field=field:
                    stats.marriage_age(sex, youngest, field, args.flag(0))
                )
        for parent, sex in (("Mother", "F"), ("Father", "M")):
            for suffix, field in (("", "full"), ("Name", "name"), ("Age", "age")):
                tags[f"{prefix}{parent}{suffix}"] = (
                    lambda stats, args, sex=sex, youngest=youngest, field=field:
                    stats.parent_age(sex, youngest, field, args.flag(0))
                )
    for order, elder in (("MF", "M"), ("FM", "F")):
        tags[f"ageBetweenSpouses{order}"] = (
            lambda stats, args, elder=elder: stats.spouse_age_gaps(elder, _total(args), INLINE)
        )
        tags[f"ageBetweenSpouses{order}List"] = (
            lambda stats, args, elder=elder: stats.spouse_age_gaps(elder, _total(args), LIST)
        )
    for prefix, longest in (("top", True), ("min", False)):
        tags[f"{prefix}AgeOfMarriageFamily"] = (
            lambda stats, args, longest=longest: stats.marriage_duration(longest, "name")
        )
        tags[f"{prefix}AgeOfMarriage"] = (
            lambda stats, args, longest=longest: stats.marriage_duration(longest, "age")
        )
        tags[f"{prefix}AgeOfMarriageFamilies"] = (
            lambda stats, args, longest=longest:
            stats.marriage_durations(longest, _total(args), INLINE)
        )
        tags[f"{prefix}AgeOfMarriageFamiliesList"] = (
            lambda stats, args, longest=longest:
            stats.marriage_durations(longest, _total(args), LIST)
        )
    return tags


# ---- Families ----
def _family_tags() -> Dict[str, TagHandler]:
    return {
        "largestFamily": lambda stats, args: stats.largest_family("full"),
        "largestFamilySize": lambda stats, args: stats.largest_family("size"),
        "largestFamilyName": lambda stats, args: stats.largest_family("name"),
        "topTenLargestFamily": lambda stats, args: stats.largest_families(_total(args), INLINE),
        "topTenLargestFamilyList": lambda stats, args: stats.largest_families(_total(args), LIST),
        "topTenLargestGrandFamily": (
            lambda stats, args: stats.most_grandchildren(_total(args), INLINE)
        ),
        "topTenLargestGrandFamilyList": (
            lambda stats, args: stats.most_grandchildren(_total(args), LIST)
        ),
        "noChildrenFamiliesList": lambda stats, args: stats.childless_families(
            LIST if args.choice(0, ("list", "nolist"), "list") == "list" else INLINE
        ),
        "topAgeBetweenSiblingsName": (
            lambda stats, args: stats.sibling_age_gap("name", args.flag(1))
        ),
        "topAgeBetweenSiblings": (
            lambda stats, args: stats.sibling_age_gap("age", args.flag(1))
        ),
        "topAgeBetweenSiblingsFullName": (
            lambda stats, args: stats.sibling_age_gaps(_total(args), args.flag(1), INLINE)
        ),
        "topAgeBetweenSiblingsList": (
            lambda stats, args: stats.sibling_age_gaps(_total(args), args.flag(1), LIST)
        ),
    }


# ---- Names ----
SURNAME_SORTINGS = ("alpha", "count", "rcount")


def _name_tags() -> Dict[str, TagHandler]:
    tags: Dict[str, TagHandler] = {
        "getCommonSurname": lambda stats, args: stats.common_surname(),
    }
    surname_variants = {
        "": (False, INLINE, "alpha"),
        "Totals": (True, INLINE, "rcount"),
        "List": (False, LIST, "alpha"),
        "ListTotals": (True, LIST, "rcount"),
    }
    for suffix, (totals, shape, sorting) in surname_variants.items():
        tags[f"commonSurnames{suffix}"] = (
            lambda stats, args, totals=totals, shape=shape, sorting=sorting:
            stats.common_surnames(
                threshold=args.integer(0, 1, minimum=1),
                limit=_total(args, 1),
                sorting=args.choice(2, SURNAME_SORTINGS, sorting),
                totals=totals,
                shape=shape,
            )
        )
    given_variants = {
        "": (False, INLINE),
        "Totals": (True, INLINE),
        "List": (False, LIST),
        "ListTotals": (True, LIST),
        "Table": (True, TABLE),
    }
    for infix, sex in (("", None), ("Female", "F"), ("Male", "M"), ("Unknown", "U")):
        for suffix, (totals, shape) in given_variants.items():
            tags[f"commonGiven{infix}{suffix}"] = (
                lambda stats, args, sex=sex, totals=totals, shape=shape:
                stats.common_given(
                    sex=sex,
                    threshold=args.integer(0, 1, minimum=1),
                    limit=_total(args, 1),
                    totals=totals,
                    shape=shape,
                )
            )
    return tags


# ---- Latest user ----
def _user_tags() -> Dict[str, TagHandler]:
    return {
        "latestUserId": lambda stats, args: stats.latest_user_info("id"),
        "latestUserName": lambda stats, args: stats.latest_user_info("username"),
        "latestUserFullName": lambda stats, args: stats.latest_user_info("name"),
        "latestUserRegDate": lambda stats, args: stats.latest_user_info("date", args.raw(0)),
        "latestUserRegTime": lambda stats, args: stats.latest_user_info("time", args.raw(0)),
    }


# ---- Charts ----
def _chart_tags() -> Dict[str, TagHandler]:
    def small(stats: "Stats", args: TagArgs):
        return args.size(0, stats.config.small_chart_size)

    def large(stats: "Stats", args: TagArgs):
        return args.size(0, stats.config.large_chart_size)

    def color(args: TagArgs, index: int) -> Optional[str]:
        return args.color(index, None)

    tags: Dict[str, TagHandler] = {
        "chartSex": lambda stats, args: stats.chart_sex(
            small(stats, args), color(args, 1), color(args, 2), color(args, 3)
        ),
        "chartMortality": lambda stats, args: stats.chart_mortality(
            small(stats, args), color(args, 1), color(args, 2)
        ),
        "chartIndisWithSources": lambda stats, args: stats.chart_with_sources(
            "individuals", small(stats, args), color(args, 1), color(args, 2)
        ),
        "chartFamsWithSources": lambda stats, args: stats.chart_with_sources(
            "families", small(stats, args), color(args, 1), color(args, 2)
        ),
        "chartLargestFamilies": lambda stats, args: stats.chart_largest_families(
            large(stats, args), color(args, 1), color(args, 2), _total(args, 3)
        ),
        "chartNoChildrenFamilies": lambda stats, args: stats.chart_childless(
            args.size(0, "220x200"), _optional_int(args, 1), _optional_int(args, 2)
        ),
        "chartCommonSurnames": lambda stats, args: stats.chart_common_surnames(
            large(stats, args), color(args, 1), color(args, 2), _total(args, 3)
        ),
        "chartCommonGiven": lambda stats, args: stats.chart_common_given(
            large(stats, args), color(args, 1), color(args, 2), args.integer(3, 7, minimum=1)
        ),
    }
    for name, fact in (
        ("statsBirth", "BIRT"),
        ("statsDeath", "DEAT"),
        ("statsMarr", "MARR"),
        ("statsDiv", "DIV"),
    ):
        tags[name] = lambda stats, args, fact=fact: stats.chart_centuries(
            fact, small(stats, args), color(args, 1), color(args, 2)
        )
    return tags


def build_tags() -> Dict[str, TagHandler]:
    """Assemble the whitelist from the per-area tables."""
    tags: Dict[str, TagHandler] = {}
    for table in (
        _tree_tags(),
        _total_tags(),
        _event_tags(),
        _lifespan_tags(),
        _age_tags(),
        _family_tags(),
        _name_tags(),
        _user_tags(),
        _chart_tags(),
    ):
        tags.update(table)
    return {name: handler for name, handler in tags.items() if name not in NOT_ALLOWED}


TAGS: Dict[str, TagHandler] = build_tags()


class TagResolver:
    """
    Resolve tag names against a fixed whitelist.

    Attributes:
        tags: Name -> handler mapping (TAGS by default)
        denied: Names rejected even when present in the mapping
    """

    def __init__(
        self,
        tags: Optional[Mapping[str, TagHandler]] = None,
        denied: FrozenSet[str] = NOT_ALLOWED,
    ) -> None:
        self.tags = dict(TAGS if tags is None else tags)
        self.denied = denied

    def resolve(self, name: str) -> Optional[TagHandler]:
        """Handler for a tag name, or None when the name is denied or unknown."""
        if name in self.denied:
            return None
        return self.tags.get(name)

    def require(self, name: str) -> TagHandler:
        """
        Handler for a tag name.

        Raises:
            UnknownTagError: If the name is denied or unknown
        """
        handler = self.resolve(name)
        if handler is None:
            raise UnknownTagError(f"Unknown tag: {name}")
        return handler

    def names(self) -> List[str]:
        return sorted(name for name in self.tags if name not in self.denied)

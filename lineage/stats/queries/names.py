#!/usr/bin/env python3
"""
names.py
--------
Surname and given-name frequency queries.

Names are grouped by a collation key (compatibility decomposition,
combining marks removed, case folded) so that "Smith", "smith" and
"SMITH" fall into one bucket. Counting and display use the same key.
Each bucket is displayed with its most frequent spelling.
"""
import unicodedata
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from lineage.database.decorators import handle_db_errors, log_database_operation
from lineage.database.models import Individual, Name
from .base import TreeQueries

UNKNOWN_SURNAMES = ("", "@N.N.")
UNKNOWN_GIVEN = ("", "@P.N.")
MARRIED_NAME = "_MARNM"
SORTINGS = ("alpha", "count", "rcount")


def collation_key(text: Optional[str]) -> str:
    """
    Grouping key for a name.

    Examples:
        >>> collation_key("Müller") == collation_key("MULLER")
        True
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return " ".join(stripped.casefold().split())


@dataclass(frozen=True)
class NameCount:
    """A name bucket: display spelling, number of individuals, collation key."""

    name: str
    count: int
    key: str


class _Bucket:
    def __init__(self) -> None:
        self.individuals: Set[int] = set()
        self.spellings: Counter = Counter()

    def add(self, spelling: str, individual_id: int) -> None:
        self.individuals.add(individual_id)
        self.spellings[spelling] += 1

    @property
    def display(self) -> str:
        return sorted(self.spellings.items(), key=lambda item: (-item[1], item[0]))[0][0]


def _rank(
    buckets: Dict[str, _Bucket], threshold: int, limit: int
) -> List[NameCount]:
    counted = [
        NameCount(bucket.display, len(bucket.individuals), key)
        for key, bucket in buckets.items()
        if len(bucket.individuals) >= threshold
    ]
    counted.sort(key=lambda entry: (-entry.count, entry.key))
    return counted[:limit]


def _is_initial(word: str) -> bool:
    return len(word.rstrip(".")) <= 1


class NameQueries(TreeQueries):
    """Frequency queries over the names of one tree."""

    @handle_db_errors
    @log_database_operation("common_surnames")
    def common_surnames(
        self, threshold: int = 1, limit: int = 10, sorting: str = "alpha"
    ) -> List[NameCount]:
        """
        Most common surnames.

        Args:
            threshold: Minimum number of individuals per surname
            limit: Number of surnames kept (the most frequent ones)
            sorting: 'alpha' (by name), 'count' (ascending) or 'rcount' (descending)

        Returns:
            Surname buckets in the requested order
        """
        rows = (
            self.session.query(Name.surname, Name.individual_id)
            .filter(
                Name.tree_id == self.tree_id,
                Name.name_type != MARRIED_NAME,
                Name.surname.notin_(UNKNOWN_SURNAMES),
            )
            .all()
        )
        buckets: Dict[str, _Bucket] = {}
        for surname, individual_id in rows:
            key = collation_key(surname)
            if key:
                buckets.setdefault(key, _Bucket()).add(surname.strip(), individual_id)

        ranked = _rank(buckets, threshold, limit)
        if sorting == "count":
            ranked.sort(key=lambda entry: (entry.count, entry.key))
        elif sorting == "rcount":
            ranked.sort(key=lambda entry: (-entry.count, entry.key))
        else:
            ranked.sort(key=lambda entry: entry.key)
        return ranked

    @handle_db_errors
    @log_database_operation("common_given_names")
    def common_given(
        self, sex: Optional[str] = None, threshold: int = 1, limit: int = 10
    ) -> List[NameCount]:
        """
        Most common given names, each word of a given name counted apart.

        Initials and unknown given names are ignored.

        Args:
            sex: 'M', 'F', 'U' or None for everyone
            threshold: Minimum number of individuals per name
            limit: Number of names kept

        Returns:
            Given-name buckets, most frequent first
        """
        query = (
            self.session.query(Name.given, Name.individual_id)
            .join(Individual, Individual.id == Name.individual_id)
            .filter(
                Name.tree_id == self.tree_id,
                Name.name_type != MARRIED_NAME,
                Name.given.notin_(UNKNOWN_GIVEN),
            )
        )
        rows = self._filter_sex(query, Individual.sex, sex).all()

        buckets: Dict[str, _Bucket] = {}
        for given, individual_id in rows:
            for word in (given or "").split():
                if word in UNKNOWN_GIVEN or _is_initial(word):
                    continue
                buckets.setdefault(collation_key(word), _Bucket()).add(word, individual_id)
        return _rank(buckets, threshold, limit)

    @handle_db_errors
    @log_database_operation("count_surnames")
    def count_surnames(self, surnames: Sequence[str] = ()) -> int:
        """
        Distinct surnames, or the names carrying any of the given surnames.

        Args:
            surnames: When given, count name rows matching one of them
        """
        values = self._column_values(Name.surname, UNKNOWN_SURNAMES)
        return self._count_values(values, surnames)

    @handle_db_errors
    @log_database_operation("count_given_names")
    def count_given_names(self, names: Sequence[str] = ()) -> int:
        """
        Distinct given names, or the names carrying any of the given ones.

        Args:
            names: When given, count name rows whose given name matches one of them
        """
        values = self._column_values(Name.given, UNKNOWN_GIVEN)
        return self._count_values(values, names)

    def _column_values(self, column, unknown: Tuple[str, ...]) -> List[str]:
        rows = (
            self.session.query(column)
            .filter(
                Name.tree_id == self.tree_id,
                Name.name_type != MARRIED_NAME,
                column.notin_(unknown),
            )
            .all()
        )
        return [value for (value,) in rows]

    @staticmethod
    def _count_values(values: Iterable[str], wanted: Sequence[str]) -> int:
        keys = [collation_key(value) for value in values]
        if wanted:
            targets = {collation_key(name) for name in wanted}
            return sum(1 for key in keys if key in targets)
        return len({key for key in keys if key})

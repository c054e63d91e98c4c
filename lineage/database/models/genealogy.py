"""
Genealogy Models
-----------------

GEDCOM-derived records of the Lineage database.

Models:
    - Tree: A dataset (one imported GEDCOM file)
    - Individual: A person with sex, names and facts
    - Family: A couple (either spouse may be absent) with children
    - DateFact: A dated fact of an individual or family (the vital events)
    - Name: A name of an individual
    - Source, Note, Repository: Supporting records
    - User: A registered account (read-only for statistics)

GEDCOM parsing happens upstream. Comparable dates are always derived
from the raw date text through ``DateFact.from_gedcom``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Any, List, Optional

# --- Third party ---
from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from lineage.stats.dates import parse_gedcom_date
from .associations import family_children, family_sources, individual_sources
from .base import Base
from .enums import Sex

UNKNOWN_NAME = "N.N."


# ----- Tree -----
class Tree(Base):
    """
    A genealogical dataset.

    Attributes:
        id: Primary key (the dataset identifier used by every query)
        name: Unique file name of the imported GEDCOM
        title: Human-readable title
        root_xref: XREF of the tree's default individual
    """

    __tablename__ = "trees"
    __table_args__ = (CheckConstraint("name != ''", name="ck_tree_non_empty_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    root_xref: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # --- Relationships ---
    individuals: Mapped[List["Individual"]] = relationship(
        "Individual", back_populates="tree", cascade="all, delete-orphan"
    )
    families: Mapped[List["Family"]] = relationship(
        "Family", back_populates="tree", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Tree(id={self.id}, name='{self.name}')>"


# ----- Individuals -----
class Individual(Base):
    """
    A person of a tree.

    Attributes:
        id: Primary key
        tree_id: Owning tree
        xref: GEDCOM cross-reference, unique per tree
        sex: 'M', 'F' or 'U'

    Relationships:
        names: Names in GEDCOM order
        facts: Dated facts (BIRT, DEAT, ...)
        sources: Sources citing this individual
        child_of: Families in which this individual is a child
        families_as_husband / families_as_wife: Families as a spouse
    """

    __tablename__ = "individuals"
    __table_args__ = (
        CheckConstraint("sex IN ('M', 'F', 'U')", name="ck_individual_sex"),
        UniqueConstraint("tree_id", "xref", name="uq_individual_tree_xref"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    xref: Mapped[str] = mapped_column(String(20), nullable=False)
    sex: Mapped[str] = mapped_column(String(1), nullable=False, default=Sex.UNKNOWN.value)

    # --- Relationships ---
    tree: Mapped["Tree"] = relationship("Tree", back_populates="individuals")
    names: Mapped[List["Name"]] = relationship(
        "Name",
        back_populates="individual",
        cascade="all, delete-orphan",
        order_by="Name.id",
    )
    facts: Mapped[List["DateFact"]] = relationship(
        "DateFact",
        back_populates="individual",
        cascade="all, delete-orphan",
        order_by="DateFact.id",
    )
    sources: Mapped[List["Source"]] = relationship(
        "Source", secondary=individual_sources, back_populates="individuals"
    )
    child_of: Mapped[List["Family"]] = relationship(
        "Family", secondary=family_children, back_populates="children"
    )
    families_as_husband: Mapped[List["Family"]] = relationship(
        "Family", foreign_keys="Family.husband_id", back_populates="husband"
    )
    families_as_wife: Mapped[List["Family"]] = relationship(
        "Family", foreign_keys="Family.wife_id", back_populates="wife"
    )

    # --- Computed properties ---
    @property
    def full_name(self) -> str:
        """Primary name, or N.N. when the individual has no name."""
        return self.names[0].full if self.names else UNKNOWN_NAME

    def fact(self, tag: str) -> Optional["DateFact"]:
        """First fact with the given GEDCOM tag."""
        for fact in self.facts:
            if fact.fact == tag:
                return fact
        return None

    def has_fact(self, *tags: str) -> bool:
        return any(fact.fact in tags for fact in self.facts)

    def __repr__(self) -> str:
        return f"<Individual(id={self.id}, xref='{self.xref}', sex='{self.sex}')>"

    def __str__(self) -> str:
        return self.full_name


# ----- Families -----
class Family(Base):
    """
    A couple and their children.

    Attributes:
        id: Primary key
        tree_id: Owning tree
        xref: GEDCOM cross-reference, unique per tree
        husband_id: Husband (nullable)
        wife_id: Wife (nullable)
        num_children: Stored child count (NCHI or counted on import)

    Notes:
        - A family may lack one or both spouses
        - num_children is authoritative for family-size statistics
    """

    __tablename__ = "families"
    __table_args__ = (
        CheckConstraint("num_children >= 0", name="ck_family_num_children"),
        UniqueConstraint("tree_id", "xref", name="uq_family_tree_xref"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    xref: Mapped[str] = mapped_column(String(20), nullable=False)
    husband_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("individuals.id", ondelete="SET NULL"), nullable=True
    )
    wife_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("individuals.id", ondelete="SET NULL"), nullable=True
    )
    num_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # --- Relationships ---
    tree: Mapped["Tree"] = relationship("Tree", back_populates="families")
    husband: Mapped[Optional["Individual"]] = relationship(
        "Individual", foreign_keys=[husband_id], back_populates="families_as_husband"
    )
    wife: Mapped[Optional["Individual"]] = relationship(
        "Individual", foreign_keys=[wife_id], back_populates="families_as_wife"
    )
    children: Mapped[List["Individual"]] = relationship(
        "Individual", secondary=family_children, back_populates="child_of"
    )
    facts: Mapped[List["DateFact"]] = relationship(
        "DateFact",
        back_populates="family",
        cascade="all, delete-orphan",
        order_by="DateFact.id",
    )
    sources: Mapped[List["Source"]] = relationship(
        "Source", secondary=family_sources, back_populates="families"
    )

    # --- Computed properties ---
    @property
    def spouses(self) -> List["Individual"]:
        return [spouse for spouse in (self.husband, self.wife) if spouse is not None]

    @property
    def full_name(self) -> str:
        """Names of both spouses joined by '+', N.N. for a missing one."""
        husband = self.husband.full_name if self.husband else UNKNOWN_NAME
        wife = self.wife.full_name if self.wife else UNKNOWN_NAME
        return f"{husband} + {wife}"

    def fact(self, tag: str) -> Optional["DateFact"]:
        """First fact with the given GEDCOM tag."""
        for fact in self.facts:
            if fact.fact == tag:
                return fact
        return None

    def __repr__(self) -> str:
        return f"<Family(id={self.id}, xref='{self.xref}', children={self.num_children})>"

    def __str__(self) -> str:
        return self.full_name


# ----- Dated facts -----
class DateFact(Base):
    """
    A dated fact (the "dates" table).

    Attributes:
        id: Primary key
        tree_id: Owning tree
        individual_id / family_id: Owner (at most one; neither for tree-level facts)
        fact: GEDCOM tag (BIRT, DEAT, MARR, DIV, CHAN, ...)
        date_text: Raw GEDCOM date phrase
        julian_day1: First possible Julian day, 0 when unknown
        julian_day2: Last possible Julian day, 0 when unknown
        year: Year of the first date (negative for B.C.), 0 when unknown
        month: Three-letter GEDCOM month or ''
        day: Day of month or 0
        calendar: GEDCOM calendar escape or '' when unknown
        place: Place as written

    Notes:
        - Rows with julian_day1 = 0 still count toward totals but never
          take part in date ranking
    """

    __tablename__ = "dates"
    __table_args__ = (
        CheckConstraint(
            "individual_id IS NULL OR family_id IS NULL", name="ck_date_single_owner"
        ),
        CheckConstraint("fact != ''", name="ck_date_non_empty_fact"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    individual_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("individuals.id", ondelete="CASCADE"), nullable=True, index=True
    )
    family_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("families.id", ondelete="CASCADE"), nullable=True, index=True
    )
    fact: Mapped[str] = mapped_column(String(15), nullable=False, index=True)
    date_text: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    julian_day1: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    julian_day2: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    month: Mapped[str] = mapped_column(String(3), nullable=False, default="")
    day: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    calendar: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    place: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # --- Relationships ---
    tree: Mapped["Tree"] = relationship("Tree")
    individual: Mapped[Optional["Individual"]] = relationship(
        "Individual", back_populates="facts"
    )
    family: Mapped[Optional["Family"]] = relationship("Family", back_populates="facts")

    @classmethod
    def from_gedcom(
        cls, fact: str, date_text: str, place: str = "", **kwargs: Any
    ) -> "DateFact":
        """
        Build a fact row from a raw GEDCOM date phrase.

        Args:
            fact: GEDCOM tag
            date_text: Raw date, e.g. "ABT 1900"
            place: Place as written
            **kwargs: Remaining column or relationship values (tree, individual, ...)

        Returns:
            Unsaved DateFact with comparable columns filled in
        """
        parsed = parse_gedcom_date(date_text)
        return cls(
            fact=fact,
            date_text=date_text,
            place=place,
            julian_day1=parsed.jd1,
            julian_day2=parsed.jd2,
            year=parsed.year,
            month=parsed.month,
            day=parsed.day,
            calendar=parsed.calendar,
            **kwargs,
        )

    @property
    def owner(self) -> Optional[Any]:
        return self.individual if self.individual is not None else self.family

    @property
    def is_dated(self) -> bool:
        return self.julian_day1 != 0

    def __repr__(self) -> str:
        return f"<DateFact(id={self.id}, fact='{self.fact}', date='{self.date_text}')>"


# ----- Names -----
class Name(Base):
    """
    A name of an individual.

    Attributes:
        surname: Surname as written ('' when unknown)
        given: Given names separated by spaces
        name_type: GEDCOM name type (NAME, _MARNM, ...)
    """

    __tablename__ = "names"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    individual_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("individuals.id", ondelete="CASCADE"), nullable=False
    )
    surname: Mapped[str] = mapped_column(String(255), nullable=False, default="", index=True)
    given: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    name_type: Mapped[str] = mapped_column(String(15), nullable=False, default="NAME")

    # --- Relationship ---
    individual: Mapped["Individual"] = relationship("Individual", back_populates="names")

    @property
    def full(self) -> str:
        text = f"{self.given or ''} {self.surname or ''}".strip()
        return text or UNKNOWN_NAME

    def __repr__(self) -> str:
        return f"<Name(id={self.id}, given='{self.given}', surname='{self.surname}')>"


# ----- Supporting records -----
class Source(Base):
    """A source record, cited by individuals and families."""

    __tablename__ = "sources"
    __table_args__ = (UniqueConstraint("tree_id", "xref", name="uq_source_tree_xref"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    xref: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    individuals: Mapped[List["Individual"]] = relationship(
        "Individual", secondary=individual_sources, back_populates="sources"
    )
    families: Mapped[List["Family"]] = relationship(
        "Family", secondary=family_sources, back_populates="sources"
    )


class Note(Base):
    """A shared note record."""

    __tablename__ = "notes"
    __table_args__ = (UniqueConstraint("tree_id", "xref", name="uq_note_tree_xref"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    xref: Mapped[str] = mapped_column(String(20), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")


class Repository(Base):
    """A repository record."""

    __tablename__ = "repositories"
    __table_args__ = (UniqueConstraint("tree_id", "xref", name="uq_repository_tree_xref"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tree_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    xref: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")


# ----- Users -----
class User(Base):
    """
    A registered account.

    Only read by the "latest registered user" statistics.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    real_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    registered_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"

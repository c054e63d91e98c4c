"""
Shared pytest fixtures for the Lineage test suite.

Provides an in-memory database, a session bound to it, a small builder
for genealogy records and a factory for statistics facades.
"""
from datetime import datetime

import pytest

from lineage.database import LineageDB
from lineage.database.models import DateFact, Family, Individual, Name, Source, Tree, User
from lineage.stats.dates import julian_day
from lineage.stats.facade import Stats, StatsContext
from lineage.stats.visibility import ViewerContext

REFERENCE_JD = julian_day(2024, 1, 1)


class TreeBuilder:
    """
    Adds records to one tree.

    Every helper flushes, so the records are visible to queries right away.
    """

    def __init__(self, session, tree):
        self.session = session
        self.tree = tree

    def fact(self, owner, tag, date_text, place=""):
        """Attach a dated fact to an individual, a family or (owner None) the tree."""
        kwargs = {"tree_id": self.tree.id}
        if isinstance(owner, Individual):
            kwargs["individual"] = owner
        elif isinstance(owner, Family):
            kwargs["family"] = owner
        fact = DateFact.from_gedcom(tag, date_text, place, **kwargs)
        self.session.add(fact)
        self.session.flush()
        return fact

    def person(
        self,
        xref,
        sex="U",
        given="",
        surname="",
        birth=None,
        death=None,
        facts=(),
        names=(),
    ):
        """
        Add an individual.

        Args:
            names: Extra (given, surname, name_type) tuples
            facts: Extra (tag, date_text) tuples
        """
        individual = Individual(tree_id=self.tree.id, xref=xref, sex=sex)
        self.session.add(individual)
        if given or surname:
            individual.names.append(Name(tree_id=self.tree.id, given=given, surname=surname))
        for extra_given, extra_surname, name_type in names:
            individual.names.append(
                Name(
                    tree_id=self.tree.id,
                    given=extra_given,
                    surname=extra_surname,
                    name_type=name_type,
                )
            )
        self.session.flush()
        if birth is not None:
            self.fact(individual, "BIRT", birth)
        if death is not None:
            self.fact(individual, "DEAT", death)
        for tag, date_text in facts:
            self.fact(individual, tag, date_text)
        return individual

    def family(
        self,
        xref,
        husband=None,
        wife=None,
        children=(),
        marriage=None,
        facts=(),
        num_children=None,
    ):
        """Add a family; num_children defaults to the number of linked children."""
        family = Family(
            tree_id=self.tree.id,
            xref=xref,
            husband=husband,
            wife=wife,
            num_children=len(children) if num_children is None else num_children,
        )
        family.children.extend(children)
        self.session.add(family)
        self.session.flush()
        if marriage is not None:
            self.fact(family, "MARR", marriage)
        for tag, date_text in facts:
            self.fact(family, tag, date_text)
        return family

    def source(self, xref, individuals=(), families=()):
        source = Source(tree_id=self.tree.id, xref=xref, title=f"Source {xref}")
        source.individuals.extend(individuals)
        source.families.extend(families)
        self.session.add(source)
        self.session.flush()
        return source

    def user(self, username, real_name="", registered_at=None):
        user = User(
            username=username,
            real_name=real_name,
            registered_at=registered_at or datetime(2024, 1, 1, 12, 0, 0),
        )
        self.session.add(user)
        self.session.flush()
        return user


# ----- Database Fixtures -----
@pytest.fixture
def db():
    """Create an in-memory database with the full schema."""
    database = LineageDB(url="sqlite://")
    database.create_schema()
    yield database
    database.engine.dispose()


@pytest.fixture
def session(db):
    """Session on the in-memory database, rolled back after the test."""
    with db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def tree(session):
    """An empty tree."""
    tree = Tree(name="family.ged", title="Family History", root_xref="I1")
    session.add(tree)
    session.flush()
    return tree


@pytest.fixture
def builder(session, tree):
    """Record builder for the test tree."""
    return TreeBuilder(session, tree)


# ----- Statistics Fixtures -----
@pytest.fixture
def make_stats(session, tree):
    """
    Factory for statistics facades over the test tree.

    Defaults to a member viewer (nothing redacted), English output and a
    reference date of 1 January 2024.
    """

    def factory(viewer=None, locale="en", **kwargs):
        context = StatsContext.for_locale(
            locale,
            viewer=viewer or ViewerContext(is_member=True),
            reference_jd=REFERENCE_JD,
            **kwargs,
        )
        return Stats(session, tree.id, context)

    return factory


@pytest.fixture
def stats(make_stats):
    """Statistics facade for a member viewer."""
    return make_stats()


@pytest.fixture
def anonymous_stats(make_stats):
    """Statistics facade for an anonymous visitor."""
    return make_stats(viewer=ViewerContext.anonymous())

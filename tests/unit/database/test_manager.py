"""Tests for LineageDB engine setup, sessions and statistics entry points."""
import pytest

from lineage.core.exceptions import StorageFailure, TagComputationError, UnknownTagError
from lineage.database import LineageDB
from lineage.database.models import DateFact, Individual, Name, Tree
from lineage.stats.facade import Stats
from lineage.stats.visibility import ViewerContext


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "lineage.db"


@pytest.fixture
def populated_db(db_path):
    """File database with one tree of three individuals, one of them living."""
    db = LineageDB(db_path)
    db.create_schema()
    with db.session_scope() as session:
        tree = Tree(name="family.ged", title="Family History")
        session.add(tree)
        session.flush()
        for xref, sex, given, death in (
            ("I1", "M", "John", "1950"),
            ("I2", "F", "Mary", "1960"),
            ("I3", "F", "Ann", None),
        ):
            person = Individual(tree_id=tree.id, xref=xref, sex=sex)
            person.names.append(Name(tree_id=tree.id, given=given, surname="Smith"))
            session.add(person)
            session.flush()
            if death:
                session.add(DateFact.from_gedcom("DEAT", death, tree_id=tree.id, individual=person))
    yield db
    db.engine.dispose()


class TestLineageDBSetup:
    """Tests for engine creation."""

    def test_creates_parent_directory(self, db_path):
        """The database directory is created on setup."""
        db = LineageDB(db_path)
        assert db_path.parent.is_dir()
        assert db.url == f"sqlite:///{db_path.resolve()}"
        db.engine.dispose()

    def test_memory_url(self):
        """An explicit URL skips the file path."""
        db = LineageDB(url="sqlite://")
        assert db.db_path is None
        assert db.url == "sqlite://"

    def test_logger_from_log_dir(self, tmp_path):
        """A log directory enables the database logger."""
        db = LineageDB(url="sqlite://", log_dir=tmp_path / "logs")
        db.create_schema()
        assert db.logger is not None
        assert "schema_created" in (tmp_path / "logs" / "stats.log").read_text()


class TestSessionScope:
    """Tests for session_scope."""

    def test_commits(self, populated_db):
        """Changes made in a scope are committed."""
        with populated_db.session_scope() as session:
            session.add(Tree(name="other.ged"))
        with populated_db.session_scope() as session:
            assert session.query(Tree).count() == 2

    def test_rolls_back_on_error(self, populated_db):
        """Errors roll the scope back and propagate."""
        with pytest.raises(RuntimeError):
            with populated_db.session_scope() as session:
                session.add(Tree(name="other.ged"))
                session.flush()
                raise RuntimeError("boom")
        with populated_db.session_scope() as session:
            assert session.query(Tree).count() == 1


class TestFindTree:
    """Tests for find_tree."""

    @pytest.mark.parametrize("key", [1, "1", "family.ged"])
    def test_lookup(self, populated_db, key):
        """Trees are found by id, digits or name."""
        with populated_db.session_scope() as session:
            assert populated_db.find_tree(session, key).name == "family.ged"

    def test_missing(self, populated_db):
        """Unknown trees give None."""
        with populated_db.session_scope() as session:
            assert populated_db.find_tree(session, "nope.ged") is None


class TestStatisticsEntryPoints:
    """Tests for stats, resolve_tags and evaluate_tag."""

    def test_stats_facade(self, populated_db):
        """stats binds a facade to the session and configuration."""
        with populated_db.session_scope() as session:
            stats = populated_db.stats(session, 1, locale="de")
            assert isinstance(stats, Stats)
            assert stats.config is populated_db.config
            assert stats.formatter.locale == "de"

    def test_resolve_tags(self, populated_db):
        """Tags in a text blob are resolved against the tree."""
        text = "#totalIndividuals# people, #totalDeceased# dead, #unknownTag#"
        assert populated_db.resolve_tags(text, 1) == "3 people, 2 dead, #unknownTag#"

    def test_evaluate_tag(self, populated_db):
        """A single tag evaluates with its arguments."""
        assert populated_db.evaluate_tag("totalSexFemalesPercentage", tree_id=1) == "66.7%"
        assert populated_db.evaluate_tag("commonSurnamesTotals", ["1", "5"]) == "Smith (3)"

    def test_evaluate_tag_for_viewer(self, populated_db):
        """Living individuals are listed for members only."""
        anonymous = populated_db.evaluate_tag("topTenOldestAlive", tree_id=1)
        assert anonymous == "This information is private and cannot be shown."
        member = populated_db.evaluate_tag(
            "topTenOldestAlive", tree_id=1, viewer=ViewerContext(is_member=True)
        )
        assert member == "Not available"

    def test_unknown_tag(self, populated_db):
        """Unregistered tags raise UnknownTagError."""
        with pytest.raises(UnknownTagError):
            populated_db.evaluate_tag("statsPlaces")

    def test_missing_schema(self):
        """Storage failures abort tag resolution."""
        db = LineageDB(url="sqlite://")
        with pytest.raises(TagComputationError) as exc_info:
            db.resolve_tags("#totalIndividuals#", 1)
        assert isinstance(exc_info.value.__cause__, StorageFailure)
        with pytest.raises(StorageFailure):
            db.evaluate_tag("totalIndividuals")

    def test_queries_logged_under_tag(self, tmp_path):
        """Query records written for a tag name that tag."""
        db = LineageDB(url="sqlite://", log_dir=tmp_path / "logs")
        db.create_schema()
        with db.session_scope() as session:
            session.add(Tree(name="family.ged"))
        assert db.evaluate_tag("totalIndividuals", tree_id=1) == "0"
        content = (tmp_path / "logs" / "stats.log").read_text()
        assert "count_records_completed" in content
        assert '"tag": "totalIndividuals"' in content

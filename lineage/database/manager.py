#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Lineage statistics engine.

Provides the LineageDB class, the storage collaborator of the statistics
engine. Handles:
    - Initialization of the database engine and sessionmaker
    - Schema creation for a fresh database
    - Transactional session scopes with logging
    - Tree lookup by name or id
    - Entry points to the statistics facade and the tag interpreter

Notes
==============
- Schema ownership belongs to the importer feeding the database;
  ``create_schema`` only creates missing tables
- Every statistics computation runs inside one session, which gives it a
  consistent snapshot of the data
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional, Sequence, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from lineage.core.exceptions import DatabaseError
from lineage.core.logging_manager import LineageLogger, safe_logger
from lineage.core.paths import DB_PATH
from lineage.stats.config import StatsConfig
from .decorators import handle_db_errors
from .models import Base, Tree

if TYPE_CHECKING:
    from lineage.stats.facade import Stats
    from lineage.stats.visibility import ViewerContext

MEMORY_URL = "sqlite://"


# ----- Main Database Manager -----
class LineageDB:
    """
    Database manager for a Lineage genealogy database.

    Attributes:
        - url (str): SQLAlchemy database URL
        - engine (Engine): SQLAlchemy engine instance
        - SessionLocal (sessionmaker): SQLAlchemy session factory
        - config (StatsConfig): Statistics defaults
        - logger (LineageLogger | None): Optional logger

    Usage:
        db = LineageDB("~/genealogy/lineage.db", log_dir="~/genealogy/logs")
        html = db.resolve_tags("Oldest: #longestLifeName#", tree_id=1)
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Optional[Union[str, Path]] = None,
        url: Optional[str] = None,
        log_dir: Optional[Union[str, Path]] = None,
        config: Optional[StatsConfig] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file (default: data/db/lineage.db)
            url: Full SQLAlchemy URL, overriding db_path ("sqlite://" for memory)
            log_dir: Directory for log files (optional)
            config: Statistics defaults (optional)

        Raises:
            DatabaseError: If the engine cannot be created
        """
        if url is None:
            self.db_path: Optional[Path] = Path(db_path or DB_PATH).expanduser().resolve()
            self.url = f"sqlite:///{self.db_path}"
        else:
            self.db_path = None
            self.url = url

        if log_dir:
            self.logger: Optional[LineageLogger] = LineageLogger(
                Path(log_dir).expanduser().resolve(), component_name="stats"
            )
        else:
            self.logger = None

        self.config = config or StatsConfig()
        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.db_path is not None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            if self.url == MEMORY_URL:
                self.engine: Engine = create_engine(
                    self.url,
                    echo=False,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self.engine = create_engine(self.url, echo=False, pool_pre_ping=True)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            if self.logger:
                self.logger.log_operation("engine_ready", {"url": self.url})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "engine_setup", "url": self.url})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    @handle_db_errors
    def create_schema(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.engine)
        if self.logger:
            self.logger.log_operation("schema_created", {"url": self.url})

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Transactional scope; a failure rolls back, is logged and propagates.

        Usage:
            with db.session_scope() as session:
                stats = db.stats(session, tree_id=1)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(e, {"operation": "session_rollback"})
            raise
        finally:
            session.close()

    # ---- Trees ----
    @handle_db_errors
    def find_tree(self, session: Session, tree: Union[int, str]) -> Optional[Tree]:
        """
        Look a tree up by id or by name.

        Args:
            session: Active session
            tree: Numeric id (as int or digits) or tree name
        """
        if isinstance(tree, int) or str(tree).isdigit():
            return session.get(Tree, int(tree))
        return session.query(Tree).filter(Tree.name == tree).first()

    # ---- Statistics ----
    def stats(
        self,
        session: Session,
        tree_id: int,
        viewer: Optional["ViewerContext"] = None,
        locale: Optional[str] = None,
    ) -> "Stats":
        """
        Statistics facade for one tree and viewer, bound to a session.

        Args:
            session: Active session (the computation's snapshot)
            tree_id: Tree to aggregate over
            viewer: Viewer context (anonymous by default)
            locale: Locale code (configured default when None)
        """
        from lineage.stats.facade import Stats, StatsContext

        context = StatsContext.for_locale(
            locale, viewer=viewer, config=self.config, logger=self.logger
        )
        return Stats(session, tree_id, context)

    def resolve_tags(
        self,
        text: str,
        tree_id: int,
        viewer: Optional["ViewerContext"] = None,
        locale: Optional[str] = None,
    ) -> str:
        """
        Resolve the ``#tag:args#`` tokens of a text blob.

        Raises:
            TagComputationError: If the data source failed
        """
        from lineage.stats.interpreter import resolve_tags

        with self.session_scope() as session:
            return resolve_tags(text, self.stats(session, tree_id, viewer, locale))

    def evaluate_tag(
        self,
        name: str,
        args: Sequence[str] = (),
        tree_id: int = 1,
        viewer: Optional["ViewerContext"] = None,
        locale: Optional[str] = None,
    ) -> str:
        """
        Evaluate one tag by name.

        Raises:
            UnknownTagError: If the tag is not registered
            DatabaseError: If the data source failed
        """
        from lineage.stats.arguments import TagArgs
        from lineage.stats.registry import TagResolver

        handler = TagResolver().require(name)
        with self.session_scope() as session:
            stats = self.stats(session, tree_id, viewer, locale)
            with safe_logger(self.logger).tag_scope(name, list(args)):
                return handler(stats, TagArgs(args))

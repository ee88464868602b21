"""Engine lifecycle and read-only catalog sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from kunrecon.config.storage import get_database_config

from .catalog import SqlAlchemyCatalogReader
from .similarity import register_trigram_similarity, register_unicode_lower
from .tables import CATALOG_TABLES

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

    from kunrecon.domain.model import CatalogKind


class StartupError(RuntimeError):
    """Raised when the catalog adapter is used in the wrong lifecycle state."""


class _CatalogConnection:
    """The process-wide engine and the session factory bound to it."""

    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    @classmethod
    def bind(cls, engine: Engine | None) -> None:
        cls.engine = engine
        cls.sessions = None if engine is None else sessionmaker(bind=engine)

    @classmethod
    def require_sessions(cls) -> sessionmaker[Session]:
        if cls.sessions is None:
            raise StartupError(
                "Catalog adapter not initialised. Call kunrecon.adapters.sqlalchemy.startup() "
                "before opening a catalog session."
            )
        return cls.sessions


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to the catalog database.

    The catalog schema belongs to the application that owns the catalog; nothing is
    created or migrated here. SQLite connections get the Unicode lowercasing and
    trigram similarity functions.
    """

    if _CatalogConnection.engine is not None and not force:
        raise StartupError("Catalog adapter already initialised. Pass force=True to rebind.")
    resolved = engine or create_engine(database_uri or get_database_config().uri)
    register_unicode_lower(resolved)
    register_trigram_similarity(resolved)
    _CatalogConnection.bind(resolved)


def configured_engine() -> Engine | None:
    return _CatalogConnection.engine


def is_started() -> bool:
    return _CatalogConnection.engine is not None


def shutdown() -> None:
    """Dispose the engine and forget it."""

    if _CatalogConnection.engine is not None:
        _CatalogConnection.engine.dispose()
    _CatalogConnection.bind(None)


class SqlAlchemyCatalogUnitOfWork:
    """Session scope for catalog reads; rolled back on exit, never committed."""

    def __init__(self, kind: CatalogKind) -> None:
        self.kind = kind
        self._sessions = _CatalogConnection.require_sessions()
        self._session: Session | None = None
        self._catalog: SqlAlchemyCatalogReader | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Catalog session already open")
        self._session = self._sessions()
        self._catalog = SqlAlchemyCatalogReader(self._session, CATALOG_TABLES[self.kind])
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session, self._session, self._catalog = self._session, None, None
        if session is not None:
            session.rollback()
            session.close()
        return False

    @property
    def catalog(self) -> SqlAlchemyCatalogReader:
        if self._catalog is None:
            raise StartupError("Catalog session not open")
        return self._catalog


if TYPE_CHECKING:
    from kunrecon.domain.ports import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork(CatalogKind.ANIME)

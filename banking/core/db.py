from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional, Union

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import Settings
from .errors import StorageError


logger = logging.getLogger(__name__)

STORAGE_FAILURE_MESSAGE = "Storage failure, the operation was not applied"


def create_engine_for_url(
    database_url: str,
    *,
    isolation_level: Optional[str] = None,
    echo: bool = False,
) -> Engine:
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    engine_kwargs: dict[str, Any] = {}
    if isolation_level:
        engine_kwargs["isolation_level"] = isolation_level
    engine = create_engine(
        database_url, echo=echo, connect_args=connect_args, **engine_kwargs
    )
    if database_url.startswith("sqlite") and isolation_level != "AUTOCOMMIT":
        _begin_immediate_on_sqlite(engine)
    return engine


def _begin_immediate_on_sqlite(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first DML statement, which would leave
    # the balance reads outside the transaction. Take the write lock up front.
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(connection) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def split_sql_statements(script: str) -> list[str]:
    lines = [
        line for line in script.splitlines() if not line.lstrip().startswith("--")
    ]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def run_sql_script(engine: Engine, path: Union[str, Path]) -> int:
    """Execute every statement of a SQL script in a single transaction.

    Used for schema bootstrap and fixture loading. Returns the number of
    statements executed.
    """
    statements = split_sql_statements(Path(path).read_text(encoding="utf-8"))
    with engine.begin() as connection:
        for statement in statements:
            connection.exec_driver_sql(statement)
    logger.info(
        "db.script_executed",
        extra={"script": str(path), "statement_count": len(statements)},
    )
    return len(statements)


class ConnectionProvider:
    """Hands out one transactional session per unit of work."""

    session_class: type[Session] = Session

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionProvider":
        engine = create_engine_for_url(
            settings.database_url,
            isolation_level=settings.isolation_level,
            echo=settings.echo_sql,
        )
        return cls(engine)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Begin a transaction, commit on normal exit, roll back on any error.

        The session is closed on every exit path. Database errors surface as
        ``StorageError``; every other exception propagates unchanged after the
        rollback.
        """
        session = self.session_class(self.engine)
        try:
            yield session
            session.commit()
        except Exception as exc:
            try:
                session.rollback()
            except SQLAlchemyError as rollback_exc:
                logger.error("db.rollback_failed", exc_info=rollback_exc)
                raise StorageError(STORAGE_FAILURE_MESSAGE) from rollback_exc
            if isinstance(exc, SQLAlchemyError):
                logger.error("db.transaction_failed", exc_info=exc)
                raise StorageError(STORAGE_FAILURE_MESSAGE) from exc
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()

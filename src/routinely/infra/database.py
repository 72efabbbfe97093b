"""Database infrastructure shared by the API server and the client store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Tuple

from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig


def create_db_engine(url: str, **engine_options: Any):
    """Create a SQLModel engine for ``url``."""

    if url.startswith("sqlite"):
        connect_args = engine_options.setdefault("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
    return create_engine(url, **engine_options)


def init_database(engine, tables: Iterable[type[SQLModel]] | None = None) -> None:
    """Create the schema for ``tables`` (all registered tables when omitted)."""

    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    table_objs = [model.__table__ for model in tables] if tables is not None else None
    SQLModel.metadata.create_all(engine, tables=table_objs)


def create_session_factory(engine):
    """Create a session factory function."""

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple:
    """Engine + session factory for the API server's check-in/checkout tables."""

    from ..models import SERVER_TABLES

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg.DATABASE_URL, **cfg.sqlalchemy_engine_options())
    init_database(engine, SERVER_TABLES)
    return engine, create_session_factory(engine)


def bootstrap_client_database(config: BaseConfig | None = None) -> Tuple:
    """Engine + session factory for the on-device key/value store."""

    from ..models import CLIENT_TABLES

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg.CLIENT_DATABASE_URL)
    init_database(engine, CLIENT_TABLES)
    return engine, create_session_factory(engine)

"""Shared fixtures: an in-memory SQLite database and a service factory per test."""

from __future__ import annotations

from typing import Generator

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mealboard.db.init_db import drop_db, init_db
from mealboard.services.service_factory import ServiceFactory


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT handling;
    # take over transaction control and turn on foreign keys.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def factory(db_session: Session) -> Generator[ServiceFactory, None, None]:
    factory = ServiceFactory(db_session)
    yield factory
    factory.close()


@pytest.fixture
def catalog(factory):
    return factory.dish_catalog()


@pytest.fixture
def ledger(factory):
    return factory.vote_ledger()


@pytest.fixture
def menus(factory):
    return factory.menu_lifecycle()


@pytest.fixture
def ingestion(factory):
    return factory.bulk_ingestion()

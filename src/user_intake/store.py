"""SQLAlchemy user store — provisions the schema and inserts one user.

Startup is a straight line with no branches::

    Disconnected → ServerConnected → DatabaseEnsured
                 → DatabaseConnected → TableEnsured → Ready

A failure at any stage aborts with ``PersistenceError``.  Stages that already
succeeded are not undone: a created database or table stays.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable

from sqlalchemy import (
    Column,
    Connection,
    Date,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    text,
)
from sqlalchemy.exc import SQLAlchemyError

from user_intake.errors import PersistenceError
from user_intake.models import DATABASE_NAME_PATTERN, DatabaseConfig
from user_intake.schemas.user import ValidatedUser

logger = logging.getLogger(__name__)

TABLE_NAME = "users"

metadata = MetaData()

users_table = Table(
    TABLE_NAME,
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100)),
    Column("age", Integer),
    Column("email", String(100)),
    Column("phone", String(20)),
    Column("gender", String(10)),
    Column("country", String(50)),
    Column("dob", Date),
)

# Plain bind parameters: ``dob`` goes to the server as text, unconverted.
_INSERT_USER = text(
    f"INSERT INTO {TABLE_NAME} (name, age, email, phone, gender, country, dob) "
    "VALUES (:name, :age, :email, :phone, :gender, :country, :dob)"
)


class ProvisionStage(str, enum.Enum):
    DISCONNECTED = "Disconnected"
    SERVER_CONNECTED = "ServerConnected"
    DATABASE_ENSURED = "DatabaseEnsured"
    DATABASE_CONNECTED = "DatabaseConnected"
    TABLE_ENSURED = "TableEnsured"
    READY = "Ready"


class UserStore:
    """Own one database connection and write validated users through it.

    Lifecycle:
        1. __init__(config)  — nothing is opened yet.
        2. open()            — run the provisioning sequence up to ``Ready``.
        3. insert(user)      — one parameterized INSERT, committed.
        4. close()           — release the connection (safe to repeat).

    Use as a context manager so ``close()`` runs even on failure.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        *,
        engine_factory: Callable[..., Engine] = create_engine,
    ) -> None:
        self._config = config
        self._engine_factory = engine_factory
        self._engine: Engine | None = None
        self._conn: Connection | None = None
        self.stage = ProvisionStage.DISCONNECTED

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Provision the database and table, leaving the store ``Ready``."""
        try:
            self.ensure_database()
            self._connect_database()
            self.ensure_table()
        except PersistenceError:
            self.close()
            raise
        self.stage = ProvisionStage.READY
        logger.info("%s ready on %s", self.name, self._render_url())

    def close(self) -> None:
        """Close the database connection.  No-op if never opened or closed."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Closed connection to %s", self._render_url())
        self.stage = ProvisionStage.DISCONNECTED

    def __enter__(self) -> UserStore:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    # ------------------------------------------------------------------
    # Provisioning
    # ------------------------------------------------------------------

    def ensure_database(self) -> None:
        """Create the target database if it does not exist.  Idempotent.

        Runs on a short-lived server-level connection with no database
        selected.  SQLite creates its file on connect, so there is nothing to
        do for it.
        """
        name = self._config.database
        backend = self._config.backend
        if backend == "sqlite":
            logger.debug("SQLite: database file %s is created on connect", name)
            self.stage = ProvisionStage.DATABASE_ENSURED
            return

        if not DATABASE_NAME_PATTERN.match(name):
            raise PersistenceError(
                f"Refusing to create database with unsafe name {name!r}",
                stage=ProvisionStage.DATABASE_ENSURED.value,
            )

        server = self._create_engine(
            self._config.url(with_database=False),
            stage=ProvisionStage.SERVER_CONNECTED,
            isolation_level="AUTOCOMMIT",
        )
        try:
            with server.connect() as conn:
                self.stage = ProvisionStage.SERVER_CONNECTED
                quoted = server.dialect.identifier_preparer.quote_identifier(name)
                if backend == "postgresql":
                    exists = conn.execute(
                        text("SELECT 1 FROM pg_database WHERE datname = :name"),
                        {"name": name},
                    ).scalar()
                    if not exists:
                        conn.execute(text(f"CREATE DATABASE {quoted}"))
                else:
                    conn.execute(text(f"CREATE DATABASE IF NOT EXISTS {quoted}"))
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not ensure database {name!r}: {exc}",
                stage=self.stage.value,
            ) from exc
        finally:
            server.dispose()

        self.stage = ProvisionStage.DATABASE_ENSURED
        logger.info("Database %r ensured", name)

    def ensure_table(self) -> None:
        """Create the ``users`` table if it does not exist.  Idempotent."""
        if self._conn is None:
            self._connect_database()
        assert self._conn is not None
        try:
            metadata.create_all(self._conn, checkfirst=True)
            self._conn.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not ensure table {TABLE_NAME!r}: {exc}",
                stage=ProvisionStage.TABLE_ENSURED.value,
            ) from exc
        self.stage = ProvisionStage.TABLE_ENSURED
        logger.info("Table %r ensured", TABLE_NAME)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, user: ValidatedUser) -> int | None:
        """Insert *user* and return the generated id when the driver reports it.

        Each call commits on its own; a failed insert is rolled back and may be
        retried without provisioning again.
        """
        if self._conn is None:
            raise PersistenceError("Store is not open", stage=self.stage.value)
        try:
            result = self._conn.execute(_INSERT_USER, user.as_row())
            self._conn.commit()
        except SQLAlchemyError as exc:
            self._conn.rollback()
            raise PersistenceError(
                f"Could not insert user: {exc}", stage="insert"
            ) from exc
        logger.info("Inserted user %r into %r (id=%s)", user.name, TABLE_NAME, result.lastrowid)
        return result.lastrowid

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _connect_database(self) -> None:
        engine = self._create_engine(
            self._config.url(), stage=ProvisionStage.DATABASE_CONNECTED
        )
        try:
            self._conn = engine.connect()
        except SQLAlchemyError as exc:
            engine.dispose()
            raise PersistenceError(
                f"Could not connect to {self._render_url()}: {exc}",
                stage=ProvisionStage.DATABASE_CONNECTED.value,
            ) from exc
        self._engine = engine
        self.stage = ProvisionStage.DATABASE_CONNECTED
        logger.info("Connected to %s", self._render_url())

    def _create_engine(self, url: Any, *, stage: ProvisionStage, **kwargs: Any) -> Engine:
        try:
            return self._engine_factory(url, **kwargs)
        except (SQLAlchemyError, ImportError) as exc:
            # ImportError: the DBAPI driver for this dialect is not installed.
            raise PersistenceError(
                f"Could not create engine for {self._config.driver!r}: {exc}",
                stage=stage.value,
            ) from exc

    def _render_url(self) -> str:
        return self._config.url().render_as_string(hide_password=True)

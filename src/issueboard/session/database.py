"""SQLite key-value storage backing client-held sessions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlalchemy import Engine


class Base(DeclarativeBase):
    """Base class for all models."""


class StoredValue(Base):
    """One persisted key-value pair."""

    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")


class Database:
    """Database connection manager for the key-value table."""

    def __init__(self, db_path: str = "issueboard.db") -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory DB.
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.db_path == ":memory:":
                # Share one connection across threads (TestClient runs routes in a pool)
                self._engine = create_engine(
                    "sqlite:///:memory:",
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
                self._engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    connect_args={"check_same_thread": False},
                )
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    def get(self, key: str) -> str | None:
        with self.session_factory() as session:
            row = session.get(StoredValue, key)
            return row.value if row is not None else None

    def get_many(self, keys: list[str]) -> dict[str, str]:
        with self.session_factory() as session:
            rows = session.scalars(select(StoredValue).where(StoredValue.key.in_(keys)))
            return {row.key: row.value for row in rows}

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            session.merge(StoredValue(key=key, value=value))
            session.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

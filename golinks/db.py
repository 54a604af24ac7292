"""
Route store abstraction with SQLAlchemy and in-memory implementations.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    String,
    create_engine,
    func,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RouteStore(Protocol):
    """Interface for route persistence."""

    def get(self, name: str, timeout: Optional[float] = None) -> Optional["Route"]:
        ...

    def get_all(self) -> list["Route"]:
        ...

    def put(self, name: str, route: "Route") -> None:
        ...

    def delete(self, name: str) -> None:
        ...

    def list_routes(self, start: str = "", limit: int = 100) -> list["Route"]:
        ...

    def next_id(self) -> int:
        ...


@dataclass
class Route:
    name: str
    url: str
    time: datetime = field(default_factory=_utcnow)

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "url": self.url,
            "time": self.time.isoformat(),
        }


class InMemoryRouteStore:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.routes: Dict[str, Route] = {}
        self.last_id = 0
        self._lock = threading.Lock()

    def get(self, name: str, timeout: Optional[float] = None) -> Optional[Route]:
        with self._lock:
            return self.routes.get(name)

    def get_all(self) -> list[Route]:
        with self._lock:
            return list(self.routes.values())

    def put(self, name: str, route: Route) -> None:
        with self._lock:
            self.routes[name] = route

    def delete(self, name: str) -> None:
        with self._lock:
            self.routes.pop(name, None)

    def list_routes(self, start: str = "", limit: int = 100) -> list[Route]:
        with self._lock:
            names = sorted(n for n in self.routes if n > start)
            return [self.routes[n] for n in names[:limit]]

    def next_id(self) -> int:
        with self._lock:
            self.last_id += 1
            return self.last_id

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.routes.clear()
            self.last_id = 0


class SqlRouteStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("database_url is required for SqlRouteStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)
        self._seed_id_counter()

    def _seed_id_counter(self) -> None:
        with self.Session() as session:
            if session.get(IdCounterRow, 1) is not None:
                return
            session.add(IdCounterRow(id=1, value=0))
            try:
                session.commit()
            except IntegrityError:
                # Another process seeded it first.
                session.rollback()

    def _to_route(self, row: "RouteRow") -> Route:
        # SQLite drops tzinfo on the way back out.
        when = row.time
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return Route(name=row.name, url=row.url, time=when)

    def get(self, name: str, timeout: Optional[float] = None) -> Optional[Route]:
        with self.Session() as session:
            if timeout is not None and self.engine.dialect.name == "postgresql":
                # Scoped to this transaction only.
                session.execute(
                    select(
                        func.set_config(
                            "statement_timeout", str(int(timeout * 1000)), True
                        )
                    )
                )
            row = session.get(RouteRow, name)
            if not row:
                return None
            return self._to_route(row)

    def get_all(self) -> list[Route]:
        with self.Session() as session:
            rows = session.execute(select(RouteRow)).scalars().all()
            return [self._to_route(row) for row in rows]

    def put(self, name: str, route: Route) -> None:
        with self.Session() as session:
            row = session.get(RouteRow, name)
            if row:
                row.url = route.url
                row.time = route.time
            else:
                session.add(RouteRow(name=name, url=route.url, time=route.time))
            session.commit()

    def delete(self, name: str) -> None:
        with self.Session() as session:
            row = session.get(RouteRow, name)
            if not row:
                return
            session.delete(row)
            session.commit()

    def list_routes(self, start: str = "", limit: int = 100) -> list[Route]:
        with self.Session() as session:
            stmt = (
                select(RouteRow)
                .where(RouteRow.name > start)
                .order_by(RouteRow.name.asc())
                .limit(limit)
            )
            rows = session.execute(stmt).scalars().all()
            return [self._to_route(row) for row in rows]

    def next_id(self) -> int:
        with self.Session() as session:
            # The UPDATE holds the row (or database) write lock until commit,
            # so the read below sees this transaction's own increment.
            session.execute(
                update(IdCounterRow)
                .where(IdCounterRow.id == 1)
                .values(value=IdCounterRow.value + 1)
            )
            value = session.execute(
                select(IdCounterRow.value).where(IdCounterRow.id == 1)
            ).scalar_one()
            session.commit()
            return value


Base = declarative_base()


class RouteRow(Base):
    __tablename__ = "routes"

    name = Column(String, primary_key=True)
    url = Column(String, nullable=False)
    time = Column(DateTime(timezone=True), nullable=False)


class IdCounterRow(Base):
    __tablename__ = "route_ids"

    id = Column(Integer, primary_key=True)
    value = Column(Integer, nullable=False, default=0)

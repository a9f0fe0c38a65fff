import copy
import itertools
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_ideas.main import app
from recipe_ideas.db import Base, get_db
from recipe_ideas.auth import CurrentUser, RequestContext
from recipe_ideas.infra.store import DataStore
from recipe_ideas.settings import settings
from recipe_ideas import models  # noqa: F401

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool  # in-memory DB shared across sessions
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ALICE = "user-alice"
BOB = "user-bob"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def trust_user_header(monkeypatch):
    monkeypatch.setattr(settings, "trust_user_header", True)


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def alice_headers():
    return {"X-User-Id": ALICE}


@pytest.fixture
def bob_headers():
    return {"X-User-Id": BOB}


# --- Handler-level fixtures ---

class InMemoryStore(DataStore):
    """Dict-backed DataStore. Transactions restore a snapshot on error."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple[str, str]] = []

    def _rows(self, table) -> list[dict]:
        return self.tables.setdefault(table.__tablename__, [])

    @staticmethod
    def _matches(row: dict, where) -> bool:
        return all(row.get(k) == v for k, v in (where or {}).items())

    def insert(self, table, rows):
        self.calls.append(("insert", table.__tablename__))
        self._rows(table).extend(dict(r) for r in rows)
        return len(rows)

    def update(self, table, values, where):
        self.calls.append(("update", table.__tablename__))
        matched = [r for r in self._rows(table) if self._matches(r, where)]
        for row in matched:
            row.update(values)
        return len(matched)

    def delete(self, table, where):
        self.calls.append(("delete", table.__tablename__))
        rows = self._rows(table)
        kept = [r for r in rows if not self._matches(r, where)]
        self.tables[table.__tablename__] = kept
        return len(rows) - len(kept)

    def select(self, table, where=None, order_by=(), limit=None, offset=0):
        rows = [dict(r) for r in self._rows(table) if self._matches(r, where)]
        if order_by:
            # None sorts first, as SQLite does
            rows.sort(key=lambda r: tuple((r.get(c) is not None, r.get(c)) for c in order_by))
        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return rows

    @contextmanager
    def transaction(self):
        snapshot = copy.deepcopy(self.tables)
        try:
            yield self
        except Exception:
            self.tables = snapshot
            raise

    def writes(self):
        return [c for c in self.calls if c[0] in ("insert", "update", "delete")]


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    """Deterministic clock: each call is one second later."""
    start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def make_context(clock):
    counter = itertools.count(1)

    def _make(user_id=ALICE):
        user = CurrentUser(id=user_id) if user_id else None
        return RequestContext(
            user=user,
            new_id=lambda: f"id-{next(counter):04d}",
            now=clock,
        )
    return _make


@pytest.fixture
def alice(make_context):
    return make_context(ALICE)


@pytest.fixture
def bob(make_context):
    return make_context(BOB)

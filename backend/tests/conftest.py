"""Shared fixtures: an in-memory stand-in for the Supabase query builder and a TestClient."""

import os
import re
import sys
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from src.auth.dependencies import get_current_user
from src.config import Settings, get_settings, require_supabase
from src.main import app
from src.middleware import limiter

_EMBED = re.compile(r"(\w+)\(\*\)")


class _Result:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Just enough of postgrest's builder for the idea store."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.want_count = False

    def select(self, columns="*", count=None):
        self.op = "select"
        self.columns = columns
        self.want_count = count is not None
        return self

    def insert(self, rows):
        self.op = "insert"
        self.payload = rows
        return self

    def update(self, values):
        self.op = "update"
        self.payload = values
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, col, value):
        self.filters.append(lambda r: r.get(col) == value)
        return self

    def in_(self, col, values):
        allowed = set(values)
        self.filters.append(lambda r: r.get(col) in allowed)
        return self

    def gte(self, col, value):
        self.filters.append(lambda r: (r.get(col) or 0) >= value)
        return self

    def lte(self, col, value):
        self.filters.append(lambda r: (r.get(col) or 0) <= value)
        return self

    def or_(self, expr):
        clauses = []
        for part in expr.split(","):
            col, _op, pattern = part.split(".", 2)
            clauses.append((col, pattern.strip("%").lower()))
        self.filters.append(
            lambda r: any(needle in str(r.get(col) or "").lower() for col, needle in clauses)
        )
        return self

    def order(self, col, desc=False):
        self.order_by = (col, desc)
        return self

    def execute(self):
        if self.db.fail or (self.table, self.op) in self.db.fail_ops:
            raise RuntimeError("database unavailable")

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in items:
                row = {"id": str(uuid4()), "created_at": self.db.tick(), **deepcopy(item)}
                if self.table == "ideas":
                    row.setdefault("updated_at", row["created_at"])
                rows.append(row)
                created.append(deepcopy(row))
            return _Result(created)

        matched = [r for r in rows if all(f(r) for f in self.filters)]

        if self.op == "update":
            for r in matched:
                r.update(deepcopy(self.payload))
            return _Result(deepcopy(matched))

        if self.op == "delete":
            doomed = {id(r) for r in matched}
            self.db.tables[self.table] = [r for r in rows if id(r) not in doomed]
            return _Result(deepcopy(matched))

        out = [self._embed(deepcopy(r)) for r in matched]
        if self.order_by:
            col, desc = self.order_by
            out.sort(key=lambda r: r.get(col) or "", reverse=desc)
        return _Result(out, count=len(out) if self.want_count else None)

    def _embed(self, row):
        for child in _EMBED.findall(self.columns):
            row[child] = [
                deepcopy(c) for c in self.db.tables.get(child, []) if c.get("idea_id") == row.get("id")
            ]
        return row


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.fail = False
        # (table, op) pairs whose execute() raises, e.g. ("pain_points", "insert")
        self.fail_ops = set()
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def table(self, name):
        return FakeQuery(self, name)


USER = {"id": "user-1", "email": "founder@example.com"}
OTHER_USER = {"id": "user-2", "email": "other@example.com"}


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def current_user():
    return dict(USER)


@pytest.fixture
def client(db, current_user):
    app.dependency_overrides[require_supabase] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_settings] = lambda: Settings(openai_api_key="test-key")
    limiter.enabled = False
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.enabled = True


def set_plan(db, user_id, status):
    db.tables.setdefault("profiles", []).append({"id": user_id, "subscription_status": status})


def idea_payload(**overrides):
    data = {
        "name": "API Monitoring Dashboard",
        "description": "Uptime and latency alerts for small API teams",
        "problem_category": "Developer Tools",
        "user_pain_points": ["Complex tools", "Expensive plans"],
        "revenue_potential": 299,
        "target_users": 500,
    }
    data.update(overrides)
    return data

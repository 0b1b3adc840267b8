import os
from collections import defaultdict
from datetime import datetime, timezone

import pytest

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from admin_console.deps import get_current_admin, get_gateway, get_now  # noqa: E402
from admin_console.main import app  # noqa: E402
from admin_console.schemas.entities import AdminRole, AdminUser  # noqa: E402

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeGateway:
    """In-memory stand-in for SupabaseGateway that records every call."""

    def __init__(self):
        self.tables = defaultdict(list)
        self.calls = []
        self.failures = {}

    def seed(self, table, *rows):
        self.tables[table].extend(dict(r) for r in rows)

    def fail(self, op, table, error):
        self.failures[(op, table)] = error

    def _check(self, op, table):
        error = self.failures.get((op, table))
        if error is not None:
            raise error

    @staticmethod
    def _matches(row, eq, gte):
        for k, v in (eq or {}).items():
            if row.get(k) != v:
                return False
        for k, v in (gte or {}).items():
            if row.get(k) is None or row.get(k) < v:
                return False
        return True

    def select(self, table, columns="*", *, eq=None, gte=None, order=None, desc=False, limit=None):
        self.calls.append(("select", table, {"columns": columns, "eq": eq, "gte": gte,
                                             "order": order, "desc": desc, "limit": limit}))
        self._check("select", table)
        rows = [dict(r) for r in self.tables[table] if self._matches(r, eq, gte)]
        if order:
            rows.sort(key=lambda r: (r.get(order) is None, r.get(order)), reverse=desc)
        if limit is not None:
            rows = rows[:limit]
        return rows

    def count(self, table, *, eq=None, gte=None):
        self.calls.append(("count", table, {"eq": eq, "gte": gte}))
        self._check("count", table)
        return sum(1 for r in self.tables[table] if self._matches(r, eq, gte))

    def update(self, table, patch, *, id):
        self.calls.append(("update", table, {"patch": dict(patch), "id": id}))
        self._check("update", table)
        updated = []
        for row in self.tables[table]:
            if row.get("id") == id:
                row.update(patch)
                updated.append(dict(row))
        return updated

    def rpc(self, name, params):
        self.calls.append(("rpc", name, dict(params)))
        self._check("rpc", name)
        if name in ("ban_user", "unban_user"):
            for row in self.tables["profiles"]:
                if row.get("id") == params["target_user_id"]:
                    row["is_banned"] = name == "ban_user"
        return None

    def ops(self, op):
        return [c for c in self.calls if c[0] == op]


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def admin():
    return AdminUser(id="admin-1", email="ops@example.com", role=AdminRole.ADMIN, is_active=True)


@pytest.fixture
def client(gateway, admin):
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_current_admin] = lambda: admin
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(gateway):
    """Real admin resolution: only the gateway and clock are faked."""
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def fixed_now():
    return FIXED_NOW

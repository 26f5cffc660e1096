"""Pytest configuration and fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core import db


@dataclass
class FakeDatabase:
    """Stand-in for the asyncpg helpers in `core.db`; records every query."""

    counts: list[int] = field(default_factory=list)
    rows: list[list[dict[str, Any]]] = field(default_factory=list)
    one: list[dict[str, Any] | None] = field(default_factory=list)
    calls: list[tuple[str, str, tuple[Any, ...]]] = field(default_factory=list)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self.calls.append(("fetch_one", sql, args))
        if "count(*)" in sql:
            return {"total": self.counts.pop(0) if self.counts else 0}
        return self.one.pop(0) if self.one else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self.calls.append(("fetch_all", sql, args))
        return self.rows.pop(0) if self.rows else []

    def last(self, kind: str) -> tuple[str, tuple[Any, ...]]:
        for call_kind, sql, args in reversed(self.calls):
            if call_kind == kind:
                return sql, args
        raise AssertionError(f"no {kind} call recorded")


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabase:
    fake = FakeDatabase()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    return fake


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "DEFAULT_PAGE_LIMIT",
        "MAX_PAGE_LIMIT",
        "DEFAULT_LOOKBACK_DAYS",
        "EXPOSE_ERROR_DETAILS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client() -> TestClient:
    # Not used as a context manager, so the lifespan (DB pool) never runs.
    from main import app

    return TestClient(app)


def make_event_row(event_id: str = "evt-1", **overrides: Any) -> dict[str, Any]:
    """A flattened row as the events query returns it."""
    row: dict[str, Any] = {
        "event_id": event_id,
        "event_name": "PageView",
        "pageview_id": "pv-1",
        "session_id": "0b8f4a52-6d0e-4a8c-9a57-1c1f3f5e2a10",
        "event_time": datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc),
        "user_id": "user-1",
        "profession_id": 3,
        "product_id": 7,
        "funnel_id": 11,
        "event_source": "web",
        "event_type": "page",
        "event_propeties": None,
        "user__user_id": "user-1",
        "user__fullname": "Ana Souza",
        "user__email": "ana@example.com",
        "user__phone": "+5511999999999",
        "user__isClient": False,
        "session__session_id": "0b8f4a52-6d0e-4a8c-9a57-1c1f3f5e2a10",
        "session__utm_source": "facebook",
        "session__utm_medium": "cpc",
        "session__utm_campaign": "launch",
        "session__utm_content": "video-a",
        "session__utm_term": None,
        "session__country": "BR",
        "session__state": "SP",
        "session__city": "Sao Paulo",
        "profession__profession_id": 3,
        "profession__profession_name": "Nursing",
        "profession__meta_pixel": "px-3",
        "profession__meta_token": "tok-3",
        "product__product_id": 7,
        "product__product_name": "Course",
        "funnel__funnel_id": 11,
        "funnel__funnel_name": "Webinar",
        "funnel__funnel_tag": "wb",
        "funnel__global": False,
    }
    row.update(overrides)
    return row

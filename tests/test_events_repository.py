"""Tests for the events query builder."""

import asyncio
from datetime import datetime, timezone

import pytest

from conftest import make_event_row
from core.listing import OrderClause
from events import repository

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
END = datetime(2024, 1, 31, 23, 59, 59, tzinfo=timezone.utc)


def _list(**kwargs):
    params = {
        "page": 1,
        "limit": 10,
        "order": repository.SORT_FIELDS.default().order,
        "date_from": START,
        "date_to": END,
    }
    params.update(kwargs)
    return asyncio.run(repository.list_events(**params))


def test_joins_every_related_table(fake_db):
    _list()
    sql, _ = fake_db.last("fetch_all")
    for join in (
        "LEFT JOIN users ON events.user_id = users.user_id",
        "LEFT JOIN sessions ON events.session_id = sessions.session_id",
        "LEFT JOIN professions ON events.profession_id = professions.profession_id",
        "LEFT JOIN products ON events.product_id = products.product_id",
        "LEFT JOIN funnels ON events.funnel_id = funnels.funnel_id",
    ):
        assert join in sql


def test_date_range_only(fake_db):
    fake_db.counts.append(42)
    _, total = _list()

    count_sql, count_args = fake_db.last("fetch_one")
    assert "events.event_time >= $1 AND events.event_time <= $2" in count_sql
    assert count_args == (START, END)
    assert total == 42

    sql, args = fake_db.last("fetch_all")
    assert "ORDER BY events.event_time DESC" in sql
    assert "LIMIT $3" in sql and "OFFSET $4" in sql
    assert args == (START, END, 10, 0)


def test_profession_and_funnel_filters(fake_db):
    _list(page=3, limit=20, profession_id=5, funnel_id=9)

    count_sql, count_args = fake_db.last("fetch_one")
    assert "events.profession_id = $3" in count_sql
    assert "events.funnel_id = $4" in count_sql
    assert count_args == (START, END, 5, 9)

    sql, args = fake_db.last("fetch_all")
    assert "LIMIT $5" in sql and "OFFSET $6" in sql
    assert args == (START, END, 5, 9, 20, 40)


def test_funnel_filter_without_profession(fake_db):
    _list(funnel_id=9)
    count_sql, count_args = fake_db.last("fetch_one")
    assert "events.funnel_id = $3" in count_sql
    assert "profession_id =" not in count_sql
    assert count_args == (START, END, 9)


def test_count_runs_before_page_query(fake_db):
    _list()
    kinds = [kind for kind, _, _ in fake_db.calls]
    assert kinds == ["fetch_one", "fetch_all"]
    count_sql = fake_db.calls[0][1]
    assert "LIMIT" not in count_sql and "OFFSET" not in count_sql


def test_sorts_by_related_column(fake_db):
    _list(order=repository.SORT_FIELDS.resolve("fullname", "asc").order)
    sql, _ = fake_db.last("fetch_all")
    assert "ORDER BY users.fullname ASC" in sql


def test_rejects_columns_outside_allow_list(fake_db):
    with pytest.raises(ValueError):
        _list(order=OrderClause("users.password", "asc"))
    assert fake_db.calls == []


def test_rows_are_nested(fake_db):
    fake_db.counts.append(1)
    fake_db.rows.append([make_event_row()])
    rows, total = _list()

    assert total == 1
    event = rows[0]
    assert event["event_id"] == "evt-1"
    assert event["user"] == {
        "user_id": "user-1",
        "fullname": "Ana Souza",
        "email": "ana@example.com",
        "phone": "+5511999999999",
        "isClient": False,
    }
    assert event["session"]["utm_source"] == "facebook"
    assert event["profession"]["profession_name"] == "Nursing"
    assert event["product"] == {"product_id": 7, "product_name": "Course"}
    assert event["funnel"]["funnel_tag"] == "wb"
    assert "user__fullname" not in event


def test_unmatched_relations_become_none(fake_db):
    row = make_event_row(
        product_id=None,
        product__product_id=None,
        product__product_name=None,
    )
    fake_db.rows.append([row])
    rows, _ = _list()
    assert rows[0]["product"] is None
    assert rows[0]["user"] is not None


def test_purchase_properties_are_decoded(fake_db):
    fake_db.rows.append([make_event_row(event_propeties='{"value": "497.00", "payment_method": "pix"}')])
    rows, _ = _list()
    assert rows[0]["event_propeties"] == {"value": "497.00", "payment_method": "pix"}
    sql, _ = fake_db.last("fetch_all")
    assert "events.event_propeties" in sql

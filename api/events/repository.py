"""
Event persistence.
This module is where event-related SQL lives.

Related rows come back flattened as `<relation>__<column>` aliases and are
folded into nested dicts before leaving this module.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from core import db
from core.listing import OrderClause, SortFields

SORT_FIELDS = SortFields(
    {
        # Event fields
        "event_id": "events.event_id",
        "event_name": "events.event_name",
        "pageview_id": "events.pageview_id",
        "session_id": "events.session_id",
        "event_time": "events.event_time",
        "event_source": "events.event_source",
        "event_type": "events.event_type",
        # User fields
        "fullname": "users.fullname",
        "email": "users.email",
        "phone": "users.phone",
        "is_client": 'users."isClient"',
        # Session fields
        "utm_source": "sessions.utm_source",
        "utm_medium": "sessions.utm_medium",
        "utm_campaign": "sessions.utm_campaign",
        "utm_content": "sessions.utm_content",
        "utm_term": "sessions.utm_term",
        "country": "sessions.country",
        "state": "sessions.state",
        "city": "sessions.city",
        # Profession fields
        "profession_name": "professions.profession_name",
        "meta_pixel": "professions.meta_pixel",
        "meta_token": "professions.meta_token",
        # Product fields
        "product_name": "products.product_name",
        # Funnel fields
        "funnel_name": "funnels.funnel_name",
        "funnel_tag": "funnels.funnel_tag",
        "global": "funnels.global",
    },
    default_field="event_time",
    default_direction="desc",
)

# relation -> (table, primary key, selected columns)
_RELATIONS: dict[str, tuple[str, str, tuple[str, ...]]] = {
    "user": ("users", "user_id", ("user_id", "fullname", "email", "phone", "isClient")),
    "session": (
        "sessions",
        "session_id",
        (
            "session_id",
            "utm_source",
            "utm_medium",
            "utm_campaign",
            "utm_content",
            "utm_term",
            "country",
            "state",
            "city",
        ),
    ),
    "profession": (
        "professions",
        "profession_id",
        ("profession_id", "profession_name", "meta_pixel", "meta_token"),
    ),
    "product": ("products", "product_id", ("product_id", "product_name")),
    "funnel": ("funnels", "funnel_id", ("funnel_id", "funnel_name", "funnel_tag", "global")),
}

_EVENT_COLUMNS = (
    "event_id",
    "event_name",
    "pageview_id",
    "session_id",
    "event_time",
    "user_id",
    "profession_id",
    "product_id",
    "funnel_id",
    "event_source",
    "event_type",
    # Purchase details (json), spelled as the dashboard reads it.
    "event_propeties",
)


def _select_list() -> str:
    columns = [f"events.{name}" for name in _EVENT_COLUMNS]
    for relation, (table, _, names) in _RELATIONS.items():
        columns.extend(f'{table}."{name}" AS "{relation}__{name}"' for name in names)
    return ",\n          ".join(columns)


_SELECT_LIST = _select_list()

_JOINS = """
        LEFT JOIN users ON events.user_id = users.user_id
        LEFT JOIN sessions ON events.session_id = sessions.session_id
        LEFT JOIN professions ON events.profession_id = professions.profession_id
        LEFT JOIN products ON events.product_id = products.product_id
        LEFT JOIN funnels ON events.funnel_id = funnels.funnel_id
"""


def _plain(value: Any) -> Any:
    # Text-typed ids may be uuid columns in the database.
    return str(value) if isinstance(value, UUID) else value


def _json_value(value: Any) -> Any:
    # asyncpg hands json/jsonb back as text unless a codec is registered.
    if isinstance(value, str):
        return json.loads(value)
    return value


def _nest(row: dict[str, Any]) -> dict[str, Any]:
    """
    Fold `<relation>__<column>` keys into nested dicts.

    A relation whose primary key is NULL did not match and becomes None.
    """
    event: dict[str, Any] = {}
    related: dict[str, dict[str, Any]] = {relation: {} for relation in _RELATIONS}
    for key, value in row.items():
        relation, sep, column = key.partition("__")
        if sep and relation in related:
            related[relation][column] = _plain(value)
        else:
            event[key] = _plain(value)

    for relation, (_, primary_key, _) in _RELATIONS.items():
        values = related[relation]
        event[relation] = values if values.get(primary_key) is not None else None
    if "event_propeties" in event:
        event["event_propeties"] = _json_value(event["event_propeties"])
    return event


def _where(
    date_from: datetime,
    date_to: datetime,
    profession_id: int | None,
    funnel_id: int | None,
) -> tuple[str, list[Any]]:
    clauses = ["events.event_time >= $1", "events.event_time <= $2"]
    args: list[Any] = [date_from, date_to]
    if profession_id is not None:
        args.append(profession_id)
        clauses.append(f"events.profession_id = ${len(args)}")
    if funnel_id is not None:
        args.append(funnel_id)
        clauses.append(f"events.funnel_id = ${len(args)}")
    return " AND ".join(clauses), args


async def list_events(
    *,
    page: int,
    limit: int,
    order: OrderClause,
    date_from: datetime,
    date_to: datetime,
    profession_id: int | None = None,
    funnel_id: int | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """
    Return one page of events joined with their related rows, plus the number
    of events matching the filters (before pagination).

    The date range is inclusive on both ends.
    """
    if not SORT_FIELDS.allows_column(order.column):
        raise ValueError(f"Column {order.column!r} is not sortable for events.")

    where, args = _where(date_from, date_to, profession_id, funnel_id)

    # Every join is many-to-one, so the count does not need them.
    total = await db.fetch_count(
        f"""
        SELECT count(*) AS total
        FROM events
        WHERE {where}
        """,
        *args,
    )

    limit_arg = len(args) + 1
    rows = await db.fetch_all(
        f"""
        SELECT
          {_SELECT_LIST}
        FROM events{_JOINS}
        WHERE {where}
        ORDER BY {order.sql()}
        LIMIT ${limit_arg}
        OFFSET ${limit_arg + 1}
        """,
        *args,
        limit,
        (page - 1) * limit,
    )
    return [_nest(row) for row in rows], total

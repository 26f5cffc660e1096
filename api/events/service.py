"""
Event listing logic.

Scope:
- date range defaulting and validation (`YYYY-MM-DD`)
- delegating the filtered, sorted page query to the repository
- shaping rows into the `{data, meta}` envelope
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from core import errors, settings
from core.listing import PageRequest, SortSelection, page_meta

from . import repository, schemas

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class EventQuery:
    page: PageRequest
    sort: SortSelection
    date_range: DateRange
    profession_id: int | None = None
    funnel_id: int | None = None


def _parse_date(raw: str, *, label: str) -> datetime:
    value = raw.strip()
    if not _DATE_RE.match(value):
        raise errors.bad_request(f"Invalid {label} date format. Use YYYY-MM-DD")
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise errors.bad_request(f"Invalid {label} date format. Use YYYY-MM-DD") from exc
    return parsed.replace(tzinfo=timezone.utc)


def resolve_date_range(
    raw_from: str | None,
    raw_to: str | None,
    *,
    now: datetime | None = None,
) -> DateRange:
    """
    Turn the optional `from`/`to` query values into inclusive bounds.

    - `from` defaults to DEFAULT_LOOKBACK_DAYS before now
    - `to` defaults to now; an explicit `to` covers the whole day (23:59:59)
    """
    now = now or datetime.now(timezone.utc)

    if raw_from and raw_from.strip():
        start = _parse_date(raw_from, label="from")
    else:
        start = now - timedelta(days=settings.default_lookback_days())

    if raw_to and raw_to.strip():
        end = _parse_date(raw_to, label="to") + timedelta(days=1) - timedelta(seconds=1)
    else:
        end = now

    return DateRange(start=start, end=end)


def _to_event(row: dict[str, Any]) -> dict:
    return schemas.Event.model_validate(row).model_dump(mode="json", by_alias=True)


async def list_events(query: EventQuery) -> dict:
    try:
        rows, total = await repository.list_events(
            page=query.page.page,
            limit=query.page.limit,
            order=query.sort.order,
            date_from=query.date_range.start,
            date_to=query.date_range.end,
            profession_id=query.profession_id,
            funnel_id=query.funnel_id,
        )
    except Exception as exc:
        logger.exception(
            "events_query_failed page=%s limit=%s profession_id=%s funnel_id=%s",
            query.page.page,
            query.page.limit,
            query.profession_id,
            query.funnel_id,
        )
        raise errors.storage_error("Failed to fetch events", exc) from exc

    logger.debug(
        "events_listed page=%s limit=%s total=%s order=%r",
        query.page.page,
        query.page.limit,
        total,
        query.sort.order.sql(),
    )

    meta = page_meta(total, query.page, query.sort, repository.SORT_FIELDS)
    meta.update(
        {
            "from": query.date_range.start.strftime(DATE_FORMAT),
            "to": query.date_range.end.strftime(DATE_FORMAT),
            "profession_id": query.profession_id,
            "funnel_id": query.funnel_id,
        }
    )
    return {"data": [_to_event(row) for row in rows], "meta": meta}

"""
Event API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core.listing import PageRequest, parse_int

from . import repository, service

router = APIRouter()


@router.get("/events")
async def list_events(
    page: str | None = None,
    limit: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_direction: str | None = Query(default=None, alias="sortDirection"),
    profession_id: str | None = None,
    funnel_id: str | None = None,
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
) -> dict:
    """
    Page through events joined with their user, session, profession, product
    and funnel.

    Malformed paging, sort and id filters fall back to defaults; only a
    malformed date is rejected (400).
    """
    query = service.EventQuery(
        page=PageRequest.from_query(page, limit),
        sort=repository.SORT_FIELDS.resolve(sort_by, sort_direction),
        date_range=service.resolve_date_range(date_from, date_to),
        profession_id=parse_int(profession_id),
        funnel_id=parse_int(funnel_id),
    )
    return await service.list_events(query)

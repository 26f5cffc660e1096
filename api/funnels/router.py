"""
Funnel API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core import errors
from core.listing import PageRequest, parse_int

from . import repository, service

router = APIRouter()


@router.get("/funnels")
async def list_funnels(
    page: str | None = None,
    limit: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_direction: str | None = Query(default=None, alias="sortDirection"),
) -> dict:
    return await service.list_funnels(
        PageRequest.from_query(page, limit),
        repository.SORT_FIELDS.resolve(sort_by, sort_direction),
    )


@router.get("/professions/{profession_id}/funnels")
async def list_profession_funnels(profession_id: str) -> dict:
    parsed_id = parse_int(profession_id)
    if parsed_id is None:
        raise errors.not_found("Profession not found")
    return await service.list_profession_funnels(parsed_id)

"""
Profession API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core.listing import PageRequest

from . import repository, service

router = APIRouter()


@router.get("/professions")
async def list_professions(
    page: str | None = None,
    limit: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_direction: str | None = Query(default=None, alias="sortDirection"),
) -> dict:
    return await service.list_professions(
        PageRequest.from_query(page, limit),
        repository.SORT_FIELDS.resolve(sort_by, sort_direction),
    )

"""
Funnel listing logic.

Scope:
- paginated catalog of every funnel
- unpaginated funnels of a single profession (used by filter dropdowns)
"""

from __future__ import annotations

import logging
from typing import Any

from core import errors
from core.listing import PageRequest, SortSelection, page_meta
from professions import repository as profession_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_funnel(row: dict[str, Any]) -> dict:
    return schemas.Funnel.model_validate(row).model_dump(mode="json", by_alias=True)


async def list_funnels(page: PageRequest, sort: SortSelection) -> dict:
    try:
        rows, total = await repository.list_funnels(
            page=page.page,
            limit=page.limit,
            order=sort.order,
        )
    except Exception as exc:
        logger.exception("funnels_query_failed page=%s limit=%s", page.page, page.limit)
        raise errors.storage_error("Failed to fetch funnels", exc) from exc

    logger.debug("funnels_listed page=%s limit=%s total=%s", page.page, page.limit, total)
    return {
        "data": [_to_funnel(row) for row in rows],
        "meta": page_meta(total, page, sort, repository.SORT_FIELDS),
    }


async def list_profession_funnels(profession_id: int) -> dict:
    try:
        profession = await profession_repository.get_profession(profession_id)
        rows = [] if profession is None else await repository.list_funnels_for_profession(profession_id)
    except Exception as exc:
        logger.exception("profession_funnels_query_failed profession_id=%s", profession_id)
        raise errors.storage_error("Failed to fetch funnels", exc) from exc

    if profession is None:
        raise errors.not_found("Profession not found")

    return {"data": [_to_funnel(row) for row in rows]}

"""
Profession listing logic.
"""

from __future__ import annotations

import logging

from core import errors
from core.listing import PageRequest, SortSelection, page_meta

from . import repository, schemas

logger = logging.getLogger(__name__)


async def list_professions(page: PageRequest, sort: SortSelection) -> dict:
    try:
        rows, total = await repository.list_professions(
            page=page.page,
            limit=page.limit,
            order=sort.order,
        )
    except Exception as exc:
        logger.exception("professions_query_failed page=%s limit=%s", page.page, page.limit)
        raise errors.storage_error("Failed to fetch professions", exc) from exc

    logger.debug("professions_listed page=%s limit=%s total=%s", page.page, page.limit, total)
    return {
        "data": [schemas.Profession.model_validate(row).model_dump(mode="json") for row in rows],
        "meta": page_meta(total, page, sort, repository.SORT_FIELDS),
    }

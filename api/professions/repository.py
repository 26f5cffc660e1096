"""
Profession persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.listing import OrderClause, SortFields

SORT_FIELDS = SortFields(
    {
        "profession_id": "professions.profession_id",
        "profession_name": "professions.profession_name",
        "meta_pixel": "professions.meta_pixel",
        "meta_token": "professions.meta_token",
    },
    default_field="profession_id",
    default_direction="asc",
)


async def list_professions(
    *,
    page: int,
    limit: int,
    order: OrderClause | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """
    Return one page of professions and the total number of professions.
    """
    order = order or SORT_FIELDS.default().order
    if not SORT_FIELDS.allows_column(order.column):
        raise ValueError(f"Column {order.column!r} is not sortable for professions.")

    total = await db.fetch_count("SELECT count(*) AS total FROM professions")

    rows = await db.fetch_all(
        f"""
        SELECT
          professions.profession_id,
          professions.profession_name,
          professions.meta_pixel,
          professions.meta_token
        FROM professions
        ORDER BY {order.sql()}
        LIMIT $1
        OFFSET $2
        """,
        limit,
        (page - 1) * limit,
    )
    return rows, total


async def get_profession(profession_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT profession_id, profession_name, meta_pixel, meta_token
        FROM professions
        WHERE profession_id = $1
        LIMIT 1
        """,
        profession_id,
    )

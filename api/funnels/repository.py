"""
Funnel persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.listing import OrderClause, SortFields

SORT_FIELDS = SortFields(
    {
        "funnel_id": "funnels.funnel_id",
        "funnel_name": "funnels.funnel_name",
        "funnel_tag": "funnels.funnel_tag",
        "global": "funnels.global",
        "created_at": "funnels.created_at",
    },
    default_field="funnel_id",
    default_direction="asc",
)

_COLUMNS = """
          funnels.funnel_id,
          funnels.funnel_name,
          funnels.funnel_tag,
          funnels.global,
          funnels.profession_id,
          funnels.created_at
"""


async def list_funnels(
    *,
    page: int,
    limit: int,
    order: OrderClause | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """
    Return one page of funnels and the total number of funnels.
    """
    order = order or SORT_FIELDS.default().order
    if not SORT_FIELDS.allows_column(order.column):
        raise ValueError(f"Column {order.column!r} is not sortable for funnels.")

    total = await db.fetch_count("SELECT count(*) AS total FROM funnels")

    rows = await db.fetch_all(
        f"""
        SELECT{_COLUMNS}
        FROM funnels
        ORDER BY {order.sql()}
        LIMIT $1
        OFFSET $2
        """,
        limit,
        (page - 1) * limit,
    )
    return rows, total


async def list_funnels_for_profession(profession_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT{_COLUMNS}
        FROM funnels
        WHERE funnels.profession_id = $1
        ORDER BY funnels.funnel_name ASC, funnels.funnel_id ASC
        """,
        profession_id,
    )

"""
Pagination and sorting building blocks shared by the listing endpoints.

Query-string values arrive as raw strings. Anything malformed is normalized
to a default instead of being rejected.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from . import settings

SORT_DIRECTIONS = ("asc", "desc")

# Largest value a Postgres bigint parameter can carry.
INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str | None) -> int | None:
    """
    Parse an optional integer query value.

    None when missing, not a plain decimal number, or outside the bigint range.
    """
    value = (raw or "").strip()
    if not _INT_RE.fullmatch(value):
        return None
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(cls, raw_page: str | None, raw_limit: str | None) -> "PageRequest":
        limit = parse_int(raw_limit)
        if limit is None or limit < 1:
            limit = settings.default_page_limit()
        limit = min(limit, settings.max_page_limit())

        page = parse_int(raw_page)
        if page is None or page < 1:
            page = 1
        # Keep the offset inside bigint.
        page = min(page, INT64_MAX // limit)
        return cls(page=page, limit=limit)


def last_page(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


@dataclass(frozen=True)
class OrderClause:
    column: str
    direction: str

    def sql(self) -> str:
        direction = self.direction.lower()
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid sort direction: {self.direction!r}")
        return f"{self.column} {direction.upper()}"


@dataclass(frozen=True)
class SortSelection:
    """
    The sort as echoed back to clients and the column-level clause
    actually handed to the repository.
    """

    field: str
    direction: str
    order: OrderClause


class SortFields:
    """
    Closed mapping of logical sort names to qualified columns.
    """

    def __init__(
        self,
        fields: Mapping[str, str],
        *,
        default_field: str,
        default_direction: str = "desc",
    ) -> None:
        if default_field not in fields:
            raise ValueError(f"Default sort field {default_field!r} is not in the allow-list.")
        if default_direction not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid default sort direction: {default_direction!r}")
        self._fields = MappingProxyType(dict(fields))
        self._columns = frozenset(self._fields.values())
        self.default_field = default_field
        self.default_direction = default_direction

    @property
    def names(self) -> list[str]:
        return list(self._fields)

    def allows_column(self, column: str) -> bool:
        return column in self._columns

    def default(self) -> SortSelection:
        return SortSelection(
            field=self.default_field,
            direction=self.default_direction,
            order=OrderClause(self._fields[self.default_field], self.default_direction),
        )

    def resolve(self, sort_by: str | None, sort_direction: str | None) -> SortSelection:
        """
        Directions other than exactly "asc"/"desc" become "desc". Unknown
        fields fall back to the default column, but the requested name and
        direction are still echoed back.
        """
        direction = sort_direction or self.default_direction
        if direction not in SORT_DIRECTIONS:
            direction = "desc"

        field = sort_by or self.default_field
        column = self._fields.get(field)
        if column is None:
            return SortSelection(field=field, direction=direction, order=self.default().order)
        return SortSelection(field=field, direction=direction, order=OrderClause(column, direction))


def page_meta(total: int, page: PageRequest, sort: SortSelection, sort_fields: SortFields) -> dict:
    """
    Pagination and sort echo shared by every listing envelope.
    """
    return {
        "total": total,
        "page": page.page,
        "limit": page.limit,
        "last_page": last_page(total, page.limit),
        "sort_by": sort.field,
        "sort_direction": sort.direction,
        "valid_sort_fields": sort_fields.names,
    }

"""
Pydantic models for funnel projections.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Funnel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    funnel_id: int
    funnel_name: str | None = None
    funnel_tag: str | None = None
    # `global` is a Python keyword; the column name is kept on the wire.
    is_global: bool | None = Field(default=None, alias="global")
    profession_id: int | None = None
    created_at: datetime | None = None

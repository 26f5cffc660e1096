"""
Pydantic models for profession projections.
"""

from __future__ import annotations

from pydantic import BaseModel


class Profession(BaseModel):
    profession_id: int
    profession_name: str | None = None
    meta_pixel: str | None = None
    meta_token: str | None = None

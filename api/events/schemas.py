"""
Pydantic models for event projections.

An event is returned together with the rows its foreign keys point at; each
related object is null when the left join found nothing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from funnels.schemas import Funnel
from professions.schemas import Profession


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    fullname: str | None = None
    email: str | None = None
    phone: str | None = None
    is_client: bool | None = Field(default=None, alias="isClient")


class Session(BaseModel):
    session_id: UUID
    utm_source: str | None = None
    utm_medium: str | None = None
    utm_campaign: str | None = None
    utm_content: str | None = None
    utm_term: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None


class Product(BaseModel):
    product_id: int
    product_name: str | None = None


class Event(BaseModel):
    event_id: str
    event_name: str | None = None
    pageview_id: str | None = None
    session_id: UUID | None = None
    event_time: datetime
    user_id: str | None = None
    profession_id: int | None = None
    product_id: int | None = None
    funnel_id: int | None = None
    event_source: str | None = None
    event_type: str | None = None
    event_propeties: dict[str, Any] | None = None

    user: User | None = None
    session: Session | None = None
    profession: Profession | None = None
    product: Product | None = None
    funnel: Funnel | None = None

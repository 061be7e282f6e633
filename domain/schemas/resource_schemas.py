"""Schemas for the kitchen resource roster"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from domain.enums import ResourceKind


class KitchenResourceCreate(BaseModel):
    kind: ResourceKind
    name: str = Field(..., min_length=1)
    position: Optional[int] = Field(
        None, description="Manual ordering within the kind; defaults to the end"
    )
    point_person: Optional[str] = None
    phone: Optional[str] = None
    is_driver: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name can't be blank")
        return v


class KitchenResourceUpdate(BaseModel):
    """Partial update; ``kind`` is fixed at creation"""

    name: Optional[str] = Field(None, min_length=1)
    position: Optional[int] = None
    point_person: Optional[str] = None
    phone: Optional[str] = None
    is_driver: Optional[bool] = None


class KitchenResourceResponse(BaseModel):
    id: int
    kind: str
    name: str
    position: Optional[int] = None
    point_person: Optional[str] = None
    phone: Optional[str] = None
    is_driver: Optional[bool] = None

    model_config = {"from_attributes": True}

    @field_validator("point_person", "phone", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

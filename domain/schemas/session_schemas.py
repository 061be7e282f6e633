"""Schemas for organizer sessions"""

from pydantic import BaseModel, Field


class OrganizerLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class OrganizerSessionResponse(BaseModel):
    token: str
    username: str

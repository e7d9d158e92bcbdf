"""Pydantic models describing the collaboration directory payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CollaborationBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserPayload(CollaborationBaseModel):
    id: str = Field(alias="_id")
    preferred_email: str = Field(alias="preferredEmail")
    firstname: str | None = None
    lastname: str | None = None


class CollaborationPayload(CollaborationBaseModel):
    id: str = Field(alias="_id")
    object_type: str | None = Field(default=None, alias="objectType")
    creator: str | None = None
    managers: list[str] = Field(default_factory=list)

"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateUserRequest(BaseModel):
    # `id` is server-assigned; extra keys are ignored.
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ReplaceUserRequest(CreateUserRequest):
    """
    PUT body: every mutable field is required.
    """


class UpdateUserRequest(BaseModel):
    """
    PATCH body: any subset of the mutable fields, no unknown keys, no nulls.

    Emptiness is checked by the service so that "nothing to update" is reported
    separately from field errors.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, min_length=1)

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("Field may be omitted but not null.")
        return value


class UserResponse(BaseModel):
    id: int
    name: str
    email: str

from typing import Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema for the public API.

    Fields are snake_case in Python and camelCase on the wire
    (``num_employees`` <-> ``numEmployees``).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Request bodies and query strings: unknown keys are a client error."""
    model_config = ConfigDict(extra="forbid")


class DeletedResponse(BaseModel):
    """Schema for delete responses"""
    deleted: Union[int, str]


def criteria_from(model: BaseModel) -> dict:
    """Supplied filter values keyed by their wire names."""
    return model.model_dump(exclude_none=True, by_alias=True)


def changes_from(model: BaseModel) -> dict:
    """Fields the client actually sent, keyed by wire name; explicit nulls kept."""
    return model.model_dump(exclude_unset=True, by_alias=True)

# storefront/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

T = TypeVar("T")


class APIModel(SQLModel):
    """
    Base for request/response schemas.

    Python code uses snake_case; JSON on the wire is camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[T]):
    """
    Standard response wrapper: {success, message?, data?}.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str | None = None
    data: T | None = None


class ErrorEnvelope(BaseModel):
    """
    Body returned by the exception handlers.

    `errors` lists the offending fields of a rejected request, e.g.
    ["body.quantity"]; it is omitted for every other error.
    """

    success: bool = False
    message: str
    errors: list[str] | None = None

"""Base schema configuration for API models.

- APIRequest: incoming request bodies and form payloads
- APIResponse: outgoing response bodies

Both speak camelCase on the wire and accept snake_case in Python.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas; unknown fields are ignored."""

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas; only declared fields leave."""

    model_config = ConfigDict(
        extra="forbid",
        from_attributes=True,
    )


class MessageResponse(APIResponse):
    """Plain acknowledgement."""

    message: str

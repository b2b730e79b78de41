"""
Shared pydantic bases for request and response bodies.

Python code uses snake_case; the wire format is camelCase
(``firstName``, ``isActive``, ...).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response body: read from ORM rows, serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Request body: unknown fields are rejected before the handler runs."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(BaseModel):
    message: str

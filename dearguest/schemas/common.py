"""
Shared schema base and the JSON codec for event configuration
"""

import json
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanging camelCase keys with the frontend"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(BaseModel):
    """Acknowledgement for writes that return no entity"""
    ok: bool = True


def encode_config(value: Any) -> str:
    """Serialize an incoming config to the stored text form.

    Objects are serialized; strings must already hold JSON and are stored
    as given.
    """
    if isinstance(value, str):
        try:
            json.loads(value)
        except ValueError:
            raise ValueError("config must be a JSON object or a JSON string")
        return value
    return json.dumps(value)


def decode_config(value: str | None) -> Any:
    return json.loads(value) if value else {}


class Created(CamelModel):
    """Acknowledgement for a newly stored record"""
    success: bool = True
    id: UUID

"""Shared Pydantic base for request/response bodies.

Python attributes stay snake_case; the JSON wire format is camelCase
(``franchiseId``, ``reportUrl``), matching what existing clients send.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

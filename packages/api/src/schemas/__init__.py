# This project was developed with assistance from AI tools.
"""Shared schema components."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Monetary values are stored as NUMERIC and emitted as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base model with camelCase aliases on the wire, snake_case in Python.

    Requests may use either spelling; responses are serialized by alias
    (FastAPI's default for ``response_model``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

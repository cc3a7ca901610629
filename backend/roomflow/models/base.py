"""
Shared pydantic base for API-facing models.

Fields are snake_case in Python and camelCase on the wire
(``assigned_to`` <-> ``assignedTo``); either name is accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

"""
Base model of every JSON payload.

API payloads and AI answers use camelCase keys (``errorMessage``,
``schemaRaw`` ...). Models derive from ``CamelModel`` so the aliases are
generated once, while Python code keeps snake_case attribute names and
input may use either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

"""
Base schema with camelCase wire names.

Python attributes stay snake_case; JSON uses camelCase.  Either form is
accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

"""
Base pydantic model for payloads exchanged over the public API.

Fields are declared in snake_case and serialized in camelCase; requests may
use either spelling.
"""
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Largest value an SQL INTEGER column holds
MAX_INT = 2_147_483_647

# Row identifier taken from the URL path
RowId = Annotated[int, Path(ge=1, le=MAX_INT)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

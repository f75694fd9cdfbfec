"""
Shared pydantic configuration for dataset records.

Records accept both snake_case and the camelCase keys used in dataset
files (``nameType``, ``locationType``, ``postalCode``) and serialize
with camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base class for every dataset record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

"""Shared base model for serialized domain objects."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose serialized field names are camelCase.

    Python code uses snake_case attributes; JSON payloads and store snapshots
    use camelCase (``durationMinutes``, ``scheduledDate``, ...). Both spellings
    are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

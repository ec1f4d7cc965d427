from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Upper bound of the 32-bit INTEGER columns (ids, scores, minute, sequence)
INT32_MAX = 2**31 - 1

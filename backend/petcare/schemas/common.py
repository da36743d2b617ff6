"""Module: common."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Wire contract is camelCase; Python side stays snake_case.
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str

"""Base schema shared by user and bookmark payloads."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    JSON fields are camelCase on the wire (firstName, createdAt, userId).

    Input also accepts the snake_case attribute names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

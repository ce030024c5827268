"""Base model for the feed's API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FeedSchema(BaseModel):
    """Schemas read snake_case or camelCase input and serialize to camelCase.

    Enum fields hold their plain values so candidates compare and dump as
    strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        extra="ignore",
    )

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ORMBaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CamelModel(BaseModel):
    """Public API models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def deprecated_field(description: str) -> dict:
    return {'description': description, 'json_schema_extra': {'deprecated': True}}

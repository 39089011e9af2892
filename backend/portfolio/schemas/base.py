from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class InputModel(BaseModel):
    """Admin payloads arrive in camelCase from the editor and snake_case from tools."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class OutputModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

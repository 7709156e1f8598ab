from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict


class BaseModel(PydanticBaseModel):
    """Project-wide pydantic base that accepts engines and data frames as fields."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

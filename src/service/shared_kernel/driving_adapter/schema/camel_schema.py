from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    """JSON bodies use camelCase keys; Python code keeps snake_case attributes"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

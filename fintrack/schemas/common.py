# fintrack/schemas/common.py
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """JSON goes out in camelCase; input accepts camelCase or snake_case."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class ErrorResponse(BaseModel):
    statusCode: int
    statusMessage: str
    data: Optional[Any] = None

class SuccessResponse(BaseModel):
    success: bool = True

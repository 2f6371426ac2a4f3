"""
Shared pydantic base classes for request and response bodies.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema serialized with camelCase field names.

    snake_case names are still accepted on input, and ORM objects can be
    validated directly.
    """

    class Config:
        """Pydantic configuration shared by every API schema"""
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(CamelModel):
    """Plain acknowledgement body."""
    message: str

"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class CamelSchema(BaseSchema):
    """
    Base for payloads shared with the UI and the restaurant backend.

    Fields are snake_case in Python and camelCase on the wire
    (product_name <-> productName). Either spelling is accepted on input.
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump with camelCase keys for the backend."""
        return self.model_dump(by_alias=True, mode="json")

"""Schema adapter for pydantic models.

Presence is ``model_fields_set``: a field counts as set only when it was
supplied at construction or assigned afterwards, so an explicit ``""`` is
set while an omitted field falling back to its default is not.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_snake


class PydanticSchema:
    """Resolve fields on :class:`pydantic.BaseModel` instances.

    Field descriptors are attribute names. The alternate naming convention
    is the field's alias, then the snake_case spelling of *name*.
    """

    def __init__(self, *, alternate_names: bool = True) -> None:
        self._alternate_names = alternate_names

    def field_by_name(self, message: BaseModel, name: str) -> str | None:
        fields = type(message).model_fields
        if name in fields:
            return name
        if not self._alternate_names:
            return None
        for attr, info in fields.items():
            if info.alias == name or info.validation_alias == name:
                return attr
        snake = to_snake(name)
        if snake in fields:
            return snake
        return None

    def has_field(self, message: BaseModel, field: str) -> bool:
        return field in message.model_fields_set

    def get_field_value(self, message: BaseModel, field: str) -> Any:
        return getattr(message, field)

    def is_message(self, value: Any) -> bool:
        return isinstance(value, BaseModel)

"""Schema adapter for decoded JSON mappings (``dict`` request bodies)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic.alias_generators import to_snake

from msgguard.domain.paths import normalize_path


class MappingSchema:
    """Resolve fields on plain mappings.

    A key counts as set when present with a non-None value. The alternate
    naming convention switches between snake_case and lowerCamel keys.
    """

    def __init__(self, *, alternate_names: bool = True) -> None:
        self._alternate_names = alternate_names

    def field_by_name(self, message: Mapping[str, Any], name: str) -> str | None:
        if name in message:
            return name
        if not self._alternate_names:
            return None
        for candidate in (normalize_path(name), to_snake(name)):
            if candidate and candidate in message:
                return candidate
        return None

    def has_field(self, message: Mapping[str, Any], field: str) -> bool:
        return message.get(field) is not None

    def get_field_value(self, message: Mapping[str, Any], field: str) -> Any:
        return message.get(field)

    def is_message(self, value: Any) -> bool:
        return isinstance(value, Mapping)

"""Schema adapter for protobuf messages.

Requires the ``protobuf`` extra. Presence follows the message's own
presence tracking: ``HasField`` where the field supports it (message
fields, ``optional`` and proto2 scalars, oneof members), otherwise a
non-default scalar or non-empty repeated/map field counts as set.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message


class ProtobufSchema:
    """Resolve fields on :class:`google.protobuf.message.Message` instances.

    Field descriptors are protobuf ``FieldDescriptor`` objects. The
    alternate naming convention is the field's ``json_name``.
    """

    def __init__(self, *, alternate_names: bool = True) -> None:
        self._alternate_names = alternate_names

    def field_by_name(self, message: Message, name: str) -> FieldDescriptor | None:
        descriptor = message.DESCRIPTOR
        field = descriptor.fields_by_name.get(name)
        if field is not None or not self._alternate_names:
            return field
        for candidate in descriptor.fields:
            if candidate.json_name == name:
                return candidate
        return None

    def has_field(self, message: Message, field: FieldDescriptor) -> bool:
        try:
            return message.HasField(field.name)
        except ValueError:
            # repeated, map, and implicit-presence scalar fields
            value = getattr(message, field.name)
            if isinstance(value, (str, bytes)) or not hasattr(value, "__len__"):
                return bool(value != field.default_value)
            return len(value) > 0

    def get_field_value(self, message: Message, field: FieldDescriptor) -> Any:
        return getattr(message, field.name)

    def is_message(self, value: Any) -> bool:
        return isinstance(value, Message)


def field_mask_paths(mask: Any) -> list[str]:
    """Return the paths of a ``google.protobuf.FieldMask`` (empty for None)."""
    if mask is None:
        return []
    paths: Iterable[str] = mask.paths
    return list(paths)

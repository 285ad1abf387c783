"""Schema adapters and adapter selection.

:func:`schema_for` picks the adapter for a decoded message. Protobuf
support is loaded only when a protobuf message is seen, so the
``protobuf`` extra stays optional.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from msgguard.infrastructure.schema.base import MessageSchema
from msgguard.infrastructure.schema.mapping_schema import MappingSchema
from msgguard.infrastructure.schema.pydantic_schema import PydanticSchema

__all__ = ["MappingSchema", "MessageSchema", "PydanticSchema", "schema_for"]


def _looks_like_protobuf(message: Any) -> bool:
    return hasattr(message, "DESCRIPTOR") and hasattr(message, "HasField")


def schema_for(message: Any, *, alternate_names: bool = True) -> MessageSchema | None:
    """Return the adapter able to reflect on *message*, or None."""
    if message is None:
        return None
    if isinstance(message, BaseModel):
        return PydanticSchema(alternate_names=alternate_names)
    if isinstance(message, Mapping):
        return MappingSchema(alternate_names=alternate_names)
    if _looks_like_protobuf(message):
        from msgguard.infrastructure.schema.protobuf_schema import ProtobufSchema

        return ProtobufSchema(alternate_names=alternate_names)
    return None

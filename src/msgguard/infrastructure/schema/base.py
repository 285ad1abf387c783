"""MessageSchema — the reflection capability the presence resolver consumes.

Each schema technology (pydantic models, protobuf messages, decoded JSON
mappings) implements this protocol. The resolver never touches a concrete
message representation directly.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MessageSchema(Protocol):
    """Reflective access to one kind of message."""

    def field_by_name(self, message: Any, name: str) -> Any | None:
        """Return an opaque field descriptor for *name*, or None if absent.

        Adapters try the declared name first, then their alternate naming
        convention (when ``alternate_names`` is enabled).
        """
        ...

    def has_field(self, message: Any, field: Any) -> bool:
        """Return True if *field* has been explicitly set on *message*."""
        ...

    def get_field_value(self, message: Any, field: Any) -> Any:
        """Return the value of *field* on *message* (may be a nested message)."""
        ...

    def is_message(self, value: Any) -> bool:
        """Return True if *value* can be descended into."""
        ...

"""PresenceResolver — answers "is this field set" for dotted paths.

Walks the message segment by segment through a :class:`MessageSchema`,
memoizing every prefix it visits (including "not found"), so declarations
against overlapping prefixes cost one dictionary lookup after the first
traversal. Prefixes are cached as spelled: whether ``firstName`` and
``first_name`` reach the same field is up to the schema adapter.

INVARIANT: A resolver is bound to one message and one execution. Its cache
is never shared, and it never mutates the message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from msgguard.domain.field import Resolved
from msgguard.domain.paths import PATH_DELIMITER
from msgguard.infrastructure.schema import MessageSchema, schema_for

logger = logging.getLogger(__name__)

_UNRESOLVED = Resolved(value=None, is_set=False)


@dataclass(frozen=True, slots=True)
class _CachedField:
    value: Any
    is_set: bool
    found: bool = True


_NOT_FOUND = _CachedField(value=None, is_set=False, found=False)


class PresenceResolver:
    """Resolve field values and presence on one root message.

    Parameters:
        message: Root message; None resolves every path as unset.
        schema: Adapter for the message. Selected with
            :func:`~msgguard.infrastructure.schema.schema_for` when omitted.
        alternate_names: Allow the adapter's alternate naming fallback.
    """

    def __init__(
        self,
        message: Any,
        schema: MessageSchema | None = None,
        *,
        alternate_names: bool = True,
    ) -> None:
        self._message = message
        self._schema = schema or schema_for(message, alternate_names=alternate_names)
        self._cache: dict[str, _CachedField] = {}
        self.lookups = 0

    @property
    def schema(self) -> MessageSchema | None:
        return self._schema

    def is_set(self, path: str) -> bool:
        """Return True if the field at *path* has been explicitly set."""
        return self.resolve(path).is_set

    def resolve(self, path: str) -> Resolved:
        """Return the value at *path* and whether it is set.

        Paths that cannot be reached (absent root, empty segments, unknown
        fields, unset or non-message parents) resolve to ``(None, False)``.
        """
        if self._message is None or self._schema is None or not path:
            return _UNRESOLVED
        segments = path.split(PATH_DELIMITER)
        if any(not s for s in segments):
            return _UNRESOLVED

        current = self._message
        prefix: list[str] = []
        last = len(segments) - 1
        for i, segment in enumerate(segments):
            prefix.append(segment)
            key = PATH_DELIMITER.join(prefix)
            cached = self._cache.get(key)
            if cached is None:
                cached = self._lookup(current, segment)
                self._cache[key] = cached

            if i == last:
                return Resolved(value=cached.value, is_set=cached.is_set)
            if not cached.is_set or not self._schema.is_message(cached.value):
                return _UNRESOLVED
            current = cached.value

        return _UNRESOLVED

    def _lookup(self, message: Any, name: str) -> _CachedField:
        assert self._schema is not None
        self.lookups += 1
        field = self._schema.field_by_name(message, name)
        if field is None:
            logger.debug("Field %s not found on %s", name, type(message).__name__)
            return _NOT_FOUND
        return _CachedField(
            value=self._schema.get_field_value(message, field),
            is_set=self._schema.has_field(message, field),
        )

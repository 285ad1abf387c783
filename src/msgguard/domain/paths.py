"""Field path normalization and field-mask membership.

Declared paths (``user.first_name``) and wire spellings (``user.firstName``)
converge on one canonical lowerCamel form so mask membership is an exact
string match.

INVARIANT: A path with an empty segment normalizes to ``""``, which never
matches a mask entry.
"""

from __future__ import annotations

from collections.abc import Iterable

PATH_DELIMITER = "."


def normalize_path(path: str) -> str:
    """Return the canonical spelling of *path*.

    Underscores are dropped and the character after each one is
    upper-cased, so ``primary_address.line_1`` becomes ``primaryAddress.line1``.
    Already-camel segments pass through unchanged.
    """
    segments = path.split(PATH_DELIMITER)
    if any(not s for s in segments):
        return ""
    return PATH_DELIMITER.join(_normalize_segment(s) for s in segments)


def _normalize_segment(segment: str) -> str:
    out: list[str] = []
    upper_next = False
    for ch in segment:
        if ch == "_":
            upper_next = True
            continue
        if upper_next:
            out.append(ch.upper())
            upper_next = False
            continue
        out.append(ch)
    return "".join(out)


def paths_from_mask(mask_paths: Iterable[str] | None) -> frozenset[str] | None:
    """Build the normalized mask set.

    Returns None for an absent or empty mask so mask-conditioned
    declarations are skipped entirely.
    """
    if mask_paths is None:
        return None
    paths = frozenset(normalize_path(p) for p in mask_paths)
    if not paths:
        return None
    return paths


def is_path_in_mask(
    path: str,
    mask: frozenset[str] | None,
    *,
    resource_relative: bool = True,
) -> bool:
    """Check whether *path* (already normalized) is covered by *mask*.

    With *resource_relative*, the path is also matched with its first
    segment removed, so an update mask of ``first_name`` covers
    ``user.first_name``.
    """
    if not mask or not path:
        return False
    if path in mask:
        return True
    if resource_relative:
        _, sep, relative = path.partition(PATH_DELIMITER)
        if sep and relative in mask:
            return True
    return False

"""Pure upsert/remove operations over collections embedded in file text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Pattern, Sequence

from .shapes import Collection, CollectionShape, Entry


class PatchError(RuntimeError):
    """Raised when a shape cannot produce a parseable collection."""


@dataclass
class PatchResult:
    """New file text plus which requested keys changed.

    ``applied`` holds keys that were added (upsert) or removed (remove);
    ``unchanged`` holds keys already present (upsert) or absent (remove).
    ``text`` is ``None`` only when a remove targeted a missing file.
    """

    text: Optional[str]
    applied: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    created_block: bool = False


def upsert_entries(text: Optional[str], shape: CollectionShape, entries: Sequence[Entry]) -> PatchResult:
    """Merge ``entries`` into the collection, keeping every existing entry.

    A missing file starts from the shape's skeleton; a file without the
    anchor gets a fresh block appended. The merged entries are sorted by key.
    Calling again with the same entries returns identical text.
    """
    created = False
    if text is None or not text.strip():
        text = shape.skeleton
    collection = shape.parse(text)
    if collection is None:
        created = True
        text = _append_block(text, shape.empty_block())
        collection = shape.parse(text)
        if collection is None:
            raise PatchError(f"{shape.label}: appended block is not recognised by its own anchor")

    merged = {entry.key: entry for entry in collection.entries}
    applied: List[str] = []
    unchanged: List[str] = []
    for entry in entries:
        if entry.key in merged:
            if entry.key not in unchanged and entry.key not in applied:
                unchanged.append(entry.key)
            continue
        merged[entry.key] = entry
        applied.append(entry.key)

    if not applied and not created:
        return PatchResult(text, applied, unchanged, created)

    collection.entries = _sorted_entries(merged.values())
    return PatchResult(shape.serialize(collection), applied, unchanged, created)


def remove_entries(text: Optional[str], shape: CollectionShape, keys: Iterable[str]) -> PatchResult:
    """Drop entries whose key equals one of ``keys`` exactly.

    Surviving entries keep their order. A missing file, a missing anchor or
    a missing entry is a no-op.
    """
    requested = _unique(keys)
    if text is None:
        return PatchResult(None, [], requested)
    collection = shape.parse(text)
    if collection is None:
        return PatchResult(text, [], requested)

    present = set(collection.keys())
    applied = [key for key in requested if key in present]
    unchanged = [key for key in requested if key not in present]
    if not applied:
        return PatchResult(text, applied, unchanged)

    doomed = set(applied)
    collection.entries = [entry for entry in collection.entries if entry.key not in doomed]
    return PatchResult(shape.serialize(collection), applied, unchanged)


def contains(text: Optional[str], shape: CollectionShape, key: str) -> bool:
    """Return whether the collection holds an entry whose key is exactly ``key``."""
    return key in entry_keys(text, shape)


def entry_keys(text: Optional[str], shape: CollectionShape) -> List[str]:
    if text is None:
        return []
    collection: Optional[Collection] = shape.parse(text)
    if collection is None:
        return []
    return collection.keys()


def strip_blocks(text: str, pattern: Pattern[str]) -> tuple[str, int]:
    """Remove every match of ``pattern`` together with one trailing blank line."""
    widened = re.compile(rf"(?:{pattern.pattern})[ \t]*\n?(?:[ \t]*\n)?", pattern.flags)
    return widened.subn("", text)


def _append_block(text: str, block: str) -> str:
    base = text.rstrip("\n")
    if not base:
        return f"{block}\n"
    return f"{base}\n\n{block}\n"


def _sorted_entries(entries: Iterable[Entry]) -> List[Entry]:
    return sorted(entries, key=lambda entry: entry.key)


def _unique(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


__all__ = [
    "PatchError",
    "PatchResult",
    "contains",
    "entry_keys",
    "remove_entries",
    "strip_blocks",
    "upsert_entries",
]

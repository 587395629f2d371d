"""Structural text patching for generated TypeScript files."""

from .patcher import (
    PatchError,
    PatchResult,
    contains,
    entry_keys,
    remove_entries,
    strip_blocks,
    upsert_entries,
)
from .shapes import BlockShape, Collection, CollectionShape, Entry, LineShape, SectionShape

__all__ = [
    "BlockShape",
    "Collection",
    "CollectionShape",
    "Entry",
    "LineShape",
    "PatchError",
    "PatchResult",
    "SectionShape",
    "contains",
    "entry_keys",
    "remove_entries",
    "strip_blocks",
    "upsert_entries",
]

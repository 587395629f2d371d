"""Name enums: ``export enum TokenName { BTC = 'BTC', ... }``."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from ..patching import BlockShape, Entry, PatchResult, entry_keys, remove_entries, upsert_entries
from .base import ArtifactCoordinator

ENUM_MEMBER = re.compile(
    r"^[ \t]*(?P<name>[A-Za-z0-9_$]+)[ \t]*=[ \t]*['\"][^'\"\n]*['\"][ \t]*,?",
    re.MULTILINE,
)


def enum_member(name: str) -> str:
    return f"  {name} = '{name}',"


class EnumCoordinator(ArtifactCoordinator):
    """Maintains ``types/<Category>Name.ts``."""

    kind = "enum"

    @property
    def path(self) -> Path:
        return self.root / "types" / f"{self.spec.enum_name}.ts"

    @property
    def description(self) -> str:
        return f"{self.spec.enum_name} enum"

    @property
    def shape(self) -> BlockShape:
        enum_name = self.spec.enum_name
        return BlockShape(
            f"{enum_name} enum",
            re.compile(rf"export\s+enum\s+{enum_name}\s*\{{(?P<body>[^}}]*)\}}"),
            ENUM_MEMBER,
            head=f"export enum {enum_name} {{\n",
            tail="}",
            placeholder=f"  // This will be populated automatically as you add {self.spec.plural}\n",
            terminator=",",
            skeleton=self.renderer.enum_skeleton(self.spec),
        )

    def patch_add(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        entries = [Entry(name, enum_member(name)) for name in names]
        return upsert_entries(text, self.shape, entries)

    def patch_remove(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        return remove_entries(text, self.shape, names)

    def keys_in(self, text: Optional[str]) -> List[str]:
        return entry_keys(text, self.shape)

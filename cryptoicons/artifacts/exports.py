"""Category barrel files: ``export { IconX } from './IconX';`` per item."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from ..patching import Entry, LineShape, PatchResult, entry_keys, remove_entries, upsert_entries
from .base import ArtifactCoordinator

EXPORT_LINE = re.compile(
    r"export\s*\{\s*Icon(?P<name>[A-Za-z0-9]+)\s*\}\s*from\s*['\"]\./Icon(?P=name)['\"]\s*;?"
)


def export_line(name: str) -> str:
    return f"export {{ Icon{name} }} from './Icon{name}';"


class ExportsCoordinator(ArtifactCoordinator):
    """Maintains ``<category dir>/index.ts``."""

    kind = "exports"

    @property
    def path(self) -> Path:
        return self.root / self.spec.directory / "index.ts"

    @property
    def shape(self) -> LineShape:
        return LineShape(f"{self.spec.directory} exports", EXPORT_LINE)

    def patch_add(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        entries = [Entry(name, export_line(name)) for name in names]
        return upsert_entries(text, self.shape, entries)

    def patch_remove(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        return remove_entries(text, self.shape, names)

    def keys_in(self, text: Optional[str]) -> List[str]:
        return entry_keys(text, self.shape)

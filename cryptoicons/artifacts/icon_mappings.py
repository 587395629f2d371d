"""Token-to-component mapping table and its import list."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from ..patching import (
    BlockShape,
    Entry,
    LineShape,
    PatchResult,
    entry_keys,
    remove_entries,
    upsert_entries,
)
from .base import ArtifactCoordinator

ICON_IMPORT = re.compile(
    r"import\s*\{\s*Icon(?P<name>[A-Za-z0-9]+)\s*\}\s*from\s*['\"]\.\./tokens/Icon(?P=name)['\"]\s*;?"
)
MAPPING_ENTRY = re.compile(
    r"^[ \t]*\[\s*TokenName\.(?P<name>[A-Za-z0-9_$]+)\s*\]\s*:\s*[A-Za-z0-9_$]+[ \t]*,?",
    re.MULTILINE,
)
_IMPORT_LINE = r"[ \t]*import\b[^\n]*\n"
LEADING_IMPORTS = re.compile(
    r"\A(?:[ \t]*(?://[^\n]*|/\*[\s\S]*?\*/)?[ \t]*\n)*"
    rf"(?P<body>{_IMPORT_LINE}(?:(?:[ \t]*\n)*{_IMPORT_LINE})*)"
    r"|\A(?:[ \t]*//[^\n]*\n)*"
)
MAPPING_OBJECT = re.compile(r"export\s+const\s+mapNameToIcon\b[^{=]*=\s*\{(?P<body>[^}]*)\}[ \t]*;?")
MAPPING_HEAD = "export const mapNameToIcon: Record<TokenName, SvgComponent> = {\n"


def icon_import(name: str) -> str:
    return f"import {{ Icon{name} }} from '../tokens/Icon{name}';"


def mapping_entry(name: str) -> str:
    return f"  [TokenName.{name}]: Icon{name},"


class IconMappingCoordinator(ArtifactCoordinator):
    """Maintains ``constants/iconMappings.ts`` for tokens.

    The import list and the ``mapNameToIcon`` object are patched with the
    same names so both stay in step.
    """

    kind = "icon mappings"

    @property
    def path(self) -> Path:
        return self.root / "constants" / "iconMappings.ts"

    @property
    def import_shape(self) -> LineShape:
        return LineShape(
            "icon mapping imports",
            ICON_IMPORT,
            region=LEADING_IMPORTS,
            skeleton=self.renderer.icon_mappings_skeleton(),
        )

    @property
    def mapping_shape(self) -> BlockShape:
        return BlockShape(
            "mapNameToIcon",
            MAPPING_OBJECT,
            MAPPING_ENTRY,
            head=MAPPING_HEAD,
            tail="};",
            placeholder="  // This will be populated automatically as you add tokens\n",
            terminator=",",
            skeleton=self.renderer.icon_mappings_skeleton(),
        )

    def ensure_file(self) -> None:
        if self.path.exists():
            return
        self.write(self.renderer.icon_mappings_skeleton())
        self.logger.info("Created %s", self.path)

    def contains(self, name: str) -> bool:
        text = self.read()
        return name in entry_keys(text, self.import_shape) and name in entry_keys(text, self.mapping_shape)

    def patch_add(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        mapped = upsert_entries(text, self.mapping_shape, [Entry(name, mapping_entry(name)) for name in names])
        imported = upsert_entries(mapped.text, self.import_shape, [Entry(name, icon_import(name)) for name in names])
        return _combine(imported.text, mapped, imported)

    def patch_remove(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        mapped = remove_entries(text, self.mapping_shape, names)
        imported = remove_entries(mapped.text, self.import_shape, names)
        return _combine(imported.text, mapped, imported)

    def keys_in(self, text: Optional[str]) -> List[str]:
        return entry_keys(text, self.mapping_shape)


def _combine(text: Optional[str], *results: PatchResult) -> PatchResult:
    applied: List[str] = []
    for result in results:
        applied.extend(key for key in result.applied if key not in applied)
    unchanged = [key for key in results[0].unchanged if key not in applied]
    created = any(result.created_block for result in results)
    return PatchResult(text, applied, unchanged, created)


__all__ = ["IconMappingCoordinator", "icon_import", "mapping_entry"]

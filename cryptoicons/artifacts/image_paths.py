"""Image-path constants: one ``PNG_*`` block per item under a category marker."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Pattern, Sequence

from ..models import CATEGORY_SPECS, CategorySpec
from ..patching import (
    Entry,
    PatchResult,
    SectionShape,
    entry_keys,
    remove_entries,
    strip_blocks,
    upsert_entries,
)
from ..registry import SpecialIconRegistry
from ..rendering import TemplateRenderer, section_anchor
from .base import ArtifactCoordinator

IMAGE_CONSTANT = re.compile(
    r"export\s+const\s+(?P<name>PNG_[A-Za-z0-9_]+)\s*:\s*IconUrls\s*=\s*\{[^{}]*\}[ \t]*;?"
)
ANY_SECTION_MARKER = re.compile(
    r"^// (?:" + "|".join(spec.label for spec in CATEGORY_SPECS.values()) + r") image paths[ \t]*$",
    re.MULTILINE,
)
IMAGE_PATHS_FILE = Path("constants") / "imagePaths.ts"


def image_urls(spec: CategorySpec, name: str, registry: SpecialIconRegistry) -> tuple[str, str]:
    """Return the (lightmode, darkmode) asset names for an item."""
    if registry.is_special(spec.category, name):
        return f"{name}-lightmode", f"{name}-darkmode"
    return name, name


def image_constant(spec: CategorySpec, name: str, registry: SpecialIconRegistry) -> str:
    light, dark = image_urls(spec, name, registry)
    return (
        f"export const {spec.constant_name(name)}: IconUrls = {{\n"
        f"  lightmode: {spec.url_builder}('{light}'),\n"
        f"  darkmode: {spec.url_builder}('{dark}'),\n"
        "};"
    )


def _constant_block(key: str) -> Pattern[str]:
    return re.compile(
        rf"^export\s+const\s+{re.escape(key)}\s*:\s*IconUrls\s*=\s*\{{[^{{}}]*\}}[ \t]*;?",
        re.MULTILINE,
    )


def _is_defined(text: Optional[str], key: str) -> bool:
    if text is None:
        return False
    return re.search(rf"^export\s+const\s+{re.escape(key)}\s*:", text, re.MULTILINE) is not None


class ImagePathCoordinator(ArtifactCoordinator):
    """Maintains the category's section of ``constants/imagePaths.ts``.

    Constant names are unique across the whole file, so membership checks
    look at every section; constants written outside their section by older
    tooling are still found and removed.
    """

    kind = "image paths"

    def __init__(
        self,
        spec: CategorySpec,
        root: Path,
        renderer: TemplateRenderer,
        registry: SpecialIconRegistry,
    ) -> None:
        super().__init__(spec, root, renderer)
        self.registry = registry

    @property
    def path(self) -> Path:
        return self.root / IMAGE_PATHS_FILE

    @property
    def shape(self) -> SectionShape:
        return SectionShape(
            f"{self.spec.label} image paths",
            section_anchor(self.spec),
            IMAGE_CONSTANT,
            terminator=";",
            skeleton=self.renderer.image_paths_skeleton(),
        )

    def key_for(self, name: str) -> str:
        return self.spec.constant_name(name)

    def contains(self, name: str) -> bool:
        return _is_defined(self.read(), self.key_for(name))

    def ensure_file(self) -> None:
        """Create the file, or back-fill its URL helpers and section markers."""
        text = self.read()
        if text is None:
            self.write(self.renderer.image_paths_skeleton())
            self.logger.info("Created %s", self.path)
            return

        updated = text
        if "baseImgUrl =" not in updated:
            if "import { IconUrls }" not in updated:
                updated = f"import {{ IconUrls }} from '../types';\n\n{updated}"
            helpers = self.renderer.image_path_helpers()
            marker = ANY_SECTION_MARKER.search(updated)
            if marker is not None:
                updated = f"{updated[: marker.start()]}{helpers}\n{updated[marker.start():]}"
            else:
                updated = f"{updated.rstrip()}\n\n{helpers}"

        for spec in CATEGORY_SPECS.values():
            anchor = section_anchor(spec)
            if not re.search(rf"^{re.escape(anchor)}[ \t]*$", updated, re.MULTILINE):
                updated = f"{updated.rstrip()}\n\n{anchor}\n"

        if updated != text:
            self.write(updated)
            self.logger.info("Back-filled URL helpers and section markers in %s", self.path)

    def patch_add(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        shape = self.shape
        in_section = set(entry_keys(text, shape))
        entries: List[Entry] = []
        elsewhere: List[str] = []
        for name in names:
            key = self.key_for(name)
            if key not in in_section and _is_defined(text, key):
                elsewhere.append(key)
                continue
            entries.append(Entry(key, image_constant(self.spec, name, self.registry)))
        result = upsert_entries(text, shape, entries)
        result.unchanged.extend(elsewhere)
        return result

    def patch_remove(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        result = remove_entries(text, self.shape, [self.key_for(name) for name in names])
        if result.text is None:
            return result
        stray = [key for key in result.unchanged if _is_defined(result.text, key)]
        if not stray:
            return result
        updated = result.text
        for key in stray:
            updated, _ = strip_blocks(updated, _constant_block(key))
        return PatchResult(
            updated,
            result.applied + stray,
            [key for key in result.unchanged if key not in stray],
            result.created_block,
        )

    def keys_in(self, text: Optional[str]) -> List[str]:
        return entry_keys(text, self.shape)


__all__ = ["ImagePathCoordinator", "image_constant", "image_urls"]

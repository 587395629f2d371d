"""Shared read-patch-write behaviour for generated artifact files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..logging import get_logger
from ..models import CategorySpec
from ..patching import PatchError, PatchResult
from ..rendering import TemplateError, TemplateRenderer


@dataclass
class ApplyResult:
    """Outcome of one coordinator call."""

    ok: bool
    changed: List[str] = field(default_factory=list)


class ArtifactCoordinator(ABC):
    """Keeps one generated file in sync with a category's item names.

    Errors are logged and reported through :class:`ApplyResult` so one
    failing file never stops the others.
    """

    kind = "artifact"

    def __init__(self, spec: CategorySpec, root: Path, renderer: TemplateRenderer) -> None:
        self.spec = spec
        self.root = root
        self.renderer = renderer
        self.logger = get_logger(f"artifacts.{self.kind}")

    @property
    @abstractmethod
    def path(self) -> Path:
        """File maintained by this coordinator."""

    @property
    def description(self) -> str:
        return f"{self.spec.category.value} {self.kind}"

    @abstractmethod
    def patch_add(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        """Return the file text with ``names`` registered."""

    @abstractmethod
    def patch_remove(self, text: Optional[str], names: Sequence[str]) -> PatchResult:
        """Return the file text with ``names`` unregistered."""

    @abstractmethod
    def keys_in(self, text: Optional[str]) -> List[str]:
        """Return the entry keys registered in ``text``."""

    def key_for(self, name: str) -> str:
        return name

    def add(self, names: Sequence[str]) -> ApplyResult:
        return self._apply("add", names, self.patch_add)

    def remove(self, names: Sequence[str]) -> ApplyResult:
        return self._apply("remove", names, self.patch_remove)

    def contains(self, name: str) -> bool:
        """Exact-name membership check. I/O errors propagate to the caller."""
        return self.key_for(name) in self.keys_in(self.read())

    def keys(self) -> List[str]:
        return self.keys_in(self.read())

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")

    def _apply(
        self,
        action: str,
        names: Sequence[str],
        patch: Callable[[Optional[str], Sequence[str]], PatchResult],
    ) -> ApplyResult:
        try:
            original = self.read()
            if action == "remove" and original is None:
                self.logger.debug("%s not found; nothing to remove", self.path)
                return ApplyResult(ok=True)
            result = patch(original, names)
            if result.created_block and original is not None and original.strip():
                self.logger.warning(
                    "Expected %s block not found in %s; created a fresh one",
                    self.description,
                    self.path,
                )
            if result.text is not None and result.text != original:
                self.write(result.text)
        except (OSError, UnicodeError, PatchError, TemplateError) as exc:
            self.logger.error(
                "Failed to %s %s %s in %s: %s",
                action,
                self.spec.category.value,
                ", ".join(names),
                self.path,
                exc,
            )
            return ApplyResult(ok=False)

        if result.applied:
            verb = "Updated" if action == "add" else "Removed from"
            self.logger.info("%s %s: %s", verb, self.description, ", ".join(result.applied))
        else:
            self.logger.debug("%s already up to date for %s", self.description, ", ".join(names))
        return ApplyResult(ok=True, changed=list(result.applied))


__all__ = ["ApplyResult", "ArtifactCoordinator"]

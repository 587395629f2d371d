"""Component template rendering and seed-file skeletons."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError as JinjaTemplateError

from .logging import get_logger
from .models import CATEGORY_SPECS, CategorySpec

TEMPLATES_DIR = Path(__file__).with_name("templates")
COMPONENT_TEMPLATES_DIR = TEMPLATES_DIR / "components"
SEED_TEMPLATES_DIR = TEMPLATES_DIR / "seeds"

BASE_IMAGE_URL = "https://firebasestorage.googleapis.com/v0/b/crypto-images"


class TemplateError(RuntimeError):
    """Raised when a template cannot be located or rendered."""


def render(template_text: str, placeholder: str, item_name: str) -> str:
    """Replace every occurrence of ``placeholder`` with ``item_name``."""
    return template_text.replace(placeholder, item_name)


class TemplateRenderer:
    """Loads component templates and renders Jinja seed files.

    Component templates live in ``templates_dir`` (the packaged defaults when
    unset). A missing template in a custom directory is created there from
    the packaged default so users have a file to customise.
    """

    def __init__(self, templates_dir: Path | None = None, *, base_url: str = BASE_IMAGE_URL) -> None:
        self.templates_dir = templates_dir or COMPONENT_TEMPLATES_DIR
        self.base_url = base_url
        self._components: Dict[str, str] = {}
        self._env = Environment(
            loader=FileSystemLoader(str(SEED_TEMPLATES_DIR)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.logger = get_logger("rendering")

    def component_template(self, spec: CategorySpec) -> str:
        cached = self._components.get(spec.template_file)
        if cached is not None:
            return cached

        path = self.templates_dir / spec.template_file
        if not path.exists():
            default_path = COMPONENT_TEMPLATES_DIR / spec.template_file
            if not default_path.exists():
                raise TemplateError(f"No component template found for {spec.category.value}: {path}")
            self.logger.info("Creating default %s template at %s", spec.category.value, path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(default_path.read_text(encoding="utf-8"), encoding="utf-8")

        text = path.read_text(encoding="utf-8")
        self._components[spec.template_file] = text
        return text

    def render_component(self, spec: CategorySpec, name: str) -> str:
        """Return component source for one item."""
        text = self.component_template(spec)
        text = render(text, spec.constant_placeholder, spec.constant_name(name))
        return render(text, spec.placeholder, name)

    def render_seed(self, template_name: str, **context: object) -> str:
        """Render a packaged seed template (skeleton files, helpers)."""
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as exc:
            raise TemplateError(f"Failed to render seed template {template_name}: {exc}") from exc

    def enum_skeleton(self, spec: CategorySpec) -> str:
        return self.render_seed("enum.ts.j2", enum_name=spec.enum_name, plural=spec.plural)

    def image_path_helpers(self) -> str:
        return self.render_seed(
            "image_path_helpers.ts.j2",
            base_url=self.base_url,
            specs=list(CATEGORY_SPECS.values()),
        )

    def image_paths_skeleton(self) -> str:
        header = self.render_seed(
            "image_paths.ts.j2",
            base_url=self.base_url,
            specs=list(CATEGORY_SPECS.values()),
        )
        sections = "".join(f"\n{section_anchor(spec)}\n" for spec in CATEGORY_SPECS.values())
        return header + sections

    def icon_mappings_skeleton(self) -> str:
        return self.render_seed("icon_mappings.ts.j2")


def section_anchor(spec: CategorySpec) -> str:
    return f"// {spec.label} image paths"


__all__ = ["TemplateError", "TemplateRenderer", "render", "section_anchor"]

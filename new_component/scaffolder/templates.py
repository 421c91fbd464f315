"""Component templates.

Provides the TemplateRenderer class, which reads language templates from the
``new_component/scaffolder/templates/`` directory (always relative to the
installed package, never to the caller's working directory), substitutes the
``COMPONENT_NAME`` placeholder, and renders the barrel index file.

Component templates are not Jinja2 templates: the placeholder is replaced
literally.  Jinja2 is used for loading (so lookups stay inside the template
directory) and for the inline barrel template.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from new_component.errors import TemplateNotFoundError

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

TEMPLATE_SUFFIX = ".template"

PLACEHOLDER = "COMPONENT_NAME"

INDEX_TEMPLATE = (
    "export * from './{{ name }}';\n"
    "export { default } from './{{ name }}';\n"
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Loads component templates and renders the barrel index.

    Templates are named after the language they produce (``js.template``,
    ``ts.template``).
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    # -- Component templates -----------------------------------------------

    def load_source(self, lang: str) -> str:
        """Return the raw text of the template for *lang*.

        Raises:
            TemplateNotFoundError: If there is no template for *lang*.
        """
        name = f"{lang}{TEMPLATE_SUFFIX}"
        try:
            source, _filename, _uptodate = self.env.loader.get_source(self.env, name)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(
                f"No template for language {lang!r} in {self.template_dir}"
            ) from exc
        return source

    async def load(self, lang: str) -> str:
        """Async wrapper around :meth:`load_source`."""
        return await asyncio.to_thread(self.load_source, lang)

    @staticmethod
    def fill(source: str, name: str) -> str:
        """Replace every occurrence of the placeholder with *name*."""
        return source.replace(PLACEHOLDER, name)

    # -- Barrel index ------------------------------------------------------

    def render_index(self, name: str) -> str:
        """Render the index file that re-exports the component module."""
        template = self.env.from_string(INDEX_TEMPLATE)
        return template.render(name=name)

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return the languages that have a template, sorted."""
        return sorted(
            name[: -len(TEMPLATE_SUFFIX)]
            for name in self.env.list_templates()
            if name.endswith(TEMPLATE_SUFFIX)
        )

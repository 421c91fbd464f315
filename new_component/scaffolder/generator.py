"""Component materialization.

Takes a ``ComponentRequest`` and turns it into files on disk: resolve the
output paths, refuse to overwrite anything, create the directory, fill and
format the template, and write the component (plus a barrel index when
requested).  Each filesystem operation is awaited before the next one
starts.  Steps that already completed are not rolled back when a later step
fails.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from new_component.errors import CollisionError, UsageError
from new_component.reporter import ConsoleReporter
from new_component.utils import path_exists, write_text

from .templates import TemplateRenderer

FILE_EXTENSION = "tsx"
INDEX_EXTENSION = "ts"

FormatFn = Callable[[str], Awaitable[str]]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ComponentRequest(BaseModel):
    """Resolved inputs for one generation."""

    name: str = Field(default="", description="Component name, used verbatim in paths and code")
    lang: Literal["js", "ts"] = Field(default="ts", description="Template language")
    base_dir: Path = Field(default=Path("src/components"), description="Components directory")
    use_barrel: bool = Field(default=False, description="Create <name>/ with an index file")

    @property
    def file_extension(self) -> str:
        return FILE_EXTENSION

    @property
    def index_extension(self) -> str:
        return INDEX_EXTENSION


class OutputPlan(BaseModel):
    """Paths derived from a ``ComponentRequest``."""

    base_dir: Path
    target_dir: Path
    component_path: Path
    index_path: Path
    use_barrel: bool

    @property
    def collision_path(self) -> Path:
        """The entry that must not exist before generation starts."""
        return self.target_dir if self.use_barrel else self.component_path

    @property
    def collision_kind(self) -> str:
        return "directory" if self.use_barrel else "file"


def require_component_name(name: str | None) -> str:
    """Return *name*, or raise ``UsageError`` if it is empty."""
    if not name or not name.strip():
        raise UsageError(
            "Sorry, you need to specify a name for your component like this: "
            "new-component <name>"
        )
    return name


def plan_output(request: ComponentRequest) -> OutputPlan:
    """Compute where the files for *request* go."""
    base_dir = Path(request.base_dir)
    target_dir = base_dir / request.name if request.use_barrel else base_dir
    return OutputPlan(
        base_dir=base_dir,
        target_dir=target_dir,
        component_path=target_dir / f"{request.name}.{request.file_extension}",
        index_path=target_dir / f"index.{request.index_extension}",
        use_barrel=request.use_barrel,
    )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ComponentGenerator:
    """Materializes a component from its template.

    Args:
        formatter: Async callable that formats source text.  Formatting errors
            propagate unchanged.
        reporter: Receives intro, per-step, and conclusion events.
        renderer: Template loader; defaults to the bundled templates.
    """

    def __init__(
        self,
        formatter: FormatFn,
        reporter: ConsoleReporter | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.formatter = formatter
        self.reporter = reporter or ConsoleReporter()
        self.renderer = renderer or TemplateRenderer()

    async def materialize(self, request: ComponentRequest) -> OutputPlan:
        """Generate the component described by *request*.

        Returns:
            The ``OutputPlan`` that was written.

        Raises:
            UsageError: If the component name is empty.
            CollisionError: If the target already exists.
            TemplateNotFoundError: If there is no template for the language.
            FormatError: If Prettier rejects the generated source.
            OSError: If a directory or file cannot be created.
        """
        require_component_name(request.name)
        plan = plan_output(request)

        self.reporter.intro(name=request.name, directory=str(plan.target_dir), lang=request.lang)

        # 1. Base components directory (one level only)
        await self._ensure_base_dir(plan.base_dir)

        # 2. Refuse to overwrite
        if await asyncio.to_thread(path_exists, plan.collision_path):
            raise CollisionError(plan.collision_path, plan.collision_kind)

        # 3. Component directory
        if plan.use_barrel:
            await asyncio.to_thread(plan.target_dir.mkdir)
            self.reporter.item_completion("Directory created.")

        # 4. Component file
        source = await self.renderer.load(request.lang)
        filled = self.renderer.fill(source, request.name)
        await self._write(plan.component_path, await self.formatter(filled))
        self.reporter.item_completion(f"Component built and saved to {plan.component_path}.")

        # 5. Barrel index
        if plan.use_barrel:
            index = self.renderer.render_index(request.name)
            await self._write(plan.index_path, await self.formatter(index))
            self.reporter.item_completion("Index file built and saved to disk.")

        self.reporter.conclusion()
        return plan

    # -- Internal helpers --------------------------------------------------

    async def _ensure_base_dir(self, base_dir: Path) -> None:
        if not await asyncio.to_thread(path_exists, base_dir):
            await asyncio.to_thread(base_dir.mkdir)

    async def _write(self, path: Path, content: str) -> None:
        await asyncio.to_thread(write_text, path, content)

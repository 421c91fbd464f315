"""Shared pytest fixtures for the new-component test suite.

Provides reusable fixtures for:
- Temporary home / project directories
- A fake formatter that records what it was asked to format
- A mocked reporter
- A template directory with custom templates
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from new_component.reporter import ConsoleReporter
from new_component.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Stand-in for the user's home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Stand-in for the directory the tool is run from."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def components_dir(project_dir: Path) -> Path:
    """Base components directory (not created; its parent exists)."""
    return project_dir / "components"


def snapshot_tree(root: Path) -> dict[str, str | None]:
    """Map every path under *root* to its text (``None`` for directories)."""
    tree: dict[str, str | None] = {}
    for path in sorted(root.rglob("*")):
        rel = str(path.relative_to(root))
        tree[rel] = None if path.is_dir() else path.read_text(encoding="utf-8")
    return tree


@pytest.fixture
def snapshot():
    """The ``snapshot_tree`` helper, for before/after comparisons."""
    return snapshot_tree


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


class FakeFormatter:
    """Async formatter that records its inputs and appends a marker."""

    def __init__(self, marker: str = "") -> None:
        self.marker = marker
        self.calls: list[str] = []

    async def __call__(self, text: str) -> str:
        self.calls.append(text)
        return text + self.marker


@pytest.fixture
def fake_formatter() -> FakeFormatter:
    return FakeFormatter()


@pytest.fixture
def mock_reporter() -> MagicMock:
    """A mock ConsoleReporter that records every event."""
    return MagicMock(spec=ConsoleReporter)


@pytest.fixture
def custom_templates(tmp_path: Path) -> TemplateRenderer:
    """A renderer over a template directory written by the test."""
    template_dir = tmp_path / "templates"
    template_dir.mkdir()
    (template_dir / "ts.template").write_text(
        "// COMPONENT_NAME\nexport const COMPONENT_NAME = () => 'COMPONENT_NAME';\n",
        encoding="utf-8",
    )
    return TemplateRenderer(template_dir)

"""Shared utility functions for new-component.

Provides async command execution, JSON/JSON5/YAML/TOML/module loaders, file-system
helpers and Rich-based console output.  Nothing in here knows about
components; application-specific concerns live in the ``scaffolder``
package and in :mod:`new_component.config`.
"""

from __future__ import annotations

import asyncio
import importlib.util
import json
import os
import tomllib
from pathlib import Path
from typing import Any

import json5
import yaml
from rich.console import Console
from rich.markup import escape

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    input_text: str | None = None,
    strip: bool = True,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Program and arguments; no shell is involved.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        input_text: Optional text fed to the child's stdin.
        strip: Whether to strip surrounding whitespace from stdout.  Turn it
            off when trailing newlines are significant (formatter output).

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.PIPE if input_text is not None else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    payload = input_text.encode("utf-8") if input_text is not None else None
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(input=payload), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (
            -1,
            "",
            f"Command timed out after {timeout}s: {' '.join(cmd)}",
        )

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace")
    if strip:
        stdout_str = stdout_str.strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def load_yaml(path: str | Path) -> Any:
    """Load and parse a YAML file (JSON is valid YAML, so this reads both).

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return yaml.safe_load(raw)


def load_toml(path: str | Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return tomllib.loads(raw)


def load_json5(path: str | Path) -> Any:
    """Load a JSON5 file (comments, trailing commas, unquoted keys)."""
    raw = Path(path).read_text(encoding="utf-8")
    return json5.loads(raw)


def load_module_attribute(path: str | Path, attribute: str) -> Any:
    """Execute a Python file as a throwaway module and return one attribute.

    Returns ``None`` when the module does not define *attribute*.  Any error
    raised while executing the module propagates to the caller.
    """
    file_path = Path(path)
    spec = importlib.util.spec_from_file_location(f"_loaded_{file_path.stem}", file_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {file_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return getattr(module, attribute, None)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def path_exists(path: str | Path) -> bool:
    """Return ``True`` if any file-system entry exists at *path*.

    Unlike :meth:`Path.exists` a dangling symlink counts as an entry.
    """
    return os.path.lexists(path)


def write_text(path: Path, content: str) -> None:
    """Synchronous helper: write UTF-8 text without creating parents."""
    path.write_text(content, encoding="utf-8")


def debug_enabled() -> bool:
    """Whether verbose diagnostics were requested via ``NEW_COMPONENT_DEBUG``."""
    return os.environ.get("NEW_COMPONENT_DEBUG", "").lower() in {"1", "true", "yes"}


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_debug(message: str) -> None:
    """Print a dimmed diagnostic line when debugging is enabled."""
    if debug_enabled():
        console.print(f"[dim]{escape(message)}[/dim]", highlight=False)

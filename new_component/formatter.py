"""Prettier formatting for generated component files.

The formatter runs the project's own Prettier over stdin.  Whatever options
are in effect (the project's Prettier config, the ``prettierConfig`` of the
resolved configuration, or the built-in defaults) pass through
:func:`sanitize_prettier_config`, which strips the Tailwind CSS plugin and
disables plugin auto-discovery so that plugin is never loaded.
"""

from __future__ import annotations

import asyncio
import copy
import json
import re
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from new_component.config import Configuration
from new_component.errors import FormatError, FormatterNotFoundError
from new_component.utils import (
    load_json,
    load_json5,
    load_toml,
    load_yaml,
    print_debug,
    run_command,
    write_text,
)

DEFAULT_PRETTIER_OPTIONS: dict[str, Any] = {
    "semi": True,
    "singleQuote": True,
    "trailingComma": "es5",
}

DEFAULT_PARSERS: dict[str, str] = {
    "js": "babel",
    "ts": "typescript",
}

EXCLUDED_PLUGIN_PATTERN = re.compile(r"prettier-plugin-tailwindcss")

# Searched in this order in every directory from cwd up to the root.
PRETTIER_CONFIG_FILES = (
    "package.json",
    "package.yaml",
    ".prettierrc",
    ".prettierrc.json",
    ".prettierrc.yaml",
    ".prettierrc.yml",
    ".prettierrc.json5",
    ".prettierrc.js",
    "prettier.config.js",
    ".prettierrc.ts",
    "prettier.config.ts",
    ".prettierrc.mjs",
    "prettier.config.mjs",
    ".prettierrc.mts",
    "prettier.config.mts",
    ".prettierrc.cjs",
    "prettier.config.cjs",
    ".prettierrc.cts",
    "prettier.config.cts",
    ".prettierrc.toml",
)

# Config files that only Prettier itself can evaluate.
SCRIPT_CONFIG_SUFFIXES = frozenset({".js", ".mjs", ".cjs", ".ts", ".mts", ".cts"})

# Loads the Prettier that *argv[1]* belongs to and prints the config in
# *argv[2]* as JSON.
RESOLVE_CONFIG_SCRIPT = """\
const { createRequire } = require('module');
const { pathToFileURL } = require('url');
const [prettierPath, configFile] = process.argv.slice(1);
const prettierEntry = createRequire(prettierPath).resolve('prettier');
import(pathToFileURL(prettierEntry).href)
  .then((mod) => (mod.default || mod).resolveConfig(configFile, { config: configFile }))
  .then((config) => process.stdout.write(JSON.stringify(config)));
"""

FORMAT_TIMEOUT = 60


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------


def _read_prettier_file(path: Path) -> dict[str, Any] | None:
    if path.name in ("package.json", "package.yaml"):
        data = load_json(path) if path.suffix == ".json" else load_yaml(path)
        section = data.get("prettier") if isinstance(data, dict) else None
        # A string here names a shared config package, which cannot be resolved from Python.
        return section if isinstance(section, dict) else None
    if path.suffix == ".toml":
        data = load_toml(path)
    elif path.suffix == ".json5":
        data = load_json5(path)
    else:
        data = load_yaml(path)
    return data if isinstance(data, dict) else None


async def load_script_config(path: Path, prettier: str | Path | None) -> dict[str, Any] | None:
    """Evaluate a JavaScript/TypeScript Prettier config with the project's Prettier.

    Returns ``None`` when Node or Prettier is unavailable.

    Raises:
        FormatError: If Prettier fails to load the config file.
    """
    node = shutil.which("node")
    if node is None or prettier is None:
        print_debug(f"Cannot evaluate {path} without Node and Prettier")
        return None

    returncode, stdout, stderr = await run_command(
        [node, "-e", RESOLVE_CONFIG_SCRIPT, str(Path(prettier).resolve()), str(path)],
        cwd=path.parent,
        timeout=FORMAT_TIMEOUT,
    )
    if returncode != 0:
        raise FormatError(stderr or f"Could not load Prettier config {path}")
    try:
        data = json.loads(stdout or "null")
    except json.JSONDecodeError as exc:
        raise FormatError(f"Could not read Prettier config {path}: {exc}") from exc
    return data if isinstance(data, dict) else None


async def resolve_prettier_config(
    cwd: str | Path,
    prettier: str | Path | None = None,
) -> dict[str, Any] | None:
    """Find the Prettier config that applies to *cwd*.

    Walks from *cwd* towards the filesystem root and returns the first
    config found, or ``None``.  Static files that cannot be parsed are
    skipped.  Script configs (``prettier.config.js`` and friends) are
    evaluated by the *prettier* executable's own ``resolveConfig``.
    """
    start = Path(cwd).resolve()
    for directory in (start, *start.parents):
        for filename in PRETTIER_CONFIG_FILES:
            candidate = directory / filename
            if not await asyncio.to_thread(candidate.is_file):
                continue
            if candidate.suffix in SCRIPT_CONFIG_SUFFIXES:
                config = await load_script_config(candidate, prettier)
            else:
                try:
                    config = await asyncio.to_thread(_read_prettier_file, candidate)
                except Exception as exc:
                    print_debug(f"Skipping unreadable Prettier config {candidate}: {exc}")
                    continue
            if config is not None:
                return config
    return None


# ---------------------------------------------------------------------------
# Plugin filtering
# ---------------------------------------------------------------------------


def plugin_identifier(plugin: Any) -> str:
    """Return the identifier of a plugin entry (a name, a mapping, or an object)."""
    if isinstance(plugin, str):
        return plugin
    if isinstance(plugin, Mapping):
        return str(plugin.get("name", plugin))
    return str(getattr(plugin, "name", None) or plugin)


def is_excluded_plugin(plugin: Any) -> bool:
    return bool(EXCLUDED_PLUGIN_PATTERN.search(plugin_identifier(plugin)))


def sanitize_prettier_config(config: Mapping[str, Any], lang: str = "ts") -> dict[str, Any]:
    """Return a copy of *config* that can never load the Tailwind plugin.

    * Sets a parser suited to *lang* when none is configured.
    * Drops every plugin entry whose identifier matches
      ``prettier-plugin-tailwindcss``; other entries keep their order.
    * Sets ``pluginSearchDirs`` to ``False``.

    The input mapping is left untouched.
    """
    sanitized = copy.deepcopy(dict(config))
    sanitized["parser"] = sanitized.get("parser") or DEFAULT_PARSERS.get(lang, "babel")

    plugins = sanitized.get("plugins")
    if plugins:
        sanitized["plugins"] = [p for p in plugins if not is_excluded_plugin(p)]

    sanitized["pluginSearchDirs"] = False
    return sanitized


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------


def find_prettier(cwd: str | Path) -> Path | None:
    """Locate a Prettier executable, preferring the project's local install."""
    local = Path(cwd) / "node_modules" / ".bin" / "prettier"
    if local.is_file():
        return local
    found = shutil.which("prettier")
    return Path(found) if found else None


class Formatter:
    """Callable that formats source text with Prettier.

    Options are written to a temporary config file for each call; plugins
    are passed as ``--plugin`` flags so they resolve from the working
    directory rather than from the temporary location.
    """

    def __init__(
        self,
        options: dict[str, Any],
        executable: str | Path,
        cwd: str | Path | None = None,
        timeout: int = FORMAT_TIMEOUT,
    ) -> None:
        self.options = options
        self.executable = Path(executable)
        self.cwd = Path(cwd) if cwd is not None else None
        self.timeout = timeout

    def build_command(self, config_path: Path) -> list[str]:
        cmd = [
            str(self.executable),
            "--no-editorconfig",
            "--config",
            str(config_path),
            "--parser",
            str(self.options["parser"]),
        ]
        for plugin in self.options.get("plugins") or []:
            cmd.append(f"--plugin={plugin_identifier(plugin)}")
        return cmd

    async def __call__(self, text: str) -> str:
        file_options = {k: v for k, v in self.options.items() if k != "plugins"}
        tmp = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix="new-component-"))
        try:
            config_path = tmp / "prettierrc.json"
            await asyncio.to_thread(write_text, config_path, json.dumps(file_options))
            returncode, stdout, stderr = await run_command(
                self.build_command(config_path),
                cwd=self.cwd,
                timeout=self.timeout,
                input_text=text,
                strip=False,
            )
        finally:
            await asyncio.to_thread(shutil.rmtree, tmp, ignore_errors=True)
        if returncode != 0:
            raise FormatError(stderr or f"prettier exited with status {returncode}")
        return stdout


async def build_formatter(
    lang: str,
    config: Configuration | None = None,
    cwd: str | Path | None = None,
) -> Formatter:
    """Build the formatter used for one invocation.

    Options come from the project's Prettier config when there is one,
    otherwise from ``prettierConfig`` in the resolved configuration,
    otherwise from :data:`DEFAULT_PRETTIER_OPTIONS`.

    Raises:
        FormatterNotFoundError: If no Prettier executable can be found.
        FormatError: If a script config exists but Prettier cannot load it.
    """
    cwd = Path.cwd() if cwd is None else Path(cwd)

    executable = find_prettier(cwd)
    if executable is None:
        raise FormatterNotFoundError(
            "Could not find Prettier. Install it in your project (npm install --save-dev prettier) "
            "or globally and try again."
        )

    options = await resolve_prettier_config(cwd, executable)
    if options is None and config is not None and config.prettier_config:
        options = config.prettier_config
    if options is None:
        options = DEFAULT_PRETTIER_OPTIONS

    return Formatter(sanitize_prettier_config(options, lang), executable, cwd=cwd)

"""new-component configuration.

The effective configuration is built once per invocation from three layers:
built-in defaults, an override file in the user's home directory, and an
override file in the current working directory.  Later layers win key by key
(a shallow merge).  Override files are a best-effort convenience: a missing or
unreadable file is treated as if it were empty, and a key with an invalid
value is ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from new_component.utils import load_json, load_module_attribute, print_debug

CONFIG_FILENAME = ".new-component-config.json"

DEFAULTS: dict[str, Any] = {"lang": "ts", "dir": "src/components"}

# Module-form override files expose their settings under this name.
MODULE_CONFIG_ATTRIBUTE = "CONFIG"


class Configuration(BaseModel):
    """Resolved settings for one invocation.

    ``lang`` is deliberately a plain string: the CLI validates it when it is
    used as the default for ``--lang``, so an odd value in an override file
    surfaces as a usage error rather than disappearing here.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    lang: str = Field(default=DEFAULTS["lang"])
    dir: str = Field(default=DEFAULTS["dir"])
    prettier_config: dict[str, Any] | None = Field(default=None, alias="prettierConfig")

    def as_dict(self) -> dict[str, Any]:
        """Return the merged mapping using the on-disk key names."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Override files
# ---------------------------------------------------------------------------


def load_override(path: str | Path) -> dict[str, Any]:
    """Load an override file, or return ``{}``.

    ``.json`` files are parsed directly; ``.py`` files are executed and their
    module-level ``CONFIG`` mapping is used.  Anything else, and any failure
    to read or parse, yields an empty mapping.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return {}

    suffix = file_path.suffix.lower()
    try:
        if suffix == ".json":
            data = load_json(file_path)
        elif suffix == ".py":
            data = load_module_attribute(file_path, MODULE_CONFIG_ATTRIBUTE)
        else:
            print_debug(f"Ignoring unsupported override file {file_path}")
            return {}
    except Exception as exc:
        # Override files never abort a run.
        print_debug(f"Ignoring unreadable override file {file_path}: {exc}")
        return {}

    if not isinstance(data, dict):
        print_debug(f"Ignoring override file {file_path}: top level is not a mapping")
        return {}
    return dict(data)


def config_paths(home: Path, cwd: Path) -> list[Path]:
    """Return the override files in increasing order of precedence."""
    return [home / CONFIG_FILENAME, cwd / CONFIG_FILENAME]


def valid_override(merged: dict[str, Any], override: dict[str, Any], path: Path) -> dict[str, Any]:
    """Return the keys of *override* that can be merged into *merged*.

    Keys whose values fail validation are dropped and the remaining keys
    still apply.  If the remainder is still invalid the whole layer is ignored.
    """
    try:
        Configuration.model_validate({**merged, **override})
        return override
    except ValidationError as exc:
        invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}

    print_debug(f"Ignoring invalid value(s) for {', '.join(sorted(invalid))} in {path}")
    pruned = {key: value for key, value in override.items() if key not in invalid}
    try:
        Configuration.model_validate({**merged, **pruned})
    except ValidationError:
        print_debug(f"Ignoring override file {path}")
        return {}
    return pruned


def resolve_config(home: Path | None = None, cwd: Path | None = None) -> Configuration:
    """Merge defaults with the home and working-directory override files.

    Args:
        home: Directory holding the user-level override.  Defaults to
            ``Path.home()``.
        cwd: Directory holding the project-level override.  Defaults to
            ``Path.cwd()``.

    Returns:
        A fully populated ``Configuration``.  This function never raises
        because of override files.
    """
    home = Path.home() if home is None else Path(home)
    cwd = Path.cwd() if cwd is None else Path(cwd)

    merged: dict[str, Any] = dict(DEFAULTS)
    for path in config_paths(home, cwd):
        merged.update(valid_override(merged, load_override(path), path))

    return Configuration.model_validate(merged)

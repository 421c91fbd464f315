"""Exceptions raised while materializing a component.

Everything the CLI reports to the user derives from :class:`ComponentError`.
Plain ``OSError`` from directory or file creation is not wrapped and
propagates unchanged.
"""

from __future__ import annotations

from pathlib import Path


class ComponentError(Exception):
    """Base class for every error the tool reports to the user."""


class UsageError(ComponentError):
    """Raised when a required argument (the component name) is missing."""


class CollisionError(ComponentError):
    """Raised when the target directory or file already exists."""

    def __init__(self, path: Path, kind: str = "file") -> None:
        self.path = path
        self.kind = kind
        super().__init__(
            f"Looks like this component already exists! There's already a {kind} "
            f"at {path}. Please delete it and try again."
        )


class TemplateNotFoundError(ComponentError, FileNotFoundError):
    """Raised when no template exists for the requested language."""


class FormatError(ComponentError):
    """Raised when the formatting engine rejects the generated source."""


class FormatterNotFoundError(FormatError):
    """Raised when no Prettier executable can be located."""

"""Command-line entry point.

Usage::

    new-component Button
    new-component Button --lang js --dir app/components
    new-component Button --barrel
"""

from __future__ import annotations

import argparse
import asyncio
import re
import sys
from pathlib import Path

from new_component import __version__
from new_component.config import Configuration, resolve_config
from new_component.errors import ComponentError
from new_component.formatter import build_formatter
from new_component.reporter import ConsoleReporter
from new_component.scaffolder import (
    ComponentGenerator,
    ComponentRequest,
    TemplateRenderer,
    require_component_name,
)

LANG_PATTERN = re.compile(r"^(js|ts)$", re.IGNORECASE)


def parse_lang(value: str) -> str:
    """argparse ``type`` for ``--lang``: accepts js/ts in any case."""
    if not LANG_PATTERN.match(value):
        raise argparse.ArgumentTypeError(f"invalid language {value!r} (choose from 'js', 'ts')")
    return value.lower()


def build_parser(config: Configuration) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from *config*."""
    parser = argparse.ArgumentParser(
        prog="new-component",
        description="Create a new React component from a template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  new-component Button\n"
            "  new-component Button --lang js --dir app/components\n"
            "  new-component Button --barrel\n"
        ),
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "component_name",
        nargs="?",
        metavar="componentName",
        help="Name of the component to create",
    )
    parser.add_argument(
        "--lang", "-l",
        type=parse_lang,
        default=config.lang,
        metavar="language",
        help=(
            f"Which language to use, one of {', '.join(TemplateRenderer().list_templates())} "
            f'(default: "{config.lang}")'
        ),
    )
    parser.add_argument(
        "--dir", "-d",
        default=config.dir,
        metavar="pathToDirectory",
        help=f'Path to the "components" directory (default: "{config.dir}")',
    )
    parser.add_argument(
        "--barrel",
        action="store_true",
        help="Create a folder with index file (barrel export)",
    )
    return parser


async def run(request: ComponentRequest, config: Configuration, reporter: ConsoleReporter) -> None:
    """Build the formatter and materialize one component."""
    formatter = await build_formatter(request.lang, config)
    generator = ComponentGenerator(formatter=formatter, reporter=reporter)
    await generator.materialize(request)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``new-component``."""
    config = resolve_config()
    args = build_parser(config).parse_args(argv)
    reporter = ConsoleReporter()

    try:
        name = require_component_name(args.component_name)
        request = ComponentRequest(
            name=name,
            lang=args.lang,
            base_dir=Path(args.dir),
            use_barrel=args.barrel,
        )
        asyncio.run(run(request, config, reporter))
    except (ComponentError, OSError) as exc:
        reporter.error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()

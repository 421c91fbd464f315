"""Allow ``python -m new_component``."""

from new_component.cli import main

main()

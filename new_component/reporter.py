"""Console reporting for the component generator.

The generator emits four kinds of events: an intro describing what is about
to be created, one completion line per finished step, a conclusion, and
errors.  :class:`ConsoleReporter` renders them with Rich.
"""

from __future__ import annotations

import random

from rich.console import Console
from rich.text import Text

from new_component.utils import console as default_console

COLORS: dict[str, str] = {
    "red": "rgb(216,16,16)",
    "green": "rgb(142,215,0)",
    "blue": "rgb(0,186,255)",
    "gold": "rgb(255,204,0)",
    "medium_gray": "rgb(128,128,128)",
    "dark_gray": "rgb(90,90,90)",
}

LANG_NAMES: dict[str, str] = {
    "js": "JavaScript",
    "ts": "TypeScript",
}

AFFIRMATIONS: list[str] = [
    "Perfect!",
    "You're doing great!",
    "Nice work!",
    "Another one in the books!",
    "Looking good!",
    "Keep it up!",
    "Fantastic!",
    "Well done!",
    "That's a clean component.",
    "Ship it!",
    "Onwards and upwards!",
    "Your future self thanks you.",
]


class ConsoleReporter:
    """Prints generator lifecycle events to a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def _lang_line(self, selected: str) -> Text:
        line = Text()
        for index, (option, label) in enumerate(LANG_NAMES.items()):
            if index:
                line.append("  ")
            if option == selected:
                line.append(label, style=f"bold {COLORS['blue']}")
            else:
                line.append(label, style=COLORS["dark_gray"])
        return line

    def intro(self, name: str, directory: str, lang: str) -> None:
        self.console.print()
        title = Text("✨  Creating the ")
        title.append(name, style=f"bold {COLORS['gold']}")
        title.append(" component ✨")
        self.console.print(title)
        self.console.print()
        self.console.print(Text("Directory:  ").append(str(directory), style=f"bold {COLORS['blue']}"))
        self.console.print(Text("Language:   ").append_text(self._lang_line(lang)))
        self.console.print(Text("=" * 41, style=COLORS["dark_gray"]))
        self.console.print()

    def item_completion(self, text: str) -> None:
        line = Text("✓", style=COLORS["green"])
        line.append(f" {text}")
        self.console.print(line)

    def conclusion(self) -> None:
        self.console.print()
        self.console.print(Text("Component created!", style=f"bold {COLORS['green']}"))
        self.console.print(Text(random.choice(AFFIRMATIONS), style=COLORS["medium_gray"]))
        self.console.print()

    def error(self, message: str) -> None:
        self.console.print()
        self.console.print(Text("Error creating component.", style=f"bold {COLORS['red']}"))
        self.console.print(Text(str(message), style=COLORS["red"]))
        self.console.print()

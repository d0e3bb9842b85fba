"""
PPQ Assistant Snippet Selector
Lists the most recent executable snippets and lets the user pick one with
single keystrokes while the terminal is in raw mode.
"""

import os
import select
import sys
from enum import Enum
from typing import List, Optional, TextIO

from rich.console import Console
from rich.control import Control
from rich.text import Text

from languages import find_language
from snippets import CodeSnippet, recent_snippets

# Raw keystroke reading is Unix only
try:
    import termios
    import tty
    HAS_TERMIOS = True
except ImportError:
    HAS_TERMIOS = False

PREVIEW_LINES = 3
ESCAPE_TIMEOUT = 0.05

_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}


class Phase(Enum):
    BROWSING = "browsing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class SelectionState:
    """Cursor and outcome of one selection session"""

    def __init__(self, count: int):
        if count < 1:
            raise ValueError("Nothing to select from")
        self.count = count
        self.cursor = 0
        self.phase = Phase.BROWSING
        self.choice: Optional[int] = None

    @property
    def done(self) -> bool:
        return self.phase is not Phase.BROWSING

    def handle(self, key: str) -> None:
        """Apply one decoded key. Keys arriving after a terminal phase are ignored."""
        if self.done:
            return

        if len(key) == 1 and key in "0123456789":
            index = int(key)
            if index < self.count:
                self._confirm(index)
        elif key == "left":
            if self.cursor > 0:
                self.cursor -= 1
        elif key == "right":
            if self.cursor < self.count - 1:
                self.cursor += 1
        elif key == "enter":
            self._confirm(self.cursor)
        elif key in ("esc", "c", "ctrl-c"):
            # A bare "c" cancels as well. Ctrl+C is an addition to the Esc/c
            # pair: raw mode delivers it as a key instead of SIGINT, so it
            # would otherwise be a no-op and leave no way to interrupt.
            self.phase = Phase.CANCELLED

    def _confirm(self, index: int) -> None:
        self.choice = index
        self.phase = Phase.CONFIRMED


class KeyReader:
    """
    Raw-mode keystroke reader.

    Used as a context manager: entering switches the terminal to raw mode
    and exiting always restores the saved attributes, whatever happened
    inside the block.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self.fd = self.stream.fileno()
        self._saved = None

    def __enter__(self) -> "KeyReader":
        self._saved = termios.tcgetattr(self.fd)
        tty.setraw(self.fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None
        return False

    def _read_char(self) -> str:
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("stdin closed")
        return data.decode(errors="ignore")

    def _pending(self) -> bool:
        return bool(select.select([self.fd], [], [], ESCAPE_TIMEOUT)[0])

    def read_key(self) -> str:
        """Block until one key arrives and return its decoded name"""
        ch = self._read_char()
        if ch in ("\r", "\n"):
            return "enter"
        if ch == "\x03":
            return "ctrl-c"
        if ch != "\x1b":
            return ch

        if not self._pending():
            return "esc"
        lead = self._read_char()
        if lead == "[":
            return self._read_csi()
        if lead == "O" and self._pending():
            return _ARROWS.get(self._read_char(), "unknown")
        # Alt+key and other ESC-prefixed input
        return "unknown"

    def _read_csi(self) -> str:
        """Consume a whole ESC [ sequence; only unparameterised A-D are arrows"""
        body = ""
        while self._pending():
            ch = self._read_char()
            body += ch
            if "\x40" <= ch <= "\x7e":
                if len(body) == 1:
                    return _ARROWS.get(ch, "unknown")
                return "unknown"
        return "unknown"


def can_select(stream: Optional[TextIO] = None) -> bool:
    """Raw keystroke selection needs an interactive terminal on stdin"""
    if not HAS_TERMIOS:
        return False
    stream = stream or sys.stdin
    try:
        return stream.isatty()
    except ValueError:
        return False


def render_snippets(snippets: List[CodeSnippet], console: Console) -> None:
    """Print the numbered snippet list with a short preview of each body"""
    console.print("\n[bold green]Select a code snippet to execute:[/bold green]")

    for i, snippet in enumerate(snippets):
        language = find_language(snippet.language)
        lines = snippet.code.splitlines()
        console.print(
            f"[bold cyan]{i}[/bold cyan]: [bold yellow]{language.name}[/bold yellow] "
            f"snippet ({len(lines)} lines)"
        )
        for line in lines[:PREVIEW_LINES]:
            console.print(Text(f"   {line.strip()}"))
        if len(lines) > PREVIEW_LINES:
            console.print("   ...")
        console.print()


def render_status(state: SelectionState, console: Console) -> None:
    """Redraw the single-line index bar with the cursor highlighted"""
    bar = Text()
    for i in range(state.count):
        if i == state.cursor:
            bar.append("[")
            bar.append(str(i), style="bold green")
            bar.append("] ")
        else:
            bar.append(f" {i}  ", style="cyan")
    console.control(Control.move_to_column(0))
    console.print(bar, end="")


def select_snippet(
    snippets: List[CodeSnippet],
    console: Optional[Console] = None,
    keys: Optional[KeyReader] = None,
) -> Optional[CodeSnippet]:
    """
    Let the user pick one of the most recent snippets.

    Args:
        snippets: Executable snippets in order of appearance
        console: Where the list and status bar are drawn
        keys: Key source used as a context manager (defaults to a raw-mode stdin reader)

    Returns:
        The chosen snippet, or None if the user cancelled
    """
    console = console or Console()
    displayed = recent_snippets(snippets)
    if not displayed:
        return None

    render_snippets(displayed, console)
    console.print(
        "Press a number key (0-9) to select, or use arrow keys and Enter. Esc or c to abort."
    )

    state = SelectionState(len(displayed))
    keys = keys or KeyReader()
    with keys:
        while not state.done:
            render_status(state, console)
            state.handle(keys.read_key())
    console.print()

    if state.phase is Phase.CONFIRMED:
        return displayed[state.choice]
    return None

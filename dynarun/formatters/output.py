"""Output formatter - the styled writer behind the dynamic renderer.

Provides a centralized writer that owns the Rich console. Callers build
Rich Text objects with semantic styles ("green", "dim cyan", ...) and hand
them to the writer, which emits them as whole terminal lines. Cursor
movement for erasing the pinned footer goes through the same console so
that one buffered update reaches the stream in a single flush.

Usage:
    output = OutputFormatter(no_color=False)
    with output.batch():
        output.erase_lines(3)
        output.write_line(output.apply_prefix("cyan", Text("Running")))
"""

from contextlib import contextmanager
from typing import IO, Iterator, Optional, Union

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text

from .symbols import SymbolsFormatter

# Erase the entire current line
ERASE_WHOLE_LINE = 2

# Rich has no "gray" in the standard palette; bright black is the terminal gray
GRAY = "bright_black"


class OutputFormatter:
    """Central styled writer that manages the Rich console and glyphs.

    Attributes:
        console: The Rich console for output
        symbols: SymbolsFormatter for Unicode/ASCII glyphs
    """

    X_PADDING = " "

    def __init__(
        self,
        no_color: bool = False,
        console: Optional[Console] = None,
        file: Optional[IO[str]] = None,
        cli_name: str = "RUN",
    ):
        """Initialize the output formatter.

        Args:
            no_color: If True, disable all colors in output
            console: Console to write to (created when not given). no_color is
                applied to a given console as well
            file: Stream for a newly created console (defaults to stdout)
            cli_name: Name shown in the inverse banner prefix
        """
        self._no_color = no_color
        self._console = console or Console(
            file=file,
            no_color=no_color,
            force_terminal=None,
            highlight=False,
        )
        if no_color:
            self._console.no_color = True
        self._symbols = SymbolsFormatter(encoding=self._console.encoding)
        self.cli_name = cli_name

    @property
    def console(self) -> Console:
        """Get the underlying Rich console."""
        return self._console

    @property
    def symbols(self) -> SymbolsFormatter:
        return self._symbols

    @property
    def no_color(self) -> bool:
        return self._no_color

    @property
    def width(self) -> int:
        """Current terminal column count, read live on every call."""
        return self._console.width

    # =========================================================================
    # Styled fragments
    # =========================================================================

    def apply_prefix(self, color: str, text: Union[str, Text]) -> Text:
        """Prefix text with the "> NAME " banner in the given color."""
        line = Text()
        line.append(">", style=color)
        line.append(" ")
        line.append(f" {self.cli_name} ", style=f"reverse bold {color}")
        line.append("  ")
        line.append(text if isinstance(text, Text) else Text(text))
        return line

    def vertical_separator(self, color: str = "cyan") -> Text:
        """Horizontal rule spanning the terminal width inside the X padding."""
        length = max(0, self.width - len(self.X_PADDING) * 2)
        return Text(self._symbols.Rule * length, style=f"dim {color}")

    # =========================================================================
    # Stream writes
    # =========================================================================

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Buffer all writes inside the block and flush them at once."""
        with self._console:
            yield
        self.drain()

    def write_line(self, line: Union[str, Text]) -> None:
        """Write one line of the pinned footer, cropped to the terminal width.

        Footer lines never wrap, so each call occupies exactly one row.
        Embedded newlines are folded into spaces.
        """
        text = Text(self.X_PADDING)
        text.append(line if isinstance(line, Text) else Text(line))
        if "\n" in text.plain:
            text = Text(" ").join(text.split("\n", allow_blank=True))
        self._console.print(text, no_wrap=True, overflow="ellipsis", crop=True, highlight=False)

    def write_scrollback(self, line: Union[str, Text]) -> None:
        """Write a permanent line above the footer."""
        text = Text(self.X_PADDING)
        text.append(line if isinstance(line, Text) else Text(line))
        self._console.print(text, soft_wrap=True, highlight=False)

    def add_newline(self) -> None:
        self._console.print(soft_wrap=True)

    def erase_lines(self, count: int) -> None:
        """Move up and clear ``count`` lines, from the bottom line upward."""
        controls = []
        for _ in range(count):
            controls.append(Control.move(0, -1))
            controls.append(Control((ControlType.ERASE_IN_LINE, ERASE_WHOLE_LINE)))
        if controls:
            self._console.control(*controls)

    def show_cursor(self, show: bool = True) -> None:
        self._console.show_cursor(show)

    def drain(self) -> None:
        """Wait for the stream to accept buffered writes."""
        file = self._console.file
        flush = getattr(file, "flush", None)
        if flush is not None:
            flush()

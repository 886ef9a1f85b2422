"""Pinned footer region at the bottom of the terminal.

The footer is redrawn in place using relative cursor movement only. Every
update follows the same order:

    erase old footer -> write new scrollback lines -> draw new footer

so scrollback always lands above the footer and is never interleaved with
it. The number of lines drawn is recorded with every draw; ``erase()``
walks back exactly that many lines.
"""

from typing import Sequence, Union

from rich.text import Text

from ..formatters import OutputFormatter

Line = Union[str, Text]


class FooterRegion:
    """Tracks and redraws the lines pinned under the scrollback.

    Attributes:
        pinned_line_count: Terminal lines currently occupied by the footer,
            including the trailing blank line reserved for the cursor
        has_emitted_scrollback: True once any permanent line was written
    """

    def __init__(self, output: OutputFormatter):
        self._output = output
        self.pinned_line_count = 0
        self.has_emitted_scrollback = False

    def erase(self) -> None:
        """Clear the footer, from the bottom line upward."""
        self._output.erase_lines(self.pinned_line_count)
        self.pinned_line_count = 0

    def render(self, lines: Sequence[Line]) -> None:
        """Draw a new footer under the cursor.

        Nothing is drawn for an empty list. Otherwise every line is written
        followed by one blank line as a resting place for the cursor.
        The caller must have erased the previous footer.
        """
        if not lines:
            self.pinned_line_count = 0
            return

        for line in lines:
            self._output.write_line(line)
        self._output.write_line("")
        self.pinned_line_count = len(lines) + 1

    def redraw(self, lines: Sequence[Line]) -> None:
        """Erase the current footer and draw ``lines`` in its place."""
        with self._output.batch():
            self.erase()
            self.render(lines)

    def write_scrollback(self, lines: Sequence[Line]) -> None:
        """Write permanent lines. Only valid while the footer is erased."""
        if self.pinned_line_count:
            raise RuntimeError("Scrollback must be written after the footer is erased")
        for line in lines:
            if isinstance(line, str) and line == "":
                self._output.add_newline()
            else:
                self._output.write_scrollback(line)
        if lines:
            self.has_emitted_scrollback = True

    def write_report(self, lines: Sequence[Line]) -> None:
        """Replace the footer with a permanent report.

        Report lines wrap instead of being cropped and are never erased. A
        trailing blank line leaves the cursor below the report.
        """
        self.erase()
        self.write_scrollback([*lines, ""])

    def divider_rows(self, color: str = "cyan") -> list[Line]:
        """Rows separating the footer from preceding scrollback.

        Empty before the first scrollback line. The rule is measured
        against the terminal width at the time of the call.
        """
        if not self.has_emitted_scrollback:
            return []
        return ["", self._output.vertical_separator(color), ""]

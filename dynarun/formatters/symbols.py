"""Glyph definitions with ASCII fallbacks.

Provides a clean API for accessing glyphs that automatically fall back
to ASCII when the output stream cannot carry Unicode.

Usage:
    symbols = SymbolsFormatter(encoding="utf-8")
    print(symbols.Tick)     # Returns "✔" or "√"
    print(symbols.frame(3)) # Returns "⠸" or "/"
"""

import platform
from dataclasses import dataclass
from functools import cached_property


@dataclass(frozen=True)
class Symbol:
    """A glyph with an ASCII fallback."""

    unicode: str
    ascii: str


class Symbols:
    """Glyph definitions as class attributes."""

    # Status indicators
    Tick = Symbol("✔", "√")
    Cross = Symbol("✖", "×")
    ArrowRight = Symbol("→", "->")

    # Long dash which forms a continuous line when placed side by side
    Rule = Symbol("—", "-")

    # Spinner animation, one frame per tick
    SpinnerFrames = (
        Symbol("⠋", "-"),
        Symbol("⠙", "\\"),
        Symbol("⠹", "|"),
        Symbol("⠸", "/"),
        Symbol("⠼", "-"),
        Symbol("⠴", "\\"),
        Symbol("⠦", "|"),
        Symbol("⠧", "/"),
        Symbol("⠇", "-"),
        Symbol("⠏", "\\"),
    )


class SymbolsFormatter:
    """Provides glyphs with automatic Unicode/ASCII fallback.

    Unicode is used when the stream encoding can carry it and the platform
    console renders it reliably.
    """

    def __init__(self, encoding: str = "utf-8", force_ascii: bool = False):
        """Initialize the symbols formatter.

        Args:
            encoding: Encoding of the output stream
            force_ascii: If True, always use ASCII glyphs
        """
        self._encoding = (encoding or "").lower()
        self._force_ascii = force_ascii

    @cached_property
    def supports_unicode(self) -> bool:
        """Detect if the output stream supports the Unicode glyphs."""
        if self._force_ascii:
            return False

        if platform.system() == "Windows":
            return False

        unicode_encodings = ["utf-8", "utf8", "utf-16", "utf16"]
        return any(enc in self._encoding for enc in unicode_encodings)

    def _resolve(self, symbol: Symbol) -> str:
        """Resolve a symbol to Unicode or ASCII based on support."""
        return symbol.unicode if self.supports_unicode else symbol.ascii

    def get(self, symbol: Symbol) -> str:
        """Get the resolved glyph string."""
        return self._resolve(symbol)

    @property
    def frame_count(self) -> int:
        return len(Symbols.SpinnerFrames)

    def frame(self, index: int) -> str:
        """Get the spinner glyph for a frame index (wraps around)."""
        return self._resolve(Symbols.SpinnerFrames[index % self.frame_count])

    @property
    def Tick(self) -> str:
        return self._resolve(Symbols.Tick)

    @property
    def Cross(self) -> str:
        return self._resolve(Symbols.Cross)

    @property
    def ArrowRight(self) -> str:
        return self._resolve(Symbols.ArrowRight)

    @property
    def Rule(self) -> str:
        return self._resolve(Symbols.Rule)

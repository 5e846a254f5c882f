"""Text storage and layout used by the text editing engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

NEWLINE = "\n"


@dataclass
class Row:
    """Layout of one displayed row of characters."""

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


class TextBuffer(ABC):
    """The string being edited, plus the layout queries the editor needs."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of characters in the buffer."""

    @abstractmethod
    def char_at(self, index: int) -> str:
        """The character at ``index``."""

    @abstractmethod
    def layout_row(self, start: int) -> Row:
        """Lay out the row of characters that begins at ``start``."""

    @abstractmethod
    def char_width(self, row_start: int, offset: int) -> float:
        """Advance of the character ``offset`` places into the row at ``row_start``."""

    @abstractmethod
    def delete(self, index: int, count: int) -> None:
        """Remove ``count`` characters starting at ``index``."""

    @abstractmethod
    def insert(self, index: int, chars: Iterable[str]) -> bool:
        """Insert ``chars`` at ``index``; return False if they do not fit."""

    def next_index(self, index: int) -> int:
        """Index of the character after ``index``."""
        return index + 1

    def prev_index(self, index: int) -> int:
        """Index of the character before ``index``."""
        return index - 1

    def is_space(self, char: str) -> bool:
        """Whether ``char`` separates words."""
        return char.isspace()


class MonospaceBuffer(TextBuffer):
    """A plain string laid out with fixed-width glyphs and hard line breaks."""

    def __init__(
        self,
        text: str = "",
        char_width: float = 1.0,
        line_height: float = 1.0,
        max_length: int | None = None,
    ) -> None:
        if char_width <= 0:
            raise ValueError("char_width must be positive")
        if line_height <= 0:
            raise ValueError("line_height must be positive")
        if max_length is not None and max_length < 0:
            raise ValueError("max_length must not be negative")
        if max_length is not None and len(text) > max_length:
            raise ValueError("text is longer than max_length")
        self._chars = list(text)
        self.glyph_width = float(char_width)
        self.line_height = float(line_height)
        self.max_length = max_length

    def __len__(self) -> int:
        return len(self._chars)

    def char_at(self, index: int) -> str:
        if not 0 <= index < len(self._chars):
            raise IndexError(f"index {index} out of range")
        return self._chars[index]

    def _row_end(self, start: int) -> int:
        try:
            return self._chars.index(NEWLINE, start) + 1
        except ValueError:
            return len(self._chars)

    def layout_row(self, start: int) -> Row:
        if start < 0:
            raise IndexError(f"row start {start} out of range")
        end = self._row_end(start) if start < len(self._chars) else start
        width = sum(
            self.glyph_width for ch in self._chars[start:end] if ch != NEWLINE
        )
        return Row(
            x0=0.0,
            x1=width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=end - start,
        )

    def char_width(self, row_start: int, offset: int) -> float:
        return 0.0 if self.char_at(row_start + offset) == NEWLINE else self.glyph_width

    def delete(self, index: int, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        if index < 0 or index + count > len(self._chars):
            raise IndexError(f"cannot delete {count} characters at {index}")
        del self._chars[index:index + count]

    def insert(self, index: int, chars: Iterable[str]) -> bool:
        if not 0 <= index <= len(self._chars):
            raise IndexError(f"index {index} out of range")
        new = list(chars)
        if self.max_length is not None and len(self._chars) + len(new) > self.max_length:
            return False
        self._chars[index:index] = new
        return True

    def next_index(self, index: int) -> int:
        """Index of the character after ``index``; one place per character."""
        return index + 1

    def prev_index(self, index: int) -> int:
        """Index of the character before ``index``; one place per character."""
        return index - 1

    def is_space(self, char: str) -> bool:
        """Whether ``char`` is whitespace."""
        return char.isspace()

    def text(self) -> str:
        """The buffer contents as a string."""
        return "".join(self._chars)
"""Cursor, selection and keyboard handling for an editable text field."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum

from .buffer import NEWLINE, TextBuffer
from .undo import UndoState


class Key(IntEnum):
    """Editing keys. Combine with ``Key.SHIFT`` to extend the selection."""

    LEFT = 1
    RIGHT = 2
    UP = 3
    DOWN = 4
    PGUP = 5
    PGDOWN = 6
    LINESTART = 7
    LINEEND = 8
    TEXTSTART = 9
    TEXTEND = 10
    DELETE = 11
    BACKSPACE = 12
    UNDO = 13
    REDO = 14
    INSERT = 15
    WORDLEFT = 16
    WORDRIGHT = 17
    SHIFT = 0x10000


@dataclass
class FindState:
    """Where a character sits in the layout, and where its row starts."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextEditor:
    """Maps mouse and keyboard input onto edits of a ``TextBuffer``."""

    def __init__(self, buffer: TextBuffer, single_line: bool = False) -> None:
        self.buffer = buffer
        self.undo_state = UndoState()
        self.reset(single_line)

    def reset(self, single_line: bool = False) -> None:
        """Return cursor, selection, modes and history to their defaults."""
        self.undo_state.reset()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        """Whether some text is selected."""
        return self.select_start != self.select_end

    # ----------------------------------------------------------- layout queries

    def locate_coord(self, x: float, y: float) -> int:
        """The character index nearest to the display position ``(x, y)``."""
        buf = self.buffer
        n = len(buf)
        base_y = 0.0
        i = 0
        row = None
        while i < n:
            row = buf.layout_row(i)
            if row.num_chars <= 0:
                return n
            if i == 0 and y < base_y + row.ymin:
                return 0
            if y < base_y + row.ymax:
                break
            i += row.num_chars
            base_y += row.baseline_y_delta

        if i >= n or row is None:
            return n

        if x < row.x0:
            return i

        if x < row.x1:
            prev_x = row.x0
            k = 0
            while k < row.num_chars:
                w = buf.char_width(i, k)
                if x < prev_x + w:
                    if x < prev_x + w / 2:
                        return k + i
                    return buf.next_index(i + k)
                prev_x += w
                k = buf.next_index(i + k) - i

        if buf.char_at(i + row.num_chars - 1) == NEWLINE:
            return i + row.num_chars - 1
        return i + row.num_chars

    def find_charpos(self, n: int) -> FindState:
        """Locate character ``n`` and the start of the row before it."""
        buf = self.buffer
        z = len(buf)
        find = FindState()

        if n == z and self.single_line:
            row = buf.layout_row(0)
            find.length = z
            find.height = row.ymax - row.ymin
            find.x = row.x1
            return find

        prev_start = 0
        i = 0
        while True:
            row = buf.layout_row(i)
            length = row.num_chars
            if n < i + length:
                break
            if i + length == z and z > 0 and buf.char_at(z - 1) != NEWLINE:
                break
            prev_start = i
            i += length
            find.y += row.baseline_y_delta
            if i == z:
                length = 0
                break

        first = i
        find.first_char = first
        find.length = length
        find.height = row.ymax - row.ymin
        find.prev_first = prev_start

        find.x = row.x0
        offset = 0
        while first + offset < n:
            find.x += buf.char_width(first, offset)
            offset = buf.next_index(first + offset) - first
        return find

    # ------------------------------------------------------ selection helpers

    def clamp(self) -> None:
        """Keep cursor and selection inside the buffer after outside changes."""
        n = len(self.buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def _delete(self, where: int, length: int) -> None:
        self.undo_state.make_delete(self.buffer, where, length)
        self.buffer.delete(where, length)
        self.has_preferred_x = False

    def _delete_selection(self) -> None:
        self.clamp()
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.clamp()
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    def _is_word_boundary(self, index: int) -> bool:
        if index <= 0:
            return True
        buf = self.buffer
        return buf.is_space(buf.char_at(index - 1)) and not buf.is_space(buf.char_at(index))

    def _word_left(self, c: int) -> int:
        buf = self.buffer
        c = buf.prev_index(c)
        while c >= 0 and not self._is_word_boundary(c):
            c = buf.prev_index(c)
        return max(c, 0)

    def _word_right(self, c: int) -> int:
        buf = self.buffer
        length = len(buf)
        c = buf.next_index(c)
        while c < length and not self._is_word_boundary(c):
            c = buf.next_index(c)
        return min(c, length)

    # --------------------------------------------------------------- mouse API

    def _single_line_y(self, y: float) -> float:
        if self.single_line:
            return self.buffer.layout_row(0).ymin
        return y

    def click(self, x: float, y: float) -> None:
        """Move the cursor to the clicked position and clear the selection."""
        y = self._single_line_y(y)
        self.cursor = self.locate_coord(x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, x: float, y: float) -> None:
        """Extend the selection to the dragged-to position."""
        y = self._single_line_y(y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        p = self.locate_coord(x, y)
        self.cursor = self.select_end = p

    # ----------------------------------------------------------------- editing

    def cut(self) -> bool:
        """Delete the selection; return whether there was one."""
        if self.has_selection():
            self._delete_selection()
            self.has_preferred_x = False
            return True
        return False

    def paste(self, chars: Iterable[str]) -> bool:
        """Replace the selection with ``chars``; return False if they do not fit."""
        new = list(chars)
        self.clamp()
        self._delete_selection()
        if self.buffer.insert(self.cursor, new):
            self.undo_state.make_insert(self.cursor, len(new))
            self.cursor += len(new)
            self.has_preferred_x = False
            return True
        return False

    def text(self, chars: Iterable[str]) -> None:
        """Type ``chars`` at the cursor, honouring selection and insert mode."""
        new = list(chars)
        if new and new[0] == NEWLINE and self.single_line:
            return
        buf = self.buffer
        if self.insert_mode and not self.has_selection() and self.cursor < len(buf):
            self.undo_state.make_replace(buf, self.cursor, 1, 1)
            buf.delete(self.cursor, 1)
            if buf.insert(self.cursor, new):
                self.cursor += len(new)
                self.has_preferred_x = False
        else:
            self._delete_selection()
            if buf.insert(self.cursor, new):
                self.undo_state.make_insert(self.cursor, len(new))
                self.cursor += len(new)
                self.has_preferred_x = False

    def undo(self) -> None:
        """Revert the latest edit."""
        pos = self.undo_state.undo(self.buffer)
        if pos is not None:
            self.cursor = pos
        self.has_preferred_x = False

    def redo(self) -> None:
        """Reapply the latest undone edit."""
        pos = self.undo_state.redo(self.buffer)
        if pos is not None:
            self.cursor = pos
        self.has_preferred_x = False

    # ---------------------------------------------------------------- keyboard

    def key(self, key: int) -> None:
        """Handle one editing key, possibly combined with ``Key.SHIFT``."""
        shift = bool(key & Key.SHIFT)
        base = key & ~Key.SHIFT
        buf = self.buffer

        if base == Key.INSERT and not shift:
            self.insert_mode = not self.insert_mode
        elif base == Key.UNDO and not shift:
            self.undo()
        elif base == Key.REDO and not shift:
            self.redo()
        elif base == Key.LEFT and not shift:
            if self.has_selection():
                self._move_to_first()
            elif self.cursor > 0:
                self.cursor = buf.prev_index(self.cursor)
            self.has_preferred_x = False
        elif base == Key.RIGHT and not shift:
            if self.has_selection():
                self._move_to_last()
            else:
                self.cursor = buf.next_index(self.cursor)
            self.clamp()
            self.has_preferred_x = False
        elif base == Key.LEFT:
            self.clamp()
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end = buf.prev_index(self.select_end)
            self.cursor = self.select_end
            self.has_preferred_x = False
        elif base == Key.RIGHT:
            self._prep_selection_at_cursor()
            self.select_end = buf.next_index(self.select_end)
            self.clamp()
            self.cursor = self.select_end
            self.has_preferred_x = False
        elif base in (Key.WORDLEFT, Key.WORDRIGHT):
            self._word_key(base == Key.WORDLEFT, shift)
        elif base in (Key.DOWN, Key.PGDOWN):
            if base == Key.DOWN and self.single_line:
                self.key(Key.RIGHT | (key & Key.SHIFT))
                return
            self._move_down(base == Key.PGDOWN, shift)
        elif base in (Key.UP, Key.PGUP):
            if base == Key.UP and self.single_line:
                self.key(Key.LEFT | (key & Key.SHIFT))
                return
            self._move_up(base == Key.PGUP, shift)
        elif base == Key.DELETE:
            if self.has_selection():
                self._delete_selection()
            elif self.cursor < len(buf):
                self._delete(self.cursor, buf.next_index(self.cursor) - self.cursor)
            self.has_preferred_x = False
        elif base == Key.BACKSPACE:
            if self.has_selection():
                self._delete_selection()
            else:
                self.clamp()
                if self.cursor > 0:
                    prev = buf.prev_index(self.cursor)
                    self._delete(prev, self.cursor - prev)
                    self.cursor = prev
            self.has_preferred_x = False
        elif base == Key.TEXTSTART:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.TEXTEND:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = len(buf)
            else:
                self.cursor = len(buf)
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.LINESTART:
            self.clamp()
            if shift:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if self.single_line:
                self.cursor = 0
            else:
                while self.cursor > 0 and buf.char_at(self.cursor - 1) != NEWLINE:
                    self.cursor = buf.prev_index(self.cursor)
            if shift:
                self.select_end = self.cursor
            self.has_preferred_x = False
        elif base == Key.LINEEND:
            n = len(buf)
            self.clamp()
            if shift:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if self.single_line:
                self.cursor = n
            else:
                while self.cursor < n and buf.char_at(self.cursor) != NEWLINE:
                    self.cursor = buf.next_index(self.cursor)
            if shift:
                self.select_end = self.cursor
            self.has_preferred_x = False

    def _word_key(self, left: bool, shift: bool) -> None:
        move = self._word_left if left else self._word_right
        if shift:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = move(self.cursor)
            self.select_end = self.cursor
            self.clamp()
        elif self.has_selection():
            if left:
                self._move_to_first()
            else:
                self._move_to_last()
        else:
            self.cursor = move(self.cursor)
            self.clamp()

    def _seek_in_row(self, row_start: int, goal_x: float) -> None:
        buf = self.buffer
        self.cursor = row_start
        row = buf.layout_row(row_start)
        x = row.x0
        i = 0
        while i < row.num_chars:
            if buf.char_at(self.cursor) == NEWLINE:
                break
            dx = buf.char_width(row_start, i)
            nxt = buf.next_index(self.cursor)
            x += dx
            if x > goal_x:
                break
            i += nxt - self.cursor
            self.cursor = nxt
        self.clamp()
        self.has_preferred_x = True
        self.preferred_x = goal_x

    def _move_down(self, is_page: bool, shift: bool) -> None:
        buf = self.buffer
        row_count = self.row_count_per_page if is_page else 1
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last()
        self.clamp()
        find = self.find_charpos(self.cursor)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            if buf.char_at(find.first_char + find.length - 1) != NEWLINE:
                break
            self._seek_in_row(start, goal_x)
            if shift:
                self.select_end = self.cursor
            find.first_char = start
            find.length = buf.layout_row(start).num_chars

    def _move_up(self, is_page: bool, shift: bool) -> None:
        buf = self.buffer
        row_count = self.row_count_per_page if is_page else 1
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()
        self.clamp()
        find = self.find_charpos(self.cursor)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._seek_in_row(find.prev_first, goal_x)
            if shift:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0:
                prev = buf.prev_index(prev_scan)
                if buf.char_at(prev) == NEWLINE:
                    break
                prev_scan = prev
            find.first_char = find.prev_first
            find.prev_first = prev_scan
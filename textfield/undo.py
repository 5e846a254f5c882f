"""Bounded undo/redo history for the text editing engine.

Undo records grow from the front of a fixed table and redo records from
the back. Both share one fixed character store the same way. When space
runs out, the oldest entries are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .buffer import TextBuffer

UNDO_STATE_COUNT = 99
UNDO_CHAR_COUNT = 999


@dataclass(frozen=True)
class UndoRecord:
    """One reversible edit: at ``where``, insert stored chars and delete others.

    ``char_storage`` is the offset of the stored characters in the shared
    character store, or -1 when nothing is stored.
    """

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


def _shifted(record: UndoRecord, delta: int) -> UndoRecord:
    if record.char_storage < 0:
        return record
    return replace(record, char_storage=record.char_storage + delta)


def _read(buffer: TextBuffer, where: int, length: int) -> list[str]:
    return [buffer.char_at(where + offset) for offset in range(length)]


class UndoState:
    """Undo and redo history with a fixed number of records and characters."""

    def __init__(
        self,
        state_count: int = UNDO_STATE_COUNT,
        char_count: int = UNDO_CHAR_COUNT,
    ) -> None:
        if state_count <= 0:
            raise ValueError("state_count must be positive")
        if char_count <= 0:
            raise ValueError("char_count must be positive")
        self.state_count = state_count
        self.char_count = char_count
        self.reset()

    def reset(self) -> None:
        """Forget all undo and redo history."""
        self.records: list[UndoRecord] = [UndoRecord()] * self.state_count
        self.chars: list[str] = [""] * self.char_count
        self.undo_point = 0
        self.redo_point = self.state_count
        self.undo_char_point = 0
        self.redo_char_point = self.char_count

    def can_undo(self) -> bool:
        """Whether there is an edit to undo."""
        return self.undo_point > 0

    def can_redo(self) -> bool:
        """Whether there is an undone edit to redo."""
        return self.redo_point < self.state_count

    def flush_redo(self) -> None:
        """Drop every redo record."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record, compacting the stores."""
        if self.undo_point <= 0:
            return
        oldest = self.records[0]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.undo_char_point -= n
            self.chars[: self.undo_char_point] = self.chars[n : n + self.undo_char_point]
            self.records[: self.undo_point] = [
                _shifted(record, -n) for record in self.records[: self.undo_point]
            ]
        self.undo_point -= 1
        self.records[: self.undo_point] = self.records[1 : self.undo_point + 1]

    def discard_redo(self) -> None:
        """Drop the oldest redo record, compacting the stores."""
        last = self.state_count - 1
        if self.redo_point > last:
            return
        oldest = self.records[last]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.redo_char_point += n
            self.chars[self.redo_char_point : self.char_count] = self.chars[
                self.redo_char_point - n : self.char_count - n
            ]
            self.records[self.redo_point : last] = [
                _shifted(record, n) for record in self.records[self.redo_point : last]
            ]
        self.records[self.redo_point + 1 : self.state_count] = self.records[
            self.redo_point : self.state_count - 1
        ]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> int | None:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        index = self.undo_point
        self.undo_point += 1
        return index

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> int | None:
        """Record an edit and reserve room for ``insert_len`` characters.

        Returns the offset in ``chars`` where the characters belong, or None
        when there is nothing to store or the edit cannot be recorded.
        """
        index = self._create_record(insert_len)
        if index is None:
            return None
        if insert_len == 0:
            self.records[index] = UndoRecord(pos, insert_len, delete_len, -1)
            return None
        storage = self.undo_char_point
        self.records[index] = UndoRecord(pos, insert_len, delete_len, storage)
        self.undo_char_point += insert_len
        return storage

    def make_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters were inserted at ``where``."""
        self.create_undo(where, 0, length)

    def make_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Record that ``length`` characters at ``where`` are about to be deleted."""
        storage = self.create_undo(where, length, 0)
        if storage is not None:
            self.chars[storage : storage + length] = _read(buffer, where, length)

    def make_replace(
        self, buffer: TextBuffer, where: int, old_length: int, new_length: int
    ) -> None:
        """Record that ``old_length`` characters at ``where`` are about to be replaced."""
        storage = self.create_undo(where, old_length, new_length)
        if storage is not None:
            self.chars[storage : storage + old_length] = _read(buffer, where, old_length)

    def undo(self, buffer: TextBuffer) -> int | None:
        """Revert the latest edit in ``buffer``; return the new cursor, or None."""
        if self.undo_point == 0:
            return None
        u = self.records[self.undo_point - 1]
        redo_index = self.redo_point - 1
        self.records[redo_index] = UndoRecord(u.where, u.delete_length, u.insert_length, -1)

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                self.records[redo_index] = replace(self.records[redo_index], insert_length=0)
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                redo_index = self.redo_point - 1
                storage = self.redo_char_point - u.delete_length
                self.redo_char_point = storage
                self.records[redo_index] = UndoRecord(
                    u.where, u.delete_length, u.insert_length, storage
                )
                self.chars[storage : storage + u.delete_length] = _read(
                    buffer, u.where, u.delete_length
                )
            buffer.delete(u.where, u.delete_length)

        if u.insert_length:
            buffer.insert(
                u.where, self.chars[u.char_storage : u.char_storage + u.insert_length]
            )
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, buffer: TextBuffer) -> int | None:
        """Reapply the latest undone edit in ``buffer``; return the new cursor, or None."""
        if self.redo_point == self.state_count:
            return None
        r = self.records[self.redo_point]
        insert_length = r.delete_length
        delete_length = r.insert_length
        storage = -1

        if r.delete_length:
            if self.undo_char_point + insert_length > self.redo_char_point:
                insert_length = 0
                delete_length = 0
            else:
                storage = self.undo_char_point
                self.undo_char_point += insert_length
                self.chars[storage : storage + insert_length] = _read(
                    buffer, r.where, insert_length
                )
        self.records[self.undo_point] = UndoRecord(
            r.where, insert_length, delete_length, storage
        )
        if r.delete_length:
            buffer.delete(r.where, r.delete_length)

        if r.insert_length:
            buffer.insert(
                r.where, self.chars[r.char_storage : r.char_storage + r.insert_length]
            )
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length
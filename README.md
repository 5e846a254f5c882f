# textfield

The editing core of a text-entry widget. It turns mouse clicks, drags, key
presses and typed text into edits of a text buffer. It keeps the cursor and
the selection up to date, and it records each edit so that it can be undone
and redone.

The behaviour follows the usual desktop text controls:

- Shift with a movement key extends the selection.
- Up and down keep a preferred column.
- In single-line mode, up and down act as left and right.
- Insert mode overwrites the character under the cursor.

## Modules

### `textfield.buffer`

- `TextBuffer` is the abstract interface that the editor works against.
- `MonospaceBuffer(text, char_width, line_height, max_length)` is a ready-made
  buffer.
  - Every character has the same width, except newlines, which have zero width.
  - Each line, including its trailing newline, is one row.
  - When `max_length` is set, an insertion that would make the text longer
    than that limit is refused: `insert` returns `False`.
  - `text()` returns the contents as a string.
- `Row` is the layout of one row:
  - `x0` and `x1` give its horizontal extent.
  - `baseline_y_delta`, `ymin` and `ymax` give its vertical extent.
  - `num_chars` is the number of characters in the row.

### `textfield.undo`

- `UndoRecord` describes one reversible edit.
- `UndoState(state_count, char_count)` holds the undo and redo history.
  - The history uses a fixed number of records (99 by default) and a fixed
    number of stored characters (999 by default).
  - When either pool fills up, the oldest entries are dropped.
  - `undo(buffer)` and `redo(buffer)` apply an edit to the buffer. Each
    returns the new cursor position, or `None` when there is nothing to apply.
  - `can_undo()` and `can_redo()` report whether an edit is available.

### `textfield.editor`

- `TextEditor(buffer, single_line)` holds the editing state for one buffer:
  - `cursor`, `select_start` and `select_end`
  - `insert_mode`
  - `row_count_per_page`
  - the undo history, in `undo_state`
- Mouse input: `click(x, y)` and `drag(x, y)`.
- Text input: `text(chars)` and `paste(chars)`.
- Editing: `cut()`, `undo()` and `redo()`.
- Keyboard input: `key(key)`.
- `Key` lists the keyboard inputs:
  - Movement: `LEFT`, `RIGHT`, `UP`, `DOWN`, `PGUP`, `PGDOWN`, `WORDLEFT`,
    `WORDRIGHT`, `LINESTART`, `LINEEND`, `TEXTSTART` and `TEXTEND`.
  - Editing: `DELETE`, `BACKSPACE`, `UNDO`, `REDO` and `INSERT`. `INSERT`
    toggles insert mode.
  - `SHIFT` is a flag to combine with a movement key with `|`.
- Page up and page down move by `row_count_per_page` rows. That value is 0
  after construction, so set it before you use those keys.

## Example

```python
from textfield.buffer import MonospaceBuffer
from textfield.editor import Key, TextEditor

buf = MonospaceBuffer("hello\nworld", char_width=8.0, line_height=16.0, max_length=None)
ed = TextEditor(buf, single_line=False)

ed.key(Key.TEXTEND)                 # cursor after "world"
ed.text("!")                        # "hello\nworld!"
ed.key(Key.LINESTART | Key.SHIFT)   # select "world!"
ed.cut()                            # "hello\n"
ed.undo()                           # back to "hello\nworld!"
print(buf.text())

ed.click(20.0, 0.0)                 # place the cursor by mouse position
ed.paste("XY")
```

## Writing your own buffer

To use your own storage, subclass `TextBuffer` and implement these methods:

- `__len__`
- `char_at`
- `layout_row`, which returns a `Row`
- `char_width`
- `insert`, which returns whether the insertion was accepted
- `delete`

If a character can take up more than one index, override `next_index` and
`prev_index`. To change how words are split for word movement, override
`is_space`.

## What it does not do

This package does no drawing and handles no real input devices. Your own code
must:

- render the text, the cursor and the selection;
- translate window-system events into `click`, `drag`, `key` and `text` calls;
- handle the system clipboard. `cut()` only deletes the selection, so copy the
  text out of the buffer first.

## Tests

```
pip install -e .[test]
pytest
```
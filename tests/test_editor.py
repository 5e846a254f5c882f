import pytest

from textfield.buffer import MonospaceBuffer
from textfield.editor import FindState, Key, TextEditor


def make(text="", single_line=False, **kwargs):
    buf = MonospaceBuffer(text, **kwargs)
    return buf, TextEditor(buf, single_line)


def test_initial_state():
    _, ed = make("hello")
    assert ed.cursor == 0
    assert not ed.has_selection()
    assert ed.insert_mode is False


def test_typing_inserts_and_advances():
    buf, ed = make()
    ed.text("abc")
    assert buf.text() == "abc"
    assert ed.cursor == len("abc")


def test_typing_undo_and_redo_round_trip():
    buf, ed = make()
    ed.text("abc")
    ed.key(Key.UNDO)
    assert buf.text() == ""
    assert ed.cursor == 0
    ed.key(Key.REDO)
    assert buf.text() == "abc"
    assert ed.cursor == len("abc")


def test_single_line_rejects_newline():
    buf, ed = make("ab", single_line=True)
    ed.text("\n")
    assert buf.text() == "ab"


def test_insert_mode_replaces_and_undoes():
    original = "abc"
    buf, ed = make(original)
    ed.key(Key.INSERT)
    assert ed.insert_mode is True
    ed.text("X")
    assert buf.text() == "X" + original[1:]
    ed.undo()
    assert buf.text() == original


def test_right_at_end_is_clamped():
    text = "hi"
    _, ed = make(text)
    for _ in range(5):
        ed.key(Key.RIGHT)
    assert ed.cursor == len(text)
    ed.key(Key.LEFT)
    assert ed.cursor == len(text) - 1


def test_shift_right_selects_and_cut_removes():
    original = "hello"
    buf, ed = make(original)
    ed.key(Key.RIGHT | Key.SHIFT)
    ed.key(Key.RIGHT | Key.SHIFT)
    assert ed.has_selection()
    assert (ed.select_start, ed.select_end) == (0, 2)
    assert ed.cut() is True
    assert buf.text() == original[2:]
    assert ed.cursor == 0
    assert ed.cut() is False


def test_paste_replaces_selection_and_undo_restores():
    original = "hello"
    buf, ed = make(original)
    ed.key(Key.RIGHT | Key.SHIFT)
    ed.key(Key.RIGHT | Key.SHIFT)
    assert ed.paste("J") is True
    assert buf.text() == "J" + original[2:]
    ed.undo()
    ed.undo()
    assert buf.text() == original


def test_paste_that_does_not_fit_fails():
    buf, ed = make("ab", max_length=3)
    assert ed.paste("xyz") is False
    assert buf.text() == "ab"
    assert ed.cursor == 0


def test_backspace_and_delete():
    original = "hello"
    buf, ed = make(original)
    ed.key(Key.TEXTEND)
    ed.key(Key.BACKSPACE)
    assert buf.text() == original[:-1]
    assert ed.cursor == len(original) - 1
    ed.key(Key.TEXTSTART)
    ed.key(Key.DELETE)
    assert buf.text() == original[1:-1]
    assert ed.cursor == 0


def test_text_start_and_end_with_shift():
    text = "hello"
    _, ed = make(text)
    ed.key(Key.TEXTEND | Key.SHIFT)
    assert (ed.select_start, ed.select_end) == (0, len(text))
    ed.key(Key.TEXTSTART)
    assert ed.cursor == 0
    assert not ed.has_selection()


def test_line_start_and_end_multiline():
    text = "ab\ncd"
    _, ed = make(text)
    ed.key(Key.TEXTEND)
    ed.key(Key.LINESTART)
    assert ed.cursor == text.index("\n") + 1
    ed.key(Key.TEXTSTART)
    ed.key(Key.LINEEND)
    assert ed.cursor == text.index("\n")


def test_down_and_up_keep_column():
    text = "abc\ndef"
    _, ed = make(text)
    ed.key(Key.RIGHT)
    ed.key(Key.DOWN)
    assert ed.cursor == text.index("\n") + 2
    ed.key(Key.UP)
    assert ed.cursor == 1


def test_down_on_last_line_does_not_move():
    text = "abc\ndef"
    _, ed = make(text)
    ed.key(Key.TEXTEND)
    ed.key(Key.DOWN)
    assert ed.cursor == len(text)


def test_single_line_up_down_act_like_left_right():
    text = "abc"
    _, ed = make(text, single_line=True)
    ed.key(Key.DOWN)
    ed.key(Key.DOWN)
    assert ed.cursor == 2
    ed.key(Key.UP)
    assert ed.cursor == 1


def test_page_down_moves_rows_per_page():
    text = "a\nb\nc\nd"
    _, ed = make(text)
    ed.row_count_per_page = 2
    ed.key(Key.PGDOWN)
    assert ed.cursor == text.index("c")
    ed.key(Key.PGUP)
    assert ed.cursor == 0


def test_shift_down_extends_selection():
    text = "abc\ndef"
    _, ed = make(text)
    ed.key(Key.DOWN | Key.SHIFT)
    assert ed.select_start == 0
    assert ed.select_end == ed.cursor == text.index("\n") + 1


def test_click_rounds_to_nearest_character():
    _, ed = make("abcd", single_line=True)
    ed.click(1.6, 50.0)
    assert ed.cursor == round(1.6)
    assert not ed.has_selection()


def test_click_on_second_line_and_below_text():
    text = "ab\ncd"
    _, ed = make(text)
    ed.click(0.4, 1.5)
    assert ed.cursor == text.index("\n") + 1
    ed.click(0.0, 10.0)
    assert ed.cursor == len(text)


def test_drag_creates_selection():
    _, ed = make("abcdef")
    ed.click(0.0, 0.0)
    ed.drag(3.0, 0.0)
    assert ed.select_start == 0
    assert ed.select_end == ed.cursor == 3


def test_word_movement():
    text = "foo bar baz"
    _, ed = make(text)
    ed.key(Key.WORDRIGHT)
    assert ed.cursor == text.index("bar")
    ed.key(Key.WORDRIGHT)
    assert ed.cursor == text.index("baz")
    ed.key(Key.WORDLEFT)
    assert ed.cursor == text.index("bar")
    ed.key(Key.WORDLEFT | Key.SHIFT)
    assert (ed.select_start, ed.select_end) == (text.index("bar"), 0)


def test_find_charpos_on_second_row():
    text = "ab\ncd"
    _, ed = make(text, char_width=2.0, line_height=3.0)
    find = ed.find_charpos(text.index("d"))
    assert isinstance(find, FindState)
    assert find.first_char == text.index("c")
    assert find.length == len("cd")
    assert find.prev_first == 0
    assert find.x == 2.0
    assert find.y == 3.0


def test_clamp_after_external_change():
    buf, ed = make("hello")
    ed.key(Key.TEXTEND)
    buf.delete(0, 3)
    ed.clamp()
    assert ed.cursor == len(buf)


def test_undo_with_empty_history_keeps_text():
    buf, ed = make("abc")
    ed.key(Key.RIGHT)
    ed.undo()
    assert buf.text() == "abc"
    assert ed.cursor == 1


def test_reset_clears_history_and_selection():
    buf, ed = make()
    ed.text("xy")
    ed.key(Key.LEFT | Key.SHIFT)
    ed.reset(single_line=True)
    assert ed.single_line is True
    assert not ed.has_selection()
    ed.undo()
    assert buf.text() == "xy"


def test_out_of_range_char_in_buffer_raises():
    buf, _ = make("ab")
    with pytest.raises(IndexError):
        buf.char_at(5)
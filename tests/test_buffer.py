import pytest

from textfield.buffer import MonospaceBuffer, Row, TextBuffer


def test_text_buffer_is_abstract():
    with pytest.raises(TypeError):
        TextBuffer()


def test_initial_text_and_length():
    buf = MonospaceBuffer("hello")
    assert buf.text() == "hello"
    assert len(buf) == len("hello")


def test_char_at_and_out_of_range():
    buf = MonospaceBuffer("abc")
    assert [buf.char_at(i) for i in range(len(buf))] == ["a", "b", "c"]
    with pytest.raises(IndexError):
        buf.char_at(len(buf))
    with pytest.raises(IndexError):
        buf.char_at(-1)


def test_insert_then_delete_round_trip():
    buf = MonospaceBuffer("hello world")
    assert buf.insert(5, ",") is True
    assert buf.text() == "hello, world"
    buf.delete(5, 1)
    assert buf.text() == "hello world"


def test_insert_at_end_and_start():
    buf = MonospaceBuffer("mid")
    assert buf.insert(len(buf), "end")
    assert buf.insert(0, "start")
    assert buf.text() == "startmidend"


def test_insert_out_of_range_raises():
    buf = MonospaceBuffer("ab")
    with pytest.raises(IndexError):
        buf.insert(3, "x")


def test_delete_out_of_range_raises():
    buf = MonospaceBuffer("ab")
    with pytest.raises(IndexError):
        buf.delete(1, 2)
    with pytest.raises(ValueError):
        buf.delete(0, -1)
    assert buf.text() == "ab"


def test_max_length_rejects_insert_without_change():
    buf = MonospaceBuffer("abc", max_length=4)
    assert buf.insert(1, "xy") is False
    assert buf.text() == "abc"
    assert buf.insert(1, "x") is True
    assert buf.text() == "axbc"


def test_initial_text_longer_than_max_length():
    with pytest.raises(ValueError):
        MonospaceBuffer("abcdef", max_length=2)


def test_rows_include_newline_and_cover_text():
    text = "ab\ncde\nf"
    buf = MonospaceBuffer(text)
    first = buf.layout_row(0)
    assert first.num_chars == len("ab\n")
    starts = []
    i = 0
    while i < len(buf):
        starts.append(i)
        i += buf.layout_row(i).num_chars
    assert i == len(text)
    assert len(starts) == text.count("\n") + 1


def test_row_geometry_uses_metrics():
    buf = MonospaceBuffer("abc\nd", char_width=2.0, line_height=5.0)
    row = buf.layout_row(0)
    assert row == Row(x0=0.0, x1=6.0, baseline_y_delta=5.0, ymin=0.0, ymax=5.0, num_chars=4)


def test_row_width_matches_sum_of_char_widths():
    buf = MonospaceBuffer("one\ntwo three\n", char_width=3.0)
    start = 4
    row = buf.layout_row(start)
    total = sum(buf.char_width(start, k) for k in range(row.num_chars))
    assert total == row.x1


def test_layout_row_past_end_is_empty():
    buf = MonospaceBuffer("xy")
    row = buf.layout_row(len(buf))
    assert row.num_chars == 0
    assert row.x1 == 0.0


def test_newline_has_no_width():
    buf = MonospaceBuffer("a\n", char_width=4.0)
    assert buf.char_width(0, 1) == 0.0
    assert buf.char_width(0, 0) == 4.0


def test_next_and_prev_index_are_inverse():
    buf = MonospaceBuffer("abcdef")
    for i in range(1, len(buf)):
        assert buf.prev_index(buf.next_index(i)) == i


def test_is_space():
    buf = MonospaceBuffer()
    assert buf.is_space(" ")
    assert buf.is_space("\t")
    assert not buf.is_space("a")


def test_invalid_metrics_rejected():
    with pytest.raises(ValueError):
        MonospaceBuffer("a", char_width=0)
    with pytest.raises(ValueError):
        MonospaceBuffer("a", line_height=-1)
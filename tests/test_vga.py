import pytest

from sectorfs.vga import COL_CNT, GRAY_ON_BLACK, ROW_CNT, TextScreen


def test_write_places_characters():
    screen = TextScreen()
    screen.write("hi")
    assert screen.row_text(0).startswith("hi ")
    assert screen.cursor == (2, 0)
    assert screen.attrs[0][0] == GRAY_ON_BLACK


def test_newline_and_carriage_return():
    screen = TextScreen()
    screen.write("abc\nde\rX")
    assert screen.row_text(1).startswith("Xe")
    assert screen.cursor == (1, 1)


def test_backspace_stops_at_column_zero():
    screen = TextScreen()
    screen.write("\b\b")
    assert screen.cursor == (0, 0)
    screen.write("ab\b")
    assert screen.cursor == (1, 0)


def test_tab_advances_to_next_stop():
    screen = TextScreen()
    screen.putc("\t")
    assert screen.cursor == (8, 0)
    screen.putc("\t")
    assert screen.cursor == (16, 0)


def test_tab_at_end_of_line_wraps():
    screen = TextScreen(cursor=(COL_CNT - 1, 0))
    screen.putc("\t")
    assert screen.cursor == (0, 1)


def test_full_line_wraps():
    screen = TextScreen()
    screen.write("x" * COL_CNT)
    assert screen.cursor == (0, 1)
    assert screen.row_text(0) == "x" * COL_CNT


def test_scrolls_at_bottom():
    screen = TextScreen()
    for i in range(ROW_CNT):
        screen.write(f"line{i}\n")
    assert screen.row_text(0).startswith("line1 ")
    assert screen.row_text(ROW_CNT - 2).startswith(f"line{ROW_CNT - 1}")
    assert screen.row_text(ROW_CNT - 1) == " " * COL_CNT
    assert screen.cursor == (0, ROW_CNT - 1)


def test_form_feed_clears():
    screen = TextScreen()
    screen.write("hello\nworld")
    screen.putc("\f")
    assert all(screen.row_text(y) == " " * COL_CNT for y in range(ROW_CNT))
    assert screen.cursor == (0, 0)


def test_bell_calls_beep_without_moving():
    beeps = []
    screen = TextScreen(beep=lambda: beeps.append(1))
    screen.write("a\a")
    assert beeps == [1]
    assert screen.cursor == (1, 0)


def test_cursor_offset_and_bad_cursor():
    screen = TextScreen(cursor=(3, 2))
    assert screen.cursor_offset == 3 + COL_CNT * 2
    with pytest.raises(ValueError):
        TextScreen(cursor=(COL_CNT, 0))
"""An 80x25 text screen that interprets control characters."""

from __future__ import annotations

from typing import Callable, Optional, Union

COL_CNT = 80
ROW_CNT = 25
GRAY_ON_BLACK = 0x07


class TextScreen:
    """Character cells with attributes and a cursor; scrolls at the bottom."""

    def __init__(
        self,
        cursor: tuple[int, int] = (0, 0),
        beep: Optional[Callable[[], None]] = None,
    ) -> None:
        x, y = cursor
        if not (0 <= x < COL_CNT and 0 <= y < ROW_CNT):
            raise ValueError(f"cursor {cursor} off screen")
        self.chars = [bytearray(b" " * COL_CNT) for _ in range(ROW_CNT)]
        self.attrs = [bytearray([GRAY_ON_BLACK] * COL_CNT) for _ in range(ROW_CNT)]
        self.x, self.y = x, y
        self._beep = beep

    @property
    def cursor(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def cursor_offset(self) -> int:
        """Cursor position as a cell index, as the display hardware keeps it."""
        return self.x + COL_CNT * self.y

    def _clear_row(self, y: int) -> None:
        self.chars[y] = bytearray(b" " * COL_CNT)
        self.attrs[y] = bytearray([GRAY_ON_BLACK] * COL_CNT)

    def clear(self) -> None:
        """Blank the screen and move the cursor to the upper left."""
        for y in range(ROW_CNT):
            self._clear_row(y)
        self.x = self.y = 0

    def _newline(self) -> None:
        self.x = 0
        self.y += 1
        if self.y >= ROW_CNT:
            self.y = ROW_CNT - 1
            del self.chars[0]
            del self.attrs[0]
            self.chars.append(bytearray())
            self.attrs.append(bytearray())
            self._clear_row(ROW_CNT - 1)

    def putc(self, c: Union[int, str]) -> None:
        """Write one character, interpreting control characters."""
        code = (ord(c) if isinstance(c, str) else c) & 0xFF
        if code == 0x0A:
            self._newline()
        elif code == 0x0C:
            self.clear()
        elif code == 0x08:
            if self.x > 0:
                self.x -= 1
        elif code == 0x0D:
            self.x = 0
        elif code == 0x09:
            self.x = -(-(self.x + 1) // 8) * 8
            if self.x >= COL_CNT:
                self._newline()
        elif code == 0x07:
            if self._beep is not None:
                self._beep()
        else:
            self.chars[self.y][self.x] = code
            self.attrs[self.y][self.x] = GRAY_ON_BLACK
            self.x += 1
            if self.x >= COL_CNT:
                self._newline()

    def write(self, text: str) -> None:
        """Write each character of TEXT."""
        for c in text:
            self.putc(c)

    def row_text(self, y: int) -> str:
        """The characters of row Y as a string."""
        return self.chars[y].decode("latin-1")
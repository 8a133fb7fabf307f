"""PC keyboard: turns scancodes into characters, tracking modifier keys."""

from __future__ import annotations

from typing import Optional, Sequence

from sectorfs.intq import InterruptQueue

Keymap = Sequence[tuple[int, str]]

# Keys that produce the same character whether or not Shift is down.
# Letters are the exception; their case is handled separately.
INVARIANT_KEYMAP: Keymap = (
    (0x01, "\033"),
    (0x0E, "\b"),
    (0x0F, "\tQWERTYUIOP"),
    (0x1C, "\r"),
    (0x1E, "ASDFGHJKL"),
    (0x2C, "ZXCVBNM"),
    (0x37, "*"),
    (0x39, " "),
    (0x53, "\177"),
)

UNSHIFTED_KEYMAP: Keymap = (
    (0x02, "1234567890-="),
    (0x1A, "[]"),
    (0x27, ";'`"),
    (0x2B, "\\"),
    (0x33, ",./"),
)

SHIFTED_KEYMAP: Keymap = (
    (0x02, "!@#$%^&*()_+"),
    (0x1A, "{}"),
    (0x27, ':"~'),
    (0x2B, "|"),
    (0x33, "<>?"),
)

CAPS_LOCK = 0x3A
RELEASE_BIT = 0x80
DELETE = 0x7F

_MODIFIERS = {
    0x2A: "left_shift",
    0x36: "right_shift",
    0x38: "left_alt",
    0xE038: "right_alt",
    0x1D: "left_ctrl",
    0xE01D: "right_ctrl",
}


class RebootRequested(Exception):
    """Raised when Ctrl+Alt+Del is pressed."""


def map_key(keymap: Keymap, scancode: int) -> Optional[int]:
    """Return the character code KEYMAP gives SCANCODE, or None."""
    for first, chars in keymap:
        if first <= scancode < first + len(chars):
            return ord(chars[scancode - first])
    return None


def _lower(c: int) -> int:
    return c + 0x20 if ord("A") <= c <= ord("Z") else c


class Keyboard:
    """Keyboard state machine feeding characters into an input queue."""

    def __init__(self, queue: Optional[InterruptQueue] = None) -> None:
        self.queue = queue if queue is not None else InterruptQueue()
        self.caps_lock = False
        self.key_count = 0
        self._held: set[str] = set()

    @property
    def shift(self) -> bool:
        return bool(self._held & {"left_shift", "right_shift"})

    @property
    def alt(self) -> bool:
        return bool(self._held & {"left_alt", "right_alt"})

    @property
    def ctrl(self) -> bool:
        return bool(self._held & {"left_ctrl", "right_ctrl"})

    def feed(self, code: int) -> Optional[int]:
        """Interpret one scancode, prefixed ones given as 0xE0xx.

        Returns the character put into the queue, or None if the code
        produced no character or the queue was full.  Raises
        RebootRequested on Ctrl+Alt+Del.
        """
        shift, alt, ctrl = self.shift, self.alt, self.ctrl
        release = bool(code & RELEASE_BIT)
        code &= ~RELEASE_BIT

        if code == CAPS_LOCK:
            if not release:
                self.caps_lock = not self.caps_lock
            return None

        c = map_key(INVARIANT_KEYMAP, code)
        if c is None:
            c = map_key(SHIFTED_KEYMAP if shift else UNSHIFTED_KEYMAP, code)

        if c is None:
            modifier = _MODIFIERS.get(code)
            if modifier is not None:
                if release:
                    self._held.discard(modifier)
                else:
                    self._held.add(modifier)
            return None

        if release:
            return None
        if c == DELETE and ctrl and alt:
            raise RebootRequested("Ctrl+Alt+Del pressed")
        # Ctrl overrides Shift: Ctrl+A is 0x01 and so on.
        if ctrl and 0x40 <= c < 0x60:
            c -= 0x40
        elif shift == self.caps_lock:
            c = _lower(c)
        if alt:
            c = (c + 0x80) & 0xFF
        if self.queue.full():
            return None
        self.key_count += 1
        self.queue.put(c)
        return c

    def stats(self) -> str:
        """One line with the number of keys pressed."""
        return f"Keyboard: {self.key_count} keys pressed"
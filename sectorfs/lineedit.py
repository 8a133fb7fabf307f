"""Line editing with backspace and Ctrl+U, and a tiny command shell."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TextIO

CTRL_U = "\x15"
COMMAND_SIZE = 80


def _next_key(keys) -> str:
    try:
        return next(keys)
    except StopIteration:
        raise EOFError("input ended before end of line") from None


def read_line(
    keys: Iterable[str],
    size: int = COMMAND_SIZE,
    echo: Optional[Callable[[str], object]] = None,
) -> str:
    """Read a line of at most SIZE - 1 characters from KEYS.

    Carriage return ends the line, backspace removes one character and
    Ctrl+U the whole line.  What the user sees is passed to ECHO.
    Raises EOFError if KEYS runs out first.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    show = echo if echo is not None else (lambda text: None)
    keys = iter(keys)
    line: list[str] = []

    def backspace() -> bool:
        if not line:
            return False
        show("\b \b")
        line.pop()
        return True

    while True:
        c = _next_key(keys)
        if c == "\r":
            show("\n")
            return "".join(line)
        if c == "\b":
            backspace()
        elif c == CTRL_U:
            while backspace():
                pass
        elif len(line) < size - 1:
            show(c)
            line.append(c)


def run_shell(
    keys: Iterable[str],
    execute: Callable[[str], Optional[int]],
    chdir: Callable[[str], bool],
    out: TextIO,
) -> int:
    """Read and run commands from KEYS until "exit"; return the exit status.

    EXECUTE runs a command line and returns its exit code, or None if it
    could not be started.  CHDIR changes directory and returns success.
    """
    keys = iter(keys)
    out.write("Shell starting...\n")
    while True:
        out.write("--")
        command = read_line(keys, COMMAND_SIZE, out.write)
        if command == "exit":
            break
        if command.startswith("cd "):
            target = command[3:]
            if not chdir(target):
                out.write(f'"{target}": chdir failed\n')
        elif command:
            code = execute(command)
            if code is None:
                out.write("exec failed\n")
            else:
                out.write(f'"{command}": exit code {code}\n')
    out.write("Shell exiting.")
    return 0
"""Programmable interval timer: counter values and channel programming."""

from __future__ import annotations

PIT_PORT_CONTROL = 0x43
PIT_HZ = 1193180


def pit_port_counter(channel: int) -> int:
    return 0x40 + channel


def pit_count(frequency: int) -> int:
    """Counter value that makes the timer run at FREQUENCY Hz.

    Frequencies below 19 give 0, which the timer treats as 65536;
    frequencies above the timer's clock give 2.
    """
    if frequency < 19:
        return 0
    if frequency > PIT_HZ:
        return 2
    return (PIT_HZ + frequency // 2) // frequency


def configure_channel(channel: int, mode: int, frequency: int) -> list[tuple[int, int]]:
    """Port writes, as (port, byte) pairs, that program CHANNEL.

    Only channels 0 and 2 and modes 2 (periodic pulse) and 3 (square
    wave) are supported.
    """
    if channel not in (0, 2):
        raise ValueError(f"unsupported channel {channel}")
    if mode not in (2, 3):
        raise ValueError(f"unsupported mode {mode}")
    count = pit_count(frequency)
    port = pit_port_counter(channel)
    return [
        (PIT_PORT_CONTROL, (channel << 6) | 0x30 | (mode << 1)),
        (port, count & 0xFF),
        (port, (count >> 8) & 0xFF),
    ]
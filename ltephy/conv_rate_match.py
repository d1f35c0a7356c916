"""Rate matching for convolutionally coded LTE channels.

Each of the three coded streams passes through a 32-column sub-block
interleaver; the interleaved streams are concatenated into a circular
buffer that is read, skipping padding, until the requested number of
output values has been produced.
"""

from __future__ import annotations

from functools import lru_cache
from itertools import cycle, islice
from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")

MAX_E = 28800
_COLUMNS = 32
_STREAMS = 3

# Inter-column permutation for the convolutional sub-block interleaver
_PERMUTATION = (
    1, 17, 9, 25, 5, 21, 13, 29, 3, 19, 11, 27, 7, 23, 15, 31,
    0, 16, 8, 24, 4, 20, 12, 28, 2, 18, 10, 26, 6, 22, 14, 30,
)


@lru_cache(maxsize=64)
def _layout(d_len: int) -> tuple[int | None, ...]:
    """Input index for each interleaver output position, None for padding."""
    if d_len < 1:
        raise ValueError(f"invalid stream length {d_len}")
    rows = -(-d_len // _COLUMNS)
    shift = rows * _COLUMNS - d_len
    layout = []
    for col in _PERMUTATION:
        for row in range(rows):
            j = row * _COLUMNS + col
            layout.append(j - shift if j >= shift else None)
    return tuple(layout)


def _int8(value: int) -> int:
    return (value + 128) % 256 - 128


def _check_e_len(e_len: int) -> None:
    if not 1 <= e_len <= MAX_E:
        raise ValueError(f"output length out of range: {e_len}")


def subblock_interleave(d: Sequence[T]) -> list[T | None]:
    """Interleave one stream; padding positions come out as None."""
    d = list(d)
    return [None if i is None else d[i] for i in _layout(len(d))]


class ConvRateMatcher:
    """Forward and reverse rate matching for convolutionally coded streams."""

    def __init__(self) -> None:
        self._d_len: int | None = None
        self._slots: tuple[tuple[int, int], ...] = ()

    def _slots_for(self, d_len: int) -> tuple[tuple[int, int], ...]:
        if d_len != self._d_len:
            layout = _layout(d_len)
            self._slots = tuple(
                (stream, idx)
                for stream in range(_STREAMS)
                for idx in layout
                if idx is not None
            )
            self._d_len = d_len
        return self._slots

    def forward(self, d: Iterable[Sequence[T]], e_len: int) -> list[T]:
        """Select ``e_len`` values from the three coded streams ``d``."""
        _check_e_len(e_len)
        streams = [list(s) for s in d]
        if len(streams) != _STREAMS:
            raise ValueError(f"expected {_STREAMS} streams, got {len(streams)}")
        d_len = len(streams[0])
        if any(len(s) != d_len for s in streams):
            raise ValueError("streams differ in length")

        slots = self._slots_for(d_len)
        return [streams[s][idx] for s, idx in islice(cycle(slots), e_len)]

    def reverse(
        self, e: Iterable[int], d_len: int
    ) -> tuple[list[int], list[int], list[int]]:
        """Recover three soft streams of ``d_len`` values from ``e``.

        Repeated values are combined by 8-bit wrapping addition; positions
        that were never transmitted are zero.
        """
        e = list(e)
        _check_e_len(len(e))
        if d_len < 1:
            raise ValueError(f"invalid stream length {d_len}")

        slots = self._slots_for(d_len)
        acc = [0] * len(slots)
        for i, value in enumerate(e):
            acc[i % len(slots)] += value

        d = tuple([0] * d_len for _ in range(_STREAMS))
        for (stream, idx), total in zip(slots, acc):
            d[stream][idx] = _int8(total)
        return d
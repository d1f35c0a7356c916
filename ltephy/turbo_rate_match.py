"""Rate matching for turbo coded LTE transport channels.

The systematic and first parity streams pass through a 32-column sub-block
interleaver; the second parity stream uses the shifted permutation defined
for it. The interleaved parity streams are interlaced behind the systematic
stream into one circular buffer, which is read from a starting point set by
the redundancy version, skipping padding.
"""

from __future__ import annotations

from functools import lru_cache
from itertools import cycle, islice
from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")

MAX_E = 28800
_COLUMNS = 32
_STREAMS = 3

# Inter-column permutation pattern for the sub-block interleaver
_PERMUTATION = (
    0, 16, 8, 24, 4, 20, 12, 28, 2, 18, 10, 26, 6, 22, 14, 30,
    1, 17, 9, 25, 5, 21, 13, 29, 3, 19, 11, 27, 7, 23, 15, 31,
)

_Slot = tuple[int, int]


def _geometry(d_len: int) -> tuple[int, int, int]:
    if d_len < 1:
        raise ValueError(f"invalid stream length {d_len}")
    rows = -(-d_len // _COLUMNS)
    v_len = rows * _COLUMNS
    return rows, v_len, v_len - d_len


def _layout_systematic(d_len: int) -> list[int | None]:
    rows, _, shift = _geometry(d_len)
    layout: list[int | None] = []
    for col in _PERMUTATION:
        for row in range(rows):
            j = row * _COLUMNS + col
            layout.append(j - shift if j >= shift else None)
    return layout


def _layout_parity2(d_len: int) -> list[int | None]:
    rows, v_len, shift = _geometry(d_len)
    layout: list[int | None] = []
    for k in range(v_len):
        pi = (_PERMUTATION[k // rows] + _COLUMNS * (k % rows) + 1) % v_len
        layout.append(pi - shift if pi >= shift else None)
    return layout


@lru_cache(maxsize=64)
def _slots(d_len: int, rv: int) -> tuple[_Slot, ...]:
    """Stream and index of each transmitted value, in circular read order."""
    rows, v_len, _ = _geometry(d_len)

    buffer: list[_Slot | None] = [
        None if i is None else (0, i) for i in _layout_systematic(d_len)
    ]
    for a, b in zip(_layout_systematic(d_len), _layout_parity2(d_len)):
        buffer.append(None if a is None else (1, a))
        buffer.append(None if b is None else (2, b))

    n_cb = _STREAMS * v_len
    k0 = rows * (2 * -(-n_cb // (8 * rows)) * rv + 2) % len(buffer)
    rotated = buffer[k0:] + buffer[:k0]
    return tuple(slot for slot in rotated if slot is not None)


def _int8(value: int) -> int:
    return (value + 128) % 256 - 128


def _check(e_len: int, rv: int) -> None:
    if not 1 <= e_len <= MAX_E:
        raise ValueError(f"output length out of range: {e_len}")
    if not 0 <= rv <= 3:
        raise ValueError(f"redundancy version out of range: {rv}")


class TurboRateMatcher:
    """Forward and reverse rate matching for turbo coded streams."""

    def __init__(self) -> None:
        self._key: tuple[int, int] | None = None
        self._cached: tuple[_Slot, ...] = ()

    def _slots_for(self, d_len: int, rv: int) -> tuple[_Slot, ...]:
        if (d_len, rv) != self._key:
            self._cached = _slots(d_len, rv)
            self._key = (d_len, rv)
        return self._cached

    def forward(self, d: Iterable[Sequence[T]], e_len: int, rv: int) -> list[T]:
        """Select ``e_len`` values from the three coded streams for version ``rv``."""
        _check(e_len, rv)
        streams = [list(s) for s in d]
        if len(streams) != _STREAMS:
            raise ValueError(f"expected {_STREAMS} streams, got {len(streams)}")
        d_len = len(streams[0])
        if any(len(s) != d_len for s in streams):
            raise ValueError("streams differ in length")

        slots = self._slots_for(d_len, rv)
        return [streams[s][i] for s, i in islice(cycle(slots), e_len)]

    def reverse(
        self, e: Iterable[int], d_len: int, rv: int
    ) -> tuple[list[int], list[int], list[int]]:
        """Recover three soft streams of ``d_len`` values from ``e``.

        Repeated values are combined by 8-bit wrapping addition; positions
        that were never transmitted are zero.
        """
        e = list(e)
        _check(len(e), rv)
        slots = self._slots_for(d_len, rv)

        acc = [0] * len(slots)
        for i, value in enumerate(e):
            acc[i % len(slots)] += value

        d = tuple([0] * d_len for _ in range(_STREAMS))
        for (stream, idx), total in zip(slots, acc):
            d[stream][idx] = _int8(total)
        return d
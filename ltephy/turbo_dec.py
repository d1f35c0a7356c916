"""Max-Log-MAP decoder for the LTE turbo code.

Soft inputs are signed 8-bit values where a positive value favours a ``1``
bit. Each of the three streams carries ``length + 4`` values, laid out as
:func:`ltephy.turbo_enc.turbo_encode` produces them. Path metrics are 16-bit
with saturating arithmetic, and the two constituent decoders exchange
extrinsic log-likelihood values through the QPP interleaver.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .interleaver import deinterleave, interleave, interleaver_params, unterminate

# Starting value for the zero state of the forward and backward recursions
SUM_INIT = 16000

_NUM_STATES = 8
_INT16_MIN = -32768
_INT16_MAX = 32767

# Systematic and parity output signs of the branch entering each state from
# an even predecessor; branches from odd predecessors carry the inverse.
_SYSTEMATIC = (-1, 1, -1, 1, 1, -1, 1, -1)
_PARITY = (-1, -1, 1, 1, 1, 1, -1, -1)

# Successor states, per predecessor, along the branches for bits 0 and 1
_NEXT_ZERO = (0, 4, 5, 1, 2, 6, 7, 3)
_NEXT_ONE = (4, 0, 1, 5, 6, 2, 3, 7)


def _sat(value: int) -> int:
    return max(_INT16_MIN, min(_INT16_MAX, value))


def _wrap(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _sign(value: int, sign: int) -> int:
    if sign > 0:
        return value
    if sign < 0:
        return _wrap(-value)
    return 0


def _forward(
    x: int, z: int, sums: Sequence[int], le: int
) -> tuple[list[int], list[int], int]:
    """One forward step: branch metrics, new state metrics and normalizer."""
    gamma = [
        _sat(_sat(_sign(x, s) + _sign(z, p)) + (_sign(le, s) >> 1))
        for s, p in zip(_SYSTEMATIC, _PARITY)
    ]
    neg = [_sat(-g) for g in gamma]
    branch = [v for pair in zip(gamma[:4], neg[:4]) for v in pair]

    even = list(sums[0::2]) * 2
    odd = list(sums[1::2]) * 2
    new = [
        max(_sat(a + g), _sat(b + n))
        for a, g, b, n in zip(even, gamma, odd, neg)
    ]
    norm = new[0]
    return branch, [_sat(v - norm) for v in new], norm


def _backward(
    branch: Sequence[int],
    z: int,
    fw: Sequence[int],
    bw: Sequence[int],
    norm: int,
) -> tuple[int, list[int]]:
    """One backward step: the bit's L-value and the new backward metrics."""
    zz = [_sign(z, p) for p in _PARITY]

    new = [
        _sat(
            max(
                _sat(bw[i // 2] + branch[i]),
                _sat(bw[4 + i // 2] - branch[i]),
            )
            - norm
        )
        for i in range(_NUM_STATES)
    ]

    zero = max(
        _sat(_sat(f + t) + bw[s]) for f, t, s in zip(fw, zz, _NEXT_ZERO)
    )
    one = max(
        _sat(_sat(f - t) + bw[s]) for f, t, s in zip(fw, zz, _NEXT_ONE)
    )
    return _wrap(one - zero), new


def _check_streams(
    d0: Sequence[int], d1: Sequence[int], d2: Sequence[int], iterations: int
) -> int:
    if len(d0) != len(d1) or len(d0) != len(d2):
        raise ValueError("soft streams differ in length")
    length = len(d0) - 4
    interleaver_params(length)
    for stream in (d0, d1, d2):
        if any(not -128 <= v <= 127 for v in stream):
            raise ValueError("soft values must fit in a signed byte")
    if iterations < 0:
        raise ValueError(f"negative iteration count: {iterations}")
    return length


class TurboDecoder:
    """Iterative turbo decoder.

    The backward metrics of all but the zero state carry over from one
    recursion to the next, including across calls.
    """

    def __init__(self) -> None:
        self._bwsums = [0] * _NUM_STATES

    def _iterate(
        self, lvals: list[int], x: Sequence[int], z: Sequence[int], length: int
    ) -> None:
        fw: list[list[int]] = [[SUM_INIT] + [0] * (_NUM_STATES - 1)]
        branches: list[list[int]] = []
        norms: list[int] = []

        for i in range(length):
            branch, new, norm = _forward(x[i], z[i], fw[i], lvals[i])
            branches.append(branch)
            fw.append(new)
            norms.append(norm)

        bw = list(self._bwsums)
        bw[0] = SUM_INIT
        for i in reversed(range(length)):
            lvals[i], bw = _backward(branches[i], z[i], fw[i], bw, norms[i])
        self._bwsums = bw

    def _lvals(
        self,
        d0: Iterable[int],
        d1: Iterable[int],
        d2: Iterable[int],
        iterations: int,
    ) -> tuple[list[int], int]:
        d0, d1, d2 = list(d0), list(d1), list(d2)
        length = _check_streams(d0, d1, d2, iterations)

        x, z, zp, tail = unterminate(length, d0, d1, d2)
        xp = interleave(length, d0[:length]) + tail

        span = length + 3
        first = [0] * span
        second = [0] * span

        for _ in range(iterations):
            self._iterate(first, x, z, span)
            second[:length] = interleave(length, first[:length])
            self._iterate(second, xp, zp, span)
            first[:length] = deinterleave(length, second[:length])

        return first, length

    def decode_unpacked(
        self,
        d0: Iterable[int],
        d1: Iterable[int],
        d2: Iterable[int],
        iterations: int,
    ) -> list[int]:
        """Decode and return one bit (0 or 1) per information bit."""
        lvals, length = self._lvals(d0, d1, d2, iterations)
        return [1 if v > 0 else 0 for v in lvals[:length]]

    def decode(
        self,
        d0: Iterable[int],
        d1: Iterable[int],
        d2: Iterable[int],
        iterations: int,
    ) -> bytes:
        """Decode and return the bits packed eight to a byte, first bit highest."""
        lvals, length = self._lvals(d0, d1, d2, iterations)
        out = bytearray()
        for start in range(0, length // 8 * 8, 8):
            byte = 0
            for v in lvals[start:start + 8]:
                byte = (byte << 1) | (1 if v > 0 else 0)
            out.append(byte)
        return bytes(out)
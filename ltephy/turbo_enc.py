"""LTE turbo encoder: two recursive constituent encoders and a QPP interleaver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .interleaver import interleave, interleaver_params


@dataclass(frozen=True)
class TurboCode:
    """Turbo code descriptor.

    ``length`` is the code block size. ``n`` (rate of each constituent
    encoder, 1/2) and ``k`` (constraint length, 3 or 4) describe the
    constituent encoders; ``rgen`` is the recursive feedback polynomial and
    ``gen`` the parity polynomial, both in octal.
    """

    length: int
    n: int = 2
    k: int = 4
    rgen: int = 0o13
    gen: int = 0o15


@dataclass(frozen=True)
class TurboEncoded:
    """The three coded streams, each ``length + 4`` bits long.

    ``d0`` carries the systematic bits, ``d1`` the parity of the first
    encoder and ``d2`` the parity of the second; the last four positions of
    each stream hold the twelve trellis termination bits.
    """

    d0: list[int]
    d1: list[int]
    d2: list[int]


def _parity(value: int) -> int:
    return value.bit_count() & 1


def _encode_parity(code: TurboCode, bits: Sequence[int]) -> tuple[list[int], int]:
    """Run one constituent encoder; return its parity bits and final register."""
    reg = 0
    parity = []
    for bit in bits:
        reg |= (_parity(reg & code.rgen) ^ bit) << (code.k - 1)
        parity.append(_parity(reg & code.gen))
        reg >>= 1
    return parity, reg


def _tail(code: TurboCode, reg: int) -> list[int]:
    """Six termination bits of one encoder: systematic, parity, per step."""
    out = []
    for _ in range(3):
        out.append(_parity(reg & code.rgen))
        out.append(_parity(reg & code.gen))
        reg >>= 1
    return out


def _validate(code: TurboCode, bits: Sequence[int]) -> None:
    if code.n != 2:
        raise ValueError(f"unsupported constituent rate 1/{code.n}")
    if not 3 <= code.k <= 4:
        raise ValueError(f"unsupported constraint length {code.k}")
    interleaver_params(code.length)
    if len(bits) != code.length:
        raise ValueError(f"expected {code.length} input bits, got {len(bits)}")
    if any(b not in (0, 1) for b in bits):
        raise ValueError("input bits must be 0 or 1")


def turbo_encode(code: TurboCode, bits: Iterable[int]) -> TurboEncoded:
    """Turbo encode ``bits`` and return the three terminated streams."""
    bits = list(bits)
    _validate(code, bits)

    z, reg0 = _encode_parity(code, bits)
    zp, reg1 = _encode_parity(code, interleave(code.length, bits))

    first = _tail(code, reg0)
    second = _tail(code, reg1)

    # Twelve tail bits spread in order across d0, d1, d2, d0, d1, ...
    d0 = bits + [first[0], first[3], second[0], second[3]]
    d1 = z + [first[1], first[4], second[1], second[4]]
    d2 = zp + [first[2], first[5], second[2], second[5]]

    return TurboEncoded(d0=d0, d1=d1, d2=d2)
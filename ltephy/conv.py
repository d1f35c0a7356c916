"""Convolutional encoder for recursive and non-recursive codes of rate 1/2 to 1/4."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Sequence


class Termination(enum.IntEnum):
    """How the encoder trellis is terminated."""

    FLUSH = 0
    TAIL_BITING = 1


@dataclass(frozen=True)
class ConvCode:
    """Convolutional code descriptor.

    ``n`` is the inverse rate (2, 3 or 4), ``k`` the constraint length (5 or 7)
    and ``length`` the number of input bits. ``gen`` holds the generator
    polynomials and ``rgen`` the recursive feedback polynomial (0 for a
    non-recursive code). ``punc`` lists, in increasing order, the positions of
    the unpunctured output that are dropped.
    """

    n: int
    k: int
    length: int
    gen: tuple[int, ...]
    rgen: int = 0
    punc: tuple[int, ...] | None = None
    term: Termination = Termination.FLUSH

    def __post_init__(self) -> None:
        object.__setattr__(self, "gen", tuple(self.gen))
        if self.punc is not None:
            object.__setattr__(self, "punc", tuple(self.punc))
        object.__setattr__(self, "term", Termination(self.term))


def _parity(value: int) -> int:
    return value.bit_count() & 1


def _validate(code: ConvCode, bits: Sequence[int]) -> None:
    if not 2 <= code.n <= 4:
        raise ValueError(f"unsupported code rate 1/{code.n}")
    if code.k not in (5, 7):
        raise ValueError(f"unsupported constraint length {code.k}")
    if len(code.gen) < code.n:
        raise ValueError(f"expected {code.n} generator polynomials, got {len(code.gen)}")
    if code.length < 1:
        raise ValueError(f"invalid code length {code.length}")
    if len(bits) != code.length:
        raise ValueError(f"expected {code.length} input bits, got {len(bits)}")
    if any(b not in (0, 1) for b in bits):
        raise ValueError("input bits must be 0 or 1")
    if code.term == Termination.TAIL_BITING and code.length < code.k - 1:
        raise ValueError("tail-biting code shorter than the encoder memory")


def _encode(code: ConvCode, bits: Sequence[int]) -> list[int]:
    k = code.k
    gens = code.gen[:code.n]
    reg = 0

    if code.term == Termination.TAIL_BITING:
        for i in range(k - 1):
            reg |= bits[len(bits) - 1 - i] << (k - 2 - i)

    out: list[int] = []
    for bit in bits:
        reg |= bit << (k - 1)
        out.extend(_parity(reg & g) for g in gens)
        reg >>= 1

    if code.term == Termination.FLUSH:
        for _ in range(k - 1):
            out.extend(_parity(reg & g) for g in gens)
            reg >>= 1

    return out


def _encode_recursive(code: ConvCode, bits: Sequence[int]) -> list[int]:
    if code.term == Termination.TAIL_BITING:
        raise ValueError("tail-biting is not supported for recursive codes")

    k = code.k
    rgen = code.rgen
    gens = code.gen[:code.n]
    systematic = [g.bit_count() == 1 for g in gens]
    if not any(systematic):
        raise ValueError("recursive code has no systematic output")

    reg = 0
    out: list[int] = []
    for bit in bits:
        reg |= (_parity(reg & rgen) ^ bit) << (k - 1)
        out.extend(bit if sys else _parity(reg & g) for g, sys in zip(gens, systematic))
        reg >>= 1

    if code.term == Termination.FLUSH:
        for _ in range(k - 1):
            feedback = _parity(reg & rgen)
            out.extend(
                feedback if sys else _parity(reg & g)
                for g, sys in zip(gens, systematic)
            )
            reg >>= 1

    return out


def _puncture(out: list[int], punc: Sequence[int]) -> list[int]:
    result = []
    j = 0
    for i, bit in enumerate(out):
        if j < len(punc) and i == punc[j]:
            j += 1
            continue
        result.append(bit)
    return result


def conv_encode(code: ConvCode, bits: Iterable[int]) -> list[int]:
    """Encode ``bits`` with ``code`` and return the (punctured) output bits."""
    bits = list(bits)
    _validate(code, bits)

    out = _encode_recursive(code, bits) if code.rgen else _encode(code, bits)

    if code.punc is not None:
        return _puncture(out, code.punc)
    return out
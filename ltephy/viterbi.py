"""Viterbi decoder for the convolutional codes described by :class:`ConvCode`.

Soft inputs are signed 8-bit values where a positive value favours a ``1``
bit. Punctured positions are filled with zero before decoding. Flushed codes
start and end in the zero state; tail-biting codes are run through the
trellis twice and traced back twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Sequence

from .conv import ConvCode, Termination

_INT8_MIN = -128
_INT8_MAX = 127
_INT16_MAX = 32767


@dataclass(frozen=True)
class ViterbiResult:
    """Decoded bits and the decision margin.

    For tail-biting codes ``metric`` is the gap between the best final path
    metric and the previous best found while scanning states; for flushed
    codes it is always 0.
    """

    bits: list[int]
    metric: int


@dataclass(frozen=True)
class _Trellis:
    num_states: int
    outputs: tuple[tuple[int, ...], ...]
    vals: tuple[int, ...]


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _parity(value: int) -> int:
    return value.bit_count() & 1


def _num_states(k: int) -> int:
    return 64 if k == 7 else 16


def _lshift(reg: int, k: int, val: int) -> int:
    """Previous state reached from ``reg`` along branch ``val``."""
    mask = 0x0E if k == 5 else 0x3E
    return ((reg << 1) & mask) | val


def _state_info(
    k: int, gens: tuple[int, ...], reg: int
) -> tuple[int, tuple[int, ...]]:
    prev = _lshift(reg, k, 0)
    val = (reg >> (k - 2)) & 1
    prev |= val << (k - 1)
    return val, tuple(_parity(prev & g) * 2 - 1 for g in gens)


def _rec_state_info(
    k: int, gens: tuple[int, ...], rgen: int, reg: int
) -> tuple[int, tuple[int, ...]]:
    prev = _lshift(reg, k, 0)
    rec = (reg >> (k - 2)) & 1
    val = 0 if _parity(prev & rgen) == rec else 1
    prev |= rec << (k - 1)
    mask = 0x0F if k == 5 else 0x3F
    outputs = tuple(
        _parity(prev & g) * 2 - 1 if g & mask else val * 2 - 1 for g in gens
    )
    return val, outputs


@lru_cache(maxsize=32)
def _trellis(k: int, gens: tuple[int, ...], rgen: int) -> _Trellis:
    ns = _num_states(k)
    infos = [
        _rec_state_info(k, gens, rgen, reg) if rgen else _state_info(k, gens, reg)
        for reg in range(ns)
    ]
    return _Trellis(
        num_states=ns,
        outputs=tuple(out for _, out in infos),
        vals=tuple(val for val, _ in infos),
    )


def _step(
    symbols: Sequence[int],
    outputs: tuple[tuple[int, ...], ...],
    sums: list[int],
    norm: bool,
) -> tuple[list[int], list[int]]:
    """One add-compare-select stage; returns new sums and branch choices.

    A choice of 0 means the survivor came from the even predecessor state,
    1 from the odd one.
    """
    ns = len(sums)
    half = ns // 2
    new = [0] * ns
    paths = [0] * ns

    for i in range(half):
        metric = _int16(sum(s * o for s, o in zip(symbols, outputs[i])))
        state0 = sums[2 * i]
        state1 = sums[2 * i + 1]

        sum0 = state0 + metric
        sum1 = state1 - metric
        sum2 = state0 - metric
        sum3 = state1 + metric

        if sum0 > sum1:
            new[i], paths[i] = _int16(sum0), 0
        else:
            new[i], paths[i] = _int16(sum1), 1

        if sum2 > sum3:
            new[i + half], paths[i + half] = _int16(sum2), 0
        else:
            new[i + half], paths[i + half] = _int16(sum3), 1

    if norm:
        low = min(new)
        new = [_int16(v - low) for v in new]

    return new, paths


def _validate(code: ConvCode) -> None:
    if code.k not in (5, 7):
        raise ValueError(f"unsupported constraint length {code.k}")
    if not 2 <= code.n <= 4:
        raise ValueError(f"unsupported code rate 1/{code.n}")
    if code.length < 1:
        raise ValueError(f"invalid code length {code.length}")
    if len(code.gen) < code.n:
        raise ValueError(
            f"expected {code.n} generator polynomials, got {len(code.gen)}"
        )


def _depuncture(soft: list[int], punc: Sequence[int], total: int) -> list[int]:
    dropped = []
    j = 0
    for i in range(total):
        if j < len(punc) and i == punc[j]:
            dropped.append(True)
            j += 1
        else:
            dropped.append(False)

    expected = dropped.count(False)
    if len(soft) != expected:
        raise ValueError(f"expected {expected} soft values, got {len(soft)}")

    values = iter(soft)
    return [0 if gone else next(values) for gone in dropped]


def _traceback(
    paths: list[list[int]],
    vals: tuple[int, ...],
    k: int,
    state: int,
    length: int,
    recursive: bool,
) -> tuple[list[int], int]:
    bits = [0] * length
    for i in range(length - 1, -1, -1):
        path = paths[i][state]
        bits[i] = path ^ vals[state] if recursive else vals[state]
        state = _lshift(state, k, path)
    return bits, state


def conv_decode(code: ConvCode, soft: Iterable[int]) -> ViterbiResult:
    """Decode soft values for ``code`` and return the most likely input bits."""
    _validate(code)
    soft = list(soft)
    if any(not _INT8_MIN <= v <= _INT8_MAX for v in soft):
        raise ValueError("soft values must fit in a signed byte")

    n, k = code.n, code.k
    tail_biting = code.term == Termination.TAIL_BITING
    dec_len = code.length if tail_biting else code.length + k - 1
    total = dec_len * n

    if code.punc is not None:
        seq = _depuncture(soft, code.punc, total)
    elif len(soft) != total:
        raise ValueError(f"expected {total} soft values, got {len(soft)}")
    else:
        seq = soft

    trellis = _trellis(k, tuple(code.gen[:n]), code.rgen)
    outputs = trellis.outputs

    sums = [0] * trellis.num_states
    if not tail_biting:
        sums[0] = _INT8_MAX * n * k

    interval = _INT16_MAX // (n * _INT8_MAX) - k
    paths: list[list[int]] = [[] for _ in range(dec_len)]

    for _ in range(2 if tail_biting else 1):
        for i in range(dec_len):
            sums, paths[i] = _step(
                seq[n * i:n * i + n], outputs, sums, i % interval == 0
            )

    best = best_prev = -1
    state = 0
    if tail_biting:
        for i, value in enumerate(sums):
            if value > best:
                best_prev = best
                best = value
                state = i
        if best < 0:
            raise ValueError("no surviving trellis path")
    else:
        for i in range(dec_len - 1, code.length - 1, -1):
            state = _lshift(state, k, paths[i][state])

    recursive = bool(code.rgen)
    bits, end_state = _traceback(
        paths, trellis.vals, k, state, code.length, recursive
    )
    if not recursive:
        state = end_state

    if tail_biting:
        bits, _ = _traceback(paths, trellis.vals, k, state, code.length, False)

    return ViterbiResult(bits=bits, metric=best - best_prev)
"""LTE slot, symbol and cyclic prefix lengths for each supported bandwidth.

All lengths are counted in samples at the sample rate that belongs to the
number of resource blocks (1.92 Msps for 6 RBs up to 23.04 Msps for 100 RBs).
"""

from __future__ import annotations

from fractions import Fraction

# Lengths at the native 30.72 Msps rate
_BASE_SLOT_LEN = 15360
_BASE_SYM_LEN = 2048
_BASE_CP0_LEN = 160
_BASE_CP_LEN = 144

_SYMBOLS_PER_SLOT = 7

# Ratio of each bandwidth's sample rate to the native rate
_SCALES: dict[int, Fraction] = {
    6: Fraction(1, 16),
    15: Fraction(1, 8),
    25: Fraction(3, 16),
    50: Fraction(3, 8),
    75: Fraction(1, 2),
    100: Fraction(3, 4),
}


def _scaled(rbs: int, base: int) -> int:
    try:
        scale = _SCALES[rbs]
    except KeyError:
        raise ValueError(f"unsupported number of resource blocks: {rbs}") from None
    return int(base * scale)


def slot_len(rbs: int) -> int:
    """Number of samples in one slot."""
    return _scaled(rbs, _BASE_SLOT_LEN)


def sym_len(rbs: int) -> int:
    """Number of samples in one OFDM symbol, without cyclic prefix."""
    return _scaled(rbs, _BASE_SYM_LEN)


def cp_len(rbs: int) -> int:
    """Number of samples in a normal (non-first) cyclic prefix."""
    return _scaled(rbs, _BASE_CP_LEN)


def _cp0_len(rbs: int) -> int:
    return _scaled(rbs, _BASE_CP0_LEN)


def subframe_len(rbs: int) -> int:
    """Number of samples in one subframe (two slots)."""
    return 2 * slot_len(rbs)


def frame_len(rbs: int) -> int:
    """Number of samples in one radio frame (ten subframes)."""
    return 10 * subframe_len(rbs)


def sym_pos(rbs: int, l: int) -> int:
    """Sample position of symbol ``l`` (0 to 6) within a slot."""
    if not 0 <= l < _SYMBOLS_PER_SLOT:
        raise ValueError(f"symbol index out of range: {l}")
    cp0 = _cp0_len(rbs)
    cp = cp_len(rbs)
    sym = sym_len(rbs)
    if l == 0:
        return cp0 - cp
    return cp0 + sym + (l - 1) * (cp + sym)
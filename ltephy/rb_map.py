"""Resource block positions within the FFT bins of an LTE OFDM symbol.

Positions are FFT bin indices of the first subcarrier of each resource
block. Resource blocks below the centre frequency sit at the top of the FFT
(negative frequencies); those above start just after the unused DC bin.
With an odd number of resource blocks the centre block straddles DC.
"""

from __future__ import annotations

from .slot import sym_len

RB_LEN = 12

_SUPPORTED_RBS = frozenset({6, 15, 25, 50, 75, 100})


def _check_rbs(rbs: int) -> None:
    if rbs not in _SUPPORTED_RBS:
        raise ValueError(f"unsupported number of resource blocks: {rbs}")


def rb_pos(rbs: int, rb: int) -> int:
    """FFT bin of the first subcarrier of resource block ``rb``."""
    _check_rbs(rbs)
    if not 0 <= rb < rbs:
        raise ValueError(f"resource block index out of range: {rb}")

    half = rbs // 2
    fft_len = sym_len(rbs)

    if rbs % 2:
        # The centre block starts half a block below DC
        if rb <= half:
            return fft_len - half * RB_LEN - RB_LEN // 2 + rb * RB_LEN
        return 1 + RB_LEN // 2 + (rb - half - 1) * RB_LEN

    if rb < half:
        return fft_len - half * RB_LEN + rb * RB_LEN
    return 1 + (rb - half) * RB_LEN


def rb_pos_mid(rbs: int) -> int:
    """FFT bin of the first subcarrier above DC."""
    _check_rbs(rbs)
    return 1
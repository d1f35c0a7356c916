"""Quantized time domain search for the LTE primary synchronization signal.

Samples are sliced to one bit per real and imaginary component and
correlated against 64-sample reference sequences held as pairs of 64-bit
masks (real bits, imaginary bits), bit ``i`` holding sample ``i``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

PSS_LEN = 64
_MASK = (1 << PSS_LEN) - 1


@dataclass(frozen=True)
class PssSearchResult:
    """Outcome of a PSS search: sequence index, timing and peak magnitude."""

    n_id_2: int
    coarse: int
    fine: int
    mag: float


def bit_dot_product(xr: int, xi: int, hr: int, hi: int) -> int:
    """Squared magnitude of the 64-element sign-quantized complex dot product."""
    xr &= _MASK
    xi &= _MASK
    hr &= _MASK
    hi &= _MASK

    d0 = ~(xr ^ hr) & _MASK
    d1 = ~(xi ^ hi) & _MASK
    d2 = ~(xr ^ hi) & _MASK
    d3 = ~(xi ^ hr) & _MASK

    d4 = d0 & ~d1 & _MASK
    d6 = d2 & d3
    d5 = ~d0 & d1 & _MASK
    d7 = ~d2 & ~d3 & _MASK

    s0 = d4.bit_count() - d5.bit_count()
    s1 = d6.bit_count() - d7.bit_count()
    return s0 * s0 + s1 * s1


def bit_correlate(
    sliced: Iterable[tuple[int, int]], hr: int, hi: int
) -> list[int]:
    """Sliding correlation of sliced samples against one reference.

    Output ``n`` is the correlation of the 64 samples ending at ``n``.
    """
    xr = xi = 0
    out = []
    for re_bit, im_bit in sliced:
        xr = (xr >> 1) | ((re_bit & 1) << (PSS_LEN - 1))
        xi = (xi >> 1) | ((im_bit & 1) << (PSS_LEN - 1))
        out.append(bit_dot_product(xr, xi, hr, hi))
    return out


def slice_samples(samples: Iterable[complex]) -> list[tuple[int, int]]:
    """Slice complex samples to (real, imaginary) sign bits: 0 if negative."""
    return [
        (0 if s.real < 0.0 else 1, 0 if s.imag < 0.0 else 1) for s in samples
    ]


def find_max(seq: Iterable[int]) -> tuple[int, int]:
    """Return ``(value, position)`` of the first strictly positive maximum.

    Values that are not above zero never win; an empty or non-positive
    sequence gives ``(0, 0)``.
    """
    best, pos = 0, 0
    for i, v in enumerate(seq):
        if v > best:
            best, pos = v, i
    return best, pos


def pss_search(
    subframes: Sequence[Sequence[complex]],
    pss_refs: Sequence[tuple[int, int]],
) -> PssSearchResult:
    """Search one or two channels for the strongest of three PSS references.

    ``pss_refs`` holds three ``(real_mask, imag_mask)`` pairs.
    """
    if not 1 <= len(subframes) <= 2:
        raise ValueError(f"unsupported number of channels: {len(subframes)}")
    if len(pss_refs) != 3:
        raise ValueError(f"expected 3 PSS references, got {len(pss_refs)}")

    length = len(subframes[0])
    if any(len(sf) != length for sf in subframes):
        raise ValueError("channels differ in length")

    sliced = [slice_samples(sf) for sf in subframes]

    corr_pss = corr_mag = corr_pos = 0
    for index, (hr, hi) in enumerate(pss_refs):
        for chan in sliced:
            mag, pos = find_max(bit_correlate(chan, hr, hi))
            if mag > corr_mag:
                corr_pss, corr_mag, corr_pos = index, mag, pos

    return PssSearchResult(
        n_id_2=corr_pss, coarse=corr_pos, fine=0, mag=float(corr_mag)
    )
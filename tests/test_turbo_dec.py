import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ltephy.turbo_dec import TurboDecoder
from ltephy.turbo_enc import TurboCode, turbo_encode

AMPLITUDE = 16


def _soft(bits):
    return [AMPLITUDE if b else -AMPLITUDE for b in bits]


def _encode(bits):
    enc = turbo_encode(TurboCode(length=len(bits)), bits)
    return _soft(enc.d0), _soft(enc.d1), _soft(enc.d2)


def _random_bits(length, seed):
    rng = random.Random(seed)
    return [rng.randint(0, 1) for _ in range(length)]


@pytest.mark.parametrize("length", [40, 48, 104])
def test_noiseless_round_trip(length):
    bits = _random_bits(length, length)
    d0, d1, d2 = _encode(bits)
    assert TurboDecoder().decode_unpacked(d0, d1, d2, 4) == bits


@settings(max_examples=15, deadline=None)
@given(st.lists(st.integers(0, 1), min_size=40, max_size=40))
def test_round_trip_property(bits):
    d0, d1, d2 = _encode(bits)
    assert TurboDecoder().decode_unpacked(d0, d1, d2, 3) == bits


def test_recovers_erased_systematic_values():
    bits = _random_bits(64, 7)
    d0, d1, d2 = _encode(bits)
    for i in (3, 17, 30, 51):
        d0[i] = 0
    assert TurboDecoder().decode_unpacked(d0, d1, d2, 6) == bits


def test_packed_output_matches_unpacked():
    bits = _random_bits(72, 3)
    d0, d1, d2 = _encode(bits)
    unpacked = TurboDecoder().decode_unpacked(d0, d1, d2, 4)
    packed = TurboDecoder().decode(d0, d1, d2, 4)
    assert len(packed) == 72 // 8
    rebuilt = [(byte >> (7 - j)) & 1 for byte in packed for j in range(8)]
    assert rebuilt == unpacked


def test_packed_all_ones():
    bits = [1] * 40
    d0, d1, d2 = _encode(bits)
    assert TurboDecoder().decode(d0, d1, d2, 4) == b"\xff" * 5


def test_decoder_reuse_gives_same_result():
    bits = _random_bits(48, 11)
    d0, d1, d2 = _encode(bits)
    decoder = TurboDecoder()
    first = decoder.decode_unpacked(d0, d1, d2, 4)
    second = decoder.decode_unpacked(d0, d1, d2, 4)
    assert first == second == bits


def test_zero_iterations_outputs_zeros():
    bits = [1] * 40
    d0, d1, d2 = _encode(bits)
    assert TurboDecoder().decode_unpacked(d0, d1, d2, 0) == [0] * 40


def test_inputs_are_not_modified():
    bits = _random_bits(40, 5)
    d0, d1, d2 = _encode(bits)
    copies = (list(d0), list(d1), list(d2))
    TurboDecoder().decode(d0, d1, d2, 2)
    assert (d0, d1, d2) == copies


@pytest.mark.parametrize("length", [39, 41, 6145])
def test_unsupported_block_size(length):
    stream = [0] * (length + 4)
    with pytest.raises(ValueError):
        TurboDecoder().decode(stream, stream, stream, 1)


def test_mismatched_stream_lengths():
    with pytest.raises(ValueError):
        TurboDecoder().decode([0] * 44, [0] * 44, [0] * 45, 1)


def test_soft_value_out_of_range():
    stream = [0] * 44
    bad = list(stream)
    bad[0] = 128
    with pytest.raises(ValueError):
        TurboDecoder().decode_unpacked(bad, stream, stream, 1)


def test_negative_iterations():
    stream = [0] * 44
    with pytest.raises(ValueError):
        TurboDecoder().decode_unpacked(stream, stream, stream, -1)
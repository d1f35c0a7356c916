import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ltephy.interleaver import interleave
from ltephy.turbo_enc import TurboCode, turbo_encode

K = 40
bit_lists = st.lists(st.integers(0, 1), min_size=K, max_size=K)


def test_stream_lengths():
    out = turbo_encode(TurboCode(length=K), [1, 0] * (K // 2))
    assert len(out.d0) == K + 4
    assert len(out.d1) == K + 4
    assert len(out.d2) == K + 4


def test_zero_input_gives_zero_output():
    out = turbo_encode(TurboCode(length=K), [0] * K)
    assert out.d0 == [0] * (K + 4)
    assert out.d1 == [0] * (K + 4)
    assert out.d2 == [0] * (K + 4)


@given(bit_lists)
@settings(max_examples=30)
def test_systematic_bits_are_input(bits):
    out = turbo_encode(TurboCode(length=K), bits)
    assert out.d0[:K] == bits


@given(bit_lists, bit_lists)
@settings(max_examples=30)
def test_encoder_is_linear(a, b):
    code = TurboCode(length=K)
    ea = turbo_encode(code, a)
    eb = turbo_encode(code, b)
    ex = turbo_encode(code, [x ^ y for x, y in zip(a, b)])
    for sa, sb, sx in ((ea.d0, eb.d0, ex.d0), (ea.d1, eb.d1, ex.d1), (ea.d2, eb.d2, ex.d2)):
        assert sx == [x ^ y for x, y in zip(sa, sb)]


@given(bit_lists)
@settings(max_examples=30)
def test_second_parity_is_first_parity_of_interleaved(bits):
    code = TurboCode(length=K)
    direct = turbo_encode(code, bits)
    permuted = turbo_encode(code, interleave(K, bits))
    assert direct.d2[:K] == permuted.d1[:K]


def test_outputs_are_bits():
    out = turbo_encode(TurboCode(length=48), [1, 1, 0] * 16)
    assert set(out.d0 + out.d1 + out.d2) <= {0, 1}


@pytest.mark.parametrize(
    "code",
    [TurboCode(length=K, n=3), TurboCode(length=K, k=2), TurboCode(length=K, k=5)],
)
def test_invalid_code_rejected(code):
    with pytest.raises(ValueError):
        turbo_encode(code, [0] * K)


def test_unsupported_block_size_rejected():
    with pytest.raises(ValueError):
        turbo_encode(TurboCode(length=41), [0] * 41)


def test_wrong_bit_count_rejected():
    with pytest.raises(ValueError):
        turbo_encode(TurboCode(length=K), [0] * (K - 1))


def test_non_binary_bits_rejected():
    with pytest.raises(ValueError):
        turbo_encode(TurboCode(length=K), [2] + [0] * (K - 1))
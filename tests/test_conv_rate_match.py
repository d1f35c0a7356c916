import pytest
from hypothesis import given, strategies as st

from ltephy.conv_rate_match import ConvRateMatcher, subblock_interleave

PERMUTATION = [
    1, 17, 9, 25, 5, 21, 13, 29, 3, 19, 11, 27, 7, 23, 15, 31,
    0, 16, 8, 24, 4, 20, 12, 28, 2, 18, 10, 26, 6, 22, 14, 30,
]


def _streams(d_len):
    stream = st.lists(st.integers(-20, 20), min_size=d_len, max_size=d_len)
    return st.tuples(stream, stream, stream).map(lambda t: [list(s) for s in t])


def test_single_row_follows_column_permutation():
    assert subblock_interleave(list(range(32))) == PERMUTATION


@given(st.integers(1, 200))
def test_interleave_shape(d_len):
    out = subblock_interleave(list(range(d_len)))
    rows = -(-d_len // 32)
    assert len(out) == 32 * rows
    assert out.count(None) == 32 * rows - d_len
    assert sorted(v for v in out if v is not None) == list(range(d_len))


def test_padding_positions_for_short_stream():
    out = subblock_interleave(list(range(30)))
    assert [i for i, v in enumerate(out) if v is None] == [0, 16]


@given(st.integers(1, 100).flatmap(_streams))
def test_round_trip_without_repetition(d):
    matcher = ConvRateMatcher()
    d_len = len(d[0])
    e = matcher.forward(d, 3 * d_len)
    assert len(e) == 3 * d_len
    assert list(matcher.reverse(e, d_len)) == d


@given(st.integers(1, 80), st.data())
def test_shortened_output_marks_transmitted_values(d_len, data):
    e_len = data.draw(st.integers(1, 3 * d_len))
    ones = [[1] * d_len for _ in range(3)]
    matcher = ConvRateMatcher()
    e = matcher.forward(ones, e_len)
    assert e == [1] * e_len
    recovered = matcher.reverse(e, d_len)
    assert sum(sum(s) for s in recovered) == e_len


def test_forward_reads_interleaved_stream_first():
    d = [list(range(32)), [100] * 32, [200] * 32]
    e = ConvRateMatcher().forward(d, 40)
    assert e[:32] == PERMUTATION
    assert e[32:] == [100] * 8


def test_reverse_wraps_to_eight_bits():
    matcher = ConvRateMatcher()
    d = [[100] * 32 for _ in range(3)]
    e = matcher.forward(d, 192)
    assert matcher.reverse(e, 32)[0] == [-56] * 32


def test_matcher_reused_for_different_lengths():
    matcher = ConvRateMatcher()
    a = [[1] * 40, [2] * 40, [3] * 40]
    b = [[4] * 10, [5] * 10, [6] * 10]
    assert list(matcher.reverse(matcher.forward(a, 120), 40)) == a
    assert list(matcher.reverse(matcher.forward(b, 30), 10)) == b


@pytest.mark.parametrize("e_len", [0, 28801])
def test_forward_rejects_output_length(e_len):
    with pytest.raises(ValueError):
        ConvRateMatcher().forward([[0] * 8] * 3, e_len)


def test_forward_rejects_wrong_stream_count():
    with pytest.raises(ValueError):
        ConvRateMatcher().forward([[0] * 8] * 2, 10)


def test_forward_rejects_unequal_streams():
    with pytest.raises(ValueError):
        ConvRateMatcher().forward([[0] * 8, [0] * 8, [0] * 7], 10)


def test_reverse_rejects_empty_input():
    with pytest.raises(ValueError):
        ConvRateMatcher().reverse([], 8)


def test_reverse_rejects_zero_length():
    with pytest.raises(ValueError):
        ConvRateMatcher().reverse([1, 2, 3], 0)


def test_interleave_rejects_empty_stream():
    with pytest.raises(ValueError):
        subblock_interleave([])
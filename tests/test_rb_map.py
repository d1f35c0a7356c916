import pytest

from ltephy.rb_map import RB_LEN, rb_pos, rb_pos_mid
from ltephy.slot import sym_len

ALL_RBS = [6, 15, 25, 50, 75, 100]


@pytest.mark.parametrize("rbs", ALL_RBS)
def test_mid_is_first_bin_after_dc(rbs):
    assert rb_pos_mid(rbs) == 1


@pytest.mark.parametrize("rbs", [6, 50, 100])
def test_even_upper_half_starts_at_mid(rbs):
    assert rb_pos(rbs, rbs // 2) == rb_pos_mid(rbs)


@pytest.mark.parametrize("rbs", [15, 25, 75])
def test_odd_centre_block_straddles_dc(rbs):
    half = rbs // 2
    assert rb_pos(rbs, half) + RB_LEN // 2 == sym_len(rbs)
    assert rb_pos(rbs, half + 1) == rb_pos_mid(rbs) + RB_LEN // 2


@pytest.mark.parametrize("rbs", ALL_RBS)
def test_blocks_are_contiguous_within_each_half(rbs):
    half = rbs // 2
    split = half + 1 if rbs % 2 else half
    for rb in range(split - 1):
        assert rb_pos(rbs, rb + 1) - rb_pos(rbs, rb) == RB_LEN
    for rb in range(split, rbs - 1):
        assert rb_pos(rbs, rb + 1) - rb_pos(rbs, rb) == RB_LEN


@pytest.mark.parametrize("rbs", ALL_RBS)
def test_subcarriers_distinct_and_skip_dc(rbs):
    fft_len = sym_len(rbs)
    half = rbs // 2
    bins = set()
    count = 0
    for rb in range(rbs):
        if rbs % 2 and rb == half:
            continue
        for j in range(RB_LEN):
            bins.add((rb_pos(rbs, rb) + j) % fft_len)
            count += 1
    assert len(bins) == count
    assert 0 not in bins
    assert all(0 <= b < fft_len for b in bins)


@pytest.mark.parametrize("rbs", ALL_RBS)
def test_first_block_lowest_frequency(rbs):
    positions = [rb_pos(rbs, rb) for rb in range(rbs)]
    assert positions[0] == max(positions[: rbs // 2 + 1]) - (rbs // 2 - (0 if rbs % 2 else 1)) * RB_LEN


@pytest.mark.parametrize("rbs,rb", [(6, 6), (6, -1), (100, 100), (15, 15)])
def test_rb_out_of_range(rbs, rb):
    with pytest.raises(ValueError):
        rb_pos(rbs, rb)


@pytest.mark.parametrize("rbs", [0, 7, 10, 101])
def test_unsupported_bandwidth(rbs):
    with pytest.raises(ValueError):
        rb_pos(rbs, 0)
    with pytest.raises(ValueError):
        rb_pos_mid(rbs)
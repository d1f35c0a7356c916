"""LTE downlink physical layer: slot geometry, PSS search, channel coding and rate matching."""

__version__ = "0.1.0"

__all__ = [
    "conv",
    "conv_rate_match",
    "interleaver",
    "pss_search",
    "rb_map",
    "slot",
    "turbo_dec",
    "turbo_enc",
    "turbo_rate_match",
    "viterbi",
]
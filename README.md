# ltephy

Pure-Python building blocks for the LTE downlink physical layer. It has no
dependencies outside the standard library.

## What is included

- **Slot geometry** (`ltephy.slot`): `slot_len`, `sym_len`, `cp_len`,
  `subframe_len` and `frame_len` for 6, 15, 25, 50, 75 and 100 resource
  blocks, and `sym_pos` for the start of symbols 0 to 6 within a slot.
  Unsupported bandwidths raise `ValueError`.
- **Resource block positions** (`ltephy.rb_map`): `rb_pos(rbs, rb)` gives the
  FFT bin of the first subcarrier of a resource block; `rb_pos_mid(rbs)` gives
  the first bin above DC.
- **PSS search** (`ltephy.pss_search`): `slice_samples` reduces complex
  samples to sign bits, `bit_correlate` and `bit_dot_product` correlate them
  against 64-sample references held as `(real_mask, imag_mask)` integers, and
  `pss_search` picks the strongest of three references over one or two
  channels, returning a `PssSearchResult` (`n_id_2`, `coarse`, `fine`, `mag`).
- **Convolutional coding** (`ltephy.conv`, `ltephy.viterbi`): `ConvCode` and
  `Termination` describe a code, recursive or not, zero-flushed or
  tail-biting, with optional puncturing. `conv_encode` encodes bits and
  `conv_decode` Viterbi-decodes signed 8-bit soft values into a
  `ViterbiResult` (`bits`, `metric`).
- **Turbo coding** (`ltephy.interleaver`, `ltephy.turbo_enc`,
  `ltephy.turbo_dec`): the QPP interleaver (`interleave`, `deinterleave`,
  `interleaver_params`, `unterminate`), `turbo_encode` producing a
  `TurboEncoded` with three terminated streams, and the Max-Log-MAP
  `TurboDecoder` with `decode` (packed bytes, first bit highest) and
  `decode_unpacked` (one bit per value).
- **Rate matching** (`ltephy.conv_rate_match`, `ltephy.turbo_rate_match`):
  `ConvRateMatcher` and `TurboRateMatcher` select output values from a
  circular buffer with `forward`, and combine received soft values back into
  three streams with `reverse` (8-bit wrapping addition, zero where nothing
  was received). `subblock_interleave` exposes the convolutional sub-block
  interleaver, with `None` at padding positions.

Soft values everywhere are signed bytes (-128 to 127); a positive value
favours a `1` bit.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Frame geometry:

```python
from ltephy.slot import slot_len, frame_len, sym_pos
from ltephy.rb_map import rb_pos

slot_len(25)     # samples per slot at 5 MHz
frame_len(100)   # samples per 10 ms frame at 20 MHz
sym_pos(6, 1)    # start of symbol 1 within a slot at 1.4 MHz
rb_pos(6, 0)     # FFT bin of the first resource block at 1.4 MHz
```

Convolutional encoding and Viterbi decoding:

```python
from ltephy.conv import ConvCode, Termination, conv_encode
from ltephy.viterbi import conv_decode

code = ConvCode(n=3, k=7, length=40, gen=(0o133, 0o171, 0o165),
                term=Termination.TAIL_BITING)
bits = [1, 0, 1, 1] * 10
coded = conv_encode(code, bits)
soft = [127 if b else -127 for b in coded]
result = conv_decode(code, soft)
result.bits      # decoded bits
result.metric    # decision margin of the best final state
```

Turbo encoding, rate matching and decoding:

```python
from ltephy.turbo_enc import TurboCode, turbo_encode
from ltephy.turbo_rate_match import TurboRateMatcher
from ltephy.turbo_dec import TurboDecoder

code = TurboCode(length=40)
encoded = turbo_encode(code, [0, 1] * 20)
streams = [encoded.d0, encoded.d1, encoded.d2]   # 44 bits each

matcher = TurboRateMatcher()
tx = matcher.forward(streams, 132, rv=0)
soft = [64 if b else -64 for b in tx]
d0, d1, d2 = matcher.reverse(soft, 44, rv=0)

decoder = TurboDecoder()
bits = decoder.decode_unpacked(d0, d1, d2, iterations=4)
packed = decoder.decode(d0, d1, d2, iterations=4)
```

## What it does not do

- It does not generate the secondary synchronisation signal sequences or
  detect them; `pss_search` also expects the caller to supply the three PSS
  reference masks.
- It does not talk to radio hardware or read sample files, and it does not
  decode control or shared channel messages.
- It has no command-line program; it is a library only.
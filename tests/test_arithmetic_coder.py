from decimal import Decimal, localcontext

import pytest

from arcode.coding import ArithmeticDecoder, ArithmeticEncoder, build_partition, quantize
from arcode.coding.arithmetic import decode, encode
from arcode.coding.partition import Interval, IntervalPartition
from arcode.coding.quantize import Codeword
from arcode.config import CodingContext
from arcode.errors import (
    DecodeStallError,
    EmptyInputError,
    PrecisionInsufficientError,
    UnknownSymbolError,
)
from arcode.model import ProbabilityModel
from arcode.trace import CollectingObserver, DecodeStep, EncodeStep


def _setup(text, context=None):
    ctx = context or CodingContext.for_message(len(text), len(text))
    m = ProbabilityModel(ctx)
    m.fit(text)
    return build_partition(m.probabilities, ctx), ctx


def test_aaab_final_interval():
    part, ctx = _setup("AAAB")
    interval = ArithmeticEncoder(part, ctx).encode("AAAB")
    assert interval.low == Decimal("0.31640625")
    assert interval.high == Decimal("0.421875")
    assert interval.width(ctx) == Decimal("0.10546875")
    assert interval.width(ctx) == Decimal("0.75") ** 3 * Decimal("0.25")


def test_aaab_decode_from_midpoint():
    part, ctx = _setup("AAAB")
    interval = encode("AAAB", part, ctx)
    assert decode(interval.midpoint(ctx), 4, part, ctx) == list("AAAB")


def test_aaab_decode_from_codeword():
    part, ctx = _setup("AAAB")
    decoder = ArithmeticDecoder(part, ctx)
    assert decoder.decode_codeword(Codeword(p=3, q=3), 4) == list("AAAB")


@pytest.mark.parametrize(
    "text",
    [
        "AAAB",
        "BA",
        "KURBATOVMAKSIMANDREEVIC",
        "hello world",
        "abracadabra",
        "aaaa",
        "the quick brown fox jumps over the lazy dog " * 5,
    ],
)
def test_round_trip_through_quantized_point(text):
    """Decoding p / 2**q reproduces the input exactly."""

    part, ctx = _setup(text)
    interval = ArithmeticEncoder(part, ctx).encode(text)
    codeword = quantize(interval, ctx)
    decoded = ArithmeticDecoder(part, ctx).decode_codeword(codeword, len(text))
    assert "".join(decoded) == text


def test_round_trip_integer_symbols():
    seq = [3, 1, 2, 3, 3, 1, 0]
    part, ctx = _setup(seq)
    interval = encode(seq, part, ctx)
    codeword = quantize(interval, ctx)
    assert decode(codeword.value(ctx), len(seq), part, ctx) == seq


def test_interval_narrows_strictly():
    part, ctx = _setup("mississippi")
    obs = CollectingObserver()
    ArithmeticEncoder(part, ctx, obs).encode("mississippi")
    steps = obs.of_type(EncodeStep)
    assert len(steps) == 11
    widths = [s.high - s.low for s in steps]
    assert all(b < a for a, b in zip(widths, widths[1:]))
    assert [s.symbol for s in steps] == list("mississippi")


def test_unknown_symbol_error():
    part, ctx = _setup("AAAB")
    with pytest.raises(UnknownSymbolError) as excinfo:
        encode("AAC", part, ctx)
    assert excinfo.value.symbol == "C"
    assert excinfo.value.position == 2


def test_empty_sequence_error():
    part, ctx = _setup("AAAB")
    with pytest.raises(EmptyInputError):
        encode("", part, ctx)


def test_interval_collapse_detected():
    ctx = CodingContext(precision=3, epsilon=Decimal("1e-2"))
    part = build_partition({"A": Decimal("0.5"), "B": Decimal("0.5")}, ctx)
    with pytest.raises(PrecisionInsufficientError):
        encode("B" * 30, part, ctx)


def test_decode_stall_at_first_step():
    part, ctx = _setup("AAAB")
    with pytest.raises(DecodeStallError) as excinfo:
        decode(Decimal("1.5"), 3, part, ctx)
    assert excinfo.value.partial == []
    assert excinfo.value.step == 0


def test_decode_stall_keeps_partial_result():
    ctx = CodingContext()
    gapped = IntervalPartition({"A": Interval(Decimal(0), Decimal("0.5"))})
    with pytest.raises(DecodeStallError) as excinfo:
        decode(Decimal("0.25"), 3, gapped, ctx)
    assert excinfo.value.partial == ["A"]
    assert excinfo.value.step == 1
    assert excinfo.value.value == Decimal("0.5")


def test_decode_zero_and_negative_length():
    part, ctx = _setup("AAAB")
    assert decode(Decimal("0.3"), 0, part, ctx) == []
    with pytest.raises(ValueError):
        decode(Decimal("0.3"), -1, part, ctx)


def test_decode_near_upper_boundary():
    part, ctx = _setup("AAAB")
    obs = CollectingObserver()
    with localcontext(ctx.decimal_context()):
        value = 1 - 5 * ctx.epsilon
    decoded = decode(value, 2, part, ctx, obs)
    assert decoded == ["B", "B"]
    for step in obs.of_type(DecodeStep):
        assert 0 <= step.value_out <= 1 - ctx.epsilon


def test_decode_observer_records():
    part, ctx = _setup("AAAB")
    obs = CollectingObserver()
    decode(Decimal("0.375"), 4, part, ctx, obs)
    steps = obs.of_type(DecodeStep)
    assert [s.index for s in steps] == [0, 1, 2, 3]
    assert steps[0].value_in == Decimal("0.375")
    assert steps[0].value_out == Decimal("0.5")

from decimal import Decimal

import pytest

from arcode.config import Config, CodingContext, DEFAULT_CONTEXT, get_config


def test_config_singleton():
    """get_config should return the same singleton instance across calls."""

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2
    assert isinstance(c1, Config)


def test_default_context_matches_config():
    assert DEFAULT_CONTEXT.precision == Config.DECIMAL_PRECISION == 100
    assert DEFAULT_CONTEXT.epsilon == Decimal("1e-50")
    assert DEFAULT_CONTEXT.max_code_bits == Config.MAX_CODE_BITS


def test_decimal_context_uses_precision():
    ctx = CodingContext(precision=250)
    assert ctx.decimal_context().prec == 250
    # Each call returns a fresh context object
    assert ctx.decimal_context() is not ctx.decimal_context()


def test_resolvable_bits():
    assert CodingContext(precision=100).resolvable_bits == 332


def test_safe_code_bits():
    assert CodingContext().safe_code_bits == 110
    # Epsilon is the tighter limit here
    assert CodingContext(precision=400, epsilon=Decimal("1e-20")).safe_code_bits == 66


def test_for_short_message_keeps_defaults():
    ctx = CodingContext.for_message(4, 4)
    assert ctx.precision == 100
    assert ctx.epsilon == Decimal("1e-50")


def test_for_long_message_scales_up():
    ctx = CodingContext.for_message(200, 200)
    # D = ceil(200 * log10(200)) = 461
    assert ctx.precision == 3 * 461 + 2 * Config.PRECISION_GUARD_DIGITS
    assert ctx.epsilon == Decimal("1e-932")
    assert ctx.epsilon < Config.EPSILON


@pytest.mark.parametrize(
    "kwargs",
    [
        {"precision": 0},
        {"epsilon": Decimal(0)},
        {"epsilon": Decimal(1)},
        {"max_code_bits": 0},
    ],
)
def test_invalid_context(kwargs):
    with pytest.raises(ValueError):
        CodingContext(**kwargs)


def test_context_is_frozen():
    ctx = CodingContext()
    with pytest.raises(AttributeError):
        ctx.precision = 10  # type: ignore[misc]

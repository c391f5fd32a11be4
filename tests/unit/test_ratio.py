import pytest

from pegswap.core import Settings
from pegswap.core.constants import MAX_POOL_RATIO, MIN_POOL_RATIO
from pegswap.core.exc import (
    AmountDomainError,
    BelowMinimumConvert,
    PoolHasNoDepth,
    RatioTooHigh,
    RatioTooLow,
)
from pegswap.ratio import (
    check_max_pool_ratio,
    check_min_convert,
    check_min_pool_ratio,
    get_ratio,
    peg_value,
    pool_ratio,
)

from helpers import _amt, make_pool


SETTINGS = Settings(min_convert=_amt("1.0000 USD"), pool_fee=30)


# -----------------------------
# Minimum convert
# -----------------------------


def test_min_convert_reference_pool():
    pool = make_pool("USDT")
    check_min_convert(_amt("1.0000 USDT"), pool, SETTINGS)
    with pytest.raises(BelowMinimumConvert) as ei:
        check_min_convert(_amt("0.9999 USDT"), pool, SETTINGS)
    print("[min-convert]", ei.value)
    assert "must exceed minimum convert amount of 1.0000 USD" in str(ei.value)
    assert ei.value.bound == SETTINGS.min_convert


def test_min_convert_reference_pool_ignores_pegged_amount():
    # pegged to the reference unit itself: valued at exactly 1.00 per token
    pool = make_pool("USDX", pegged="3.0000 USD", peg_unit="USD")
    assert peg_value(pool, SETTINGS) == 1.00
    with pytest.raises(BelowMinimumConvert):
        check_min_convert(_amt("0.5000 USDX"), pool, SETTINGS)


def test_min_convert_uses_peg_for_other_units():
    pool = make_pool("EOS", pegged="2.5000 USD", peg_unit="EOS")
    assert peg_value(pool, SETTINGS) == 2.5
    check_min_convert(_amt("0.4001 EOS"), pool, SETTINGS)
    with pytest.raises(BelowMinimumConvert):
        check_min_convert(_amt("0.3999 EOS"), pool, SETTINGS)


def test_min_convert_rejects_foreign_quantity():
    with pytest.raises(AmountDomainError):
        check_min_convert(_amt("5.0000 USDC"), make_pool("USDT"), SETTINGS)


# -----------------------------
# Pool fill bounds
# -----------------------------


def test_max_pool_ratio_boundary_inclusive():
    pool = make_pool("USDT", "1000.0000", "1000.0000")
    check_max_pool_ratio(_amt("4000.0000 USDT"), pool)
    with pytest.raises(RatioTooHigh) as ei:
        check_max_pool_ratio(_amt("4000.0001 USDT"), pool)
    print("[max-ratio]", ei.value)
    assert "lower than 500%" in str(ei.value)
    assert ei.value.bound == MAX_POOL_RATIO


def test_min_pool_ratio_boundary_inclusive():
    pool = make_pool("USDC", "1000.0000", "1000.0000")
    check_min_pool_ratio(_amt("800.0000 USDC"), pool)
    with pytest.raises(RatioTooLow) as ei:
        check_min_pool_ratio(_amt("800.0001 USDC"), pool)
    print("[min-ratio]", ei.value)
    assert "above 20%" in str(ei.value)
    assert ei.value.bound == MIN_POOL_RATIO


def test_ratio_uses_raw_integer_amounts():
    pool = make_pool("USDT", "250.0000", "1000.0000")
    assert pool_ratio(pool.balance.amount, pool) == 0.25


def test_zero_depth_raises():
    pool = make_pool("USDT", "1000.0000", "0.0000")
    with pytest.raises(PoolHasNoDepth):
        check_max_pool_ratio(_amt("1.0000 USDT"), pool)


# -----------------------------
# Monitoring ratio
# -----------------------------


def test_get_ratio_nets_out_proceeds():
    pool = make_pool("USDT", "1000.0000", "1000.0000", proceeds="10.0000")
    assert get_ratio(pool, _amt("1010.0000 USDT")) == 1.0
    assert get_ratio(pool, _amt("510.0000 USDT")) == 0.5

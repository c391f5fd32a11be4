import pytest

from pegswap.core import Asset, Settings
from pegswap.core.exc import FeeExceedsQuantity
from pegswap.fees import calculate_pool_fee, fee_for_amount

from helpers import _amt


def _settings(bps: int) -> Settings:
    return Settings(min_convert=_amt("0.0001 USD"), pool_fee=bps)


@pytest.mark.parametrize("amount,bps,fee", [
    (1_000_000, 30, 3_000),
    (10_000, 30, 30),
    (12_345_678, 25, 30_864),
    (333, 30, 1),
    (2, 30, 1),
    (1_000_000, 0, 0),
    (1, 0, 0),
    (1_000_000, 10_000, 1_000_000),
])
def test_fee_for_amount_floor_with_one_unit_minimum(amount, bps, fee):
    got = fee_for_amount(amount, bps)
    print(f"[fee] amount={amount} bps={bps} -> {got} (expect {fee})")
    assert got == fee


def test_pool_fee_same_symbol_as_quantity():
    q = _amt("100.0000 USDT")
    fee = calculate_pool_fee(q, _settings(30))
    assert fee == _amt("0.3000 USDT")
    assert q - fee == _amt("99.7000 USDT")


def test_smallest_unit_with_positive_rate_is_rejected():
    q = _amt("0.0001 USDT")
    print(f"[fee] {q} at 30 bps: fee lifts to one unit and consumes the trade")
    with pytest.raises(FeeExceedsQuantity) as ei:
        calculate_pool_fee(q, _settings(30))
    assert ei.value.token == "USDT"


def test_full_rate_is_rejected():
    with pytest.raises(FeeExceedsQuantity):
        calculate_pool_fee(_amt("100.0000 USDT"), _settings(10_000))


def test_zero_rate_is_free():
    q = _amt("0.0001 USDT")
    assert calculate_pool_fee(q, _settings(0)).is_zero()


@pytest.mark.parametrize("amount", [2, 3, 99, 3_333, 10_001, 987_654_321])
@pytest.mark.parametrize("bps", [1, 30, 250, 9_999])
def test_fee_bounds(amount, bps):
    q = Asset(amount, _amt("1.0000 USDT").symbol)
    try:
        fee = calculate_pool_fee(q, _settings(bps))
    except FeeExceedsQuantity:
        assert fee_for_amount(amount, bps) >= amount
        return
    assert 0 < fee.amount < q.amount
    assert fee.amount == max(1, amount * bps // 10_000)

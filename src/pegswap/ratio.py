"""
Ratio guard: minimum trade size and pool fill bounds around a swap.

A pool's fill ratio is its raw integer balance over its raw integer depth.
Deposits may not lift the ratio above MAX_POOL_RATIO; withdrawals may not
drop it below MIN_POOL_RATIO. The minimum trade size is compared in
reference-unit terms using the source pool's peg.
"""
from __future__ import annotations

from .core import Asset, Pool, Settings, MAX_POOL_RATIO, MIN_POOL_RATIO
from .core.exc import (
    AmountDomainError,
    BelowMinimumConvert,
    PoolHasNoDepth,
    RatioTooHigh,
    RatioTooLow,
)
from .core.fmt import to_reference


def _check_pool_token(quantity: Asset, pool: Pool) -> None:
    if quantity.symbol != pool.symbol:
        raise AmountDomainError(
            f"{quantity} does not match pool {pool.token_identifier} ({pool.symbol})"
        )


def _depth_amount(pool: Pool) -> int:
    if pool.depth.amount == 0:
        raise PoolHasNoDepth(f"{pool.token_identifier} pool has no depth", token=pool.token_identifier)
    return pool.depth.amount


def pool_ratio(amount: int, pool: Pool) -> float:
    """Fill ratio of a raw `amount` against the pool's depth."""
    return amount / _depth_amount(pool)


def peg_value(pool: Pool, settings: Settings) -> float:
    """Reference-unit value of one token of `pool` (1.00 when pegged to the reference itself)."""
    if pool.peg_unit == settings.reference_unit:
        return 1.00
    return to_reference(pool.pegged)


def check_min_convert(quantity: Asset, pool: Pool, settings: Settings) -> None:
    """Reject trades worth less than settings.min_convert in reference terms."""
    _check_pool_token(quantity, pool)
    value = to_reference(quantity) * peg_value(pool, settings)
    minimum = to_reference(settings.min_convert)
    if not value >= minimum:
        raise BelowMinimumConvert(
            f"{quantity.code} quantity {quantity} must exceed minimum convert amount of {settings.min_convert}",
            token=quantity.code,
            bound=settings.min_convert,
        )


def check_max_pool_ratio(quantity: Asset, pool: Pool) -> None:
    """Reject a deposit that would leave the pool above MAX_POOL_RATIO of its depth."""
    _check_pool_token(quantity, pool)
    remaining = pool.balance.amount + quantity.amount
    ratio = pool_ratio(remaining, pool)
    if not ratio <= MAX_POOL_RATIO:
        raise RatioTooHigh(
            f"{quantity.code} pool ratio must be lower than {MAX_POOL_RATIO:.0%} (would be {ratio:.2%})",
            token=quantity.code,
            bound=MAX_POOL_RATIO,
        )


def check_min_pool_ratio(out: Asset, pool: Pool) -> None:
    """Reject a withdrawal that would leave the pool below MIN_POOL_RATIO of its depth."""
    _check_pool_token(out, pool)
    remaining = pool.balance.amount - out.amount
    ratio = pool_ratio(remaining, pool)
    if not ratio >= MIN_POOL_RATIO:
        raise RatioTooLow(
            f"{out.code} pool ratio must be above {MIN_POOL_RATIO:.0%} (would be {ratio:.2%})",
            token=out.code,
            bound=MIN_POOL_RATIO,
        )


def get_ratio(pool: Pool, live_balance: Asset) -> float:
    """Ratio of the live ledger balance, net of unwithdrawn proceeds, to depth.

    Monitoring only; swap checks use the cached `pool.balance`.
    """
    _check_pool_token(live_balance, pool)
    return pool_ratio(live_balance.amount - pool.proceeds.amount, pool)


__all__ = [
    "pool_ratio",
    "peg_value",
    "check_min_convert",
    "check_max_pool_ratio",
    "check_min_pool_ratio",
    "get_ratio",
]

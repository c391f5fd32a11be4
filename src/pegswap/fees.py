"""
Pool fee (basis points, taken from the inbound quantity); integer domain only.

The fee is floored on the token grid, then lifted to one smallest unit when a
positive rate would otherwise round to zero, so small trades still pay.
"""
from __future__ import annotations

from .core import Asset, Settings, BPS_DENOM
from .core.exc import FeeExceedsQuantity


def fee_for_amount(amount: int, pool_fee_bps: int) -> int:
    """Raw fee in smallest units for `amount` at `pool_fee_bps` (floor, min 1 unit)."""
    fee = (amount * pool_fee_bps) // BPS_DENOM
    if pool_fee_bps > 0 and fee == 0:
        fee = 1
    return fee


def calculate_pool_fee(quantity: Asset, settings: Settings) -> Asset:
    """Fee charged on `quantity`, in the same token and precision.

    Raises FeeExceedsQuantity if the fee would consume the whole quantity.
    """
    fee = Asset(fee_for_amount(quantity.amount, settings.pool_fee), quantity.symbol)
    if not fee < quantity:
        raise FeeExceedsQuantity(
            f"{quantity.code} fee {fee} exceeds quantity {quantity}",
            token=quantity.code,
            bound=fee,
        )
    return fee


__all__ = [
    "fee_for_amount",
    "calculate_pool_fee",
]

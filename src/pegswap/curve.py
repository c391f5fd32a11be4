"""
Pegged, amplified two-pool curve (**pool math only**).

out = in / (base_upper + in) * quote_upper, evaluated in reference units, where
each pool's `upper` blends the amplified flat part of the curve with its own
fill ratio:

    upper = A * D - D + D * (balance / depth)

with A the smaller amplifier of the pair and D the smaller reference-unit depth.
Large A approaches a fixed exchange rate at the peg; A = 1 is a constant-product
curve over the pools' fill ratios. Anchoring both pools to the smaller depth
keeps a deep pool from dictating the curve shape.

All intermediate values are floats; the result is quantised once, on the quote
token grid, by `from_reference`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core import Asset, Pool, is_valid_code
from .core.exc import (
    ConnectorMissing,
    InvalidSymbol,
    PoolDisabled,
    PoolHasNoBalance,
    PoolHasNoDepth,
    PoolNotFound,
    SameTokenConversion,
)
from .core.fmt import to_reference, from_reference

# --- Debug utilities (toggleable) ---
DEBUG_CURVE = False

def _dbg(msg: str) -> None:
    if DEBUG_CURVE:
        print(f"[CURVE] {msg}")


# ----------------------------
# Preconditions
# ----------------------------

def validate_pair(base: Optional[Pool], quote: Optional[Pool], base_code: str, quote_code: str) -> None:
    """Check every pool precondition of a base -> quote conversion.

    `base`/`quote` are the looked-up records (None when absent).
    """
    if base_code == quote_code:
        raise SameTokenConversion(f"{quote_code} cannot convert symbol code to self", token=quote_code)
    if not base_code:
        raise InvalidSymbol("[quantity] symbol code cannot be empty")
    if not quote_code:
        raise InvalidSymbol("[target] symbol code cannot be empty")
    for code in (base_code, quote_code):
        if not is_valid_code(code):
            raise InvalidSymbol(f"invalid symbol code {code!r}", token=str(code))

    for code, pool in ((base_code, base), (quote_code, quote)):
        if pool is None:
            raise PoolNotFound(f"{code} pool does not exist", token=code)
    for pool in (base, quote):
        if not pool.enabled:
            raise PoolDisabled(f"{pool.token_identifier} pool is not enabled", token=pool.token_identifier)
    for pool in (base, quote):
        if pool.balance.amount <= 0:
            raise PoolHasNoBalance(f"{pool.token_identifier} pool has no balance", token=pool.token_identifier)
    for pool in (base, quote):
        if pool.depth.amount <= 0:
            raise PoolHasNoDepth(f"{pool.token_identifier} pool has no depth", token=pool.token_identifier)
    if not base.has_connector(quote_code):
        raise ConnectorMissing(
            f"{quote_code} connector does not exist on {base_code} pool",
            token=quote_code,
        )


# ----------------------------
# Curve evaluation
# ----------------------------

@dataclass(frozen=True)
class CurveTrace:
    """Every intermediate value of one curve evaluation (reference units)."""

    base_pegged: float
    quote_pegged: float
    base_depth: float
    quote_depth: float
    min_depth: float
    min_amplifier: int
    base_ratio: float
    quote_ratio: float
    base_upper: float
    quote_upper: float
    in_amount: float
    out_amount: float
    out: Asset


def upper_bound(min_amplifier: int, min_depth: float, ratio: float) -> float:
    """Liquidity term of one pool: A*D - D + D*ratio."""
    return min_amplifier * min_depth - min_depth + min_depth * ratio


def trace_out(quantity: Asset, base: Pool, quote: Pool) -> CurveTrace:
    """Evaluate the curve for `quantity` of base, returning all intermediates.

    Pool preconditions are checked first (see validate_pair).
    """
    validate_pair(base, quote, quantity.code, quote.token_identifier)
    if quantity.symbol != base.symbol:
        raise InvalidSymbol(
            f"{quantity} does not match {base.token_identifier} pool precision",
            token=quantity.code,
        )

    # pegged
    base_pegged = to_reference(base.pegged)
    quote_pegged = to_reference(quote.pegged)

    # depth
    base_depth = to_reference(base.depth) * base_pegged
    quote_depth = to_reference(quote.depth) * quote_pegged
    min_depth = min(base_depth, quote_depth)

    # min amplifier
    min_amplifier = min(base.amplifier, quote.amplifier)

    # ratio
    base_ratio = base.balance.amount / base.depth.amount
    quote_ratio = quote.balance.amount / quote.depth.amount

    # upper
    base_upper = upper_bound(min_amplifier, min_depth, base_ratio)
    quote_upper = upper_bound(min_amplifier, min_depth, quote_ratio)

    # amount / (balance_from + amount) * balance_to
    in_amount = to_reference(quantity) * base_pegged
    out_amount = in_amount / (base_upper + in_amount) * quote_upper

    _dbg(f"{base.token_identifier}->{quote.token_identifier}: pegged={base_pegged}/{quote_pegged} "
         f"depth={base_depth}/{quote_depth} min_depth={min_depth} min_amplifier={min_amplifier}")
    _dbg(f"ratio={base_ratio}/{quote_ratio} upper={base_upper}/{quote_upper} "
         f"in_amount={in_amount} out_amount={out_amount}")

    out = from_reference(out_amount / quote_pegged, quote.symbol)
    return CurveTrace(
        base_pegged=base_pegged,
        quote_pegged=quote_pegged,
        base_depth=base_depth,
        quote_depth=quote_depth,
        min_depth=min_depth,
        min_amplifier=min_amplifier,
        base_ratio=base_ratio,
        quote_ratio=quote_ratio,
        base_upper=base_upper,
        quote_upper=quote_upper,
        in_amount=in_amount,
        out_amount=out_amount,
        out=out,
    )


def calculate_out(quantity: Asset, base: Pool, quote: Pool) -> Asset:
    """Outbound quantity of quote for `quantity` of base (no fee, no bounds)."""
    return trace_out(quantity, base, quote).out


def spot_rate(base: Pool, quote: Pool) -> float:
    """Marginal out/in rate in token units for an infinitesimal trade.

    d(out)/d(in) at in -> 0 equals quote_upper / base_upper, scaled by the pegs.
    """
    t = trace_out(Asset(1, base.symbol), base, quote)
    return (t.quote_upper / t.base_upper) * (t.base_pegged / t.quote_pegged)


__all__ = [
    "DEBUG_CURVE",
    "validate_pair",
    "CurveTrace",
    "upper_bound",
    "trace_out",
    "calculate_out",
    "spot_rate",
]

"""
Pegged-value bridge and formatting helpers.

Core pricing compares values in a common reference unit as floats; assets stay
integer. This module is the only place where the two meet:

- to_reference(asset): integer amount -> float value in whole tokens.
- from_reference(value, symbol): float -> integer amount on the symbol grid,
  rounded to nearest with ties away from zero.

The float is expanded to its exact Decimal value before scaling, so the
rounding is deterministic and does not depend on how the float would print.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

from .constants import MAX_AMOUNT
from .exc import AmountDomainError, PrecisionError
from .amounts import Asset, Symbol

# Debug printing control (formatting layer)
DEBUG_FMT = False

def _dbg(msg: str) -> None:
    if DEBUG_FMT:
        print(msg)


#: Working precision for the exact float expansion; a double expands to at
#: most a few dozen significant digits in the ranges the ledger allows.
CONVERT_DECIMAL_PRECISION: int = 80


# ---------------------------------------------------------------------------
# Pegged-value conversion
# ---------------------------------------------------------------------------

def to_reference(quantity: Asset) -> float:
    """Return the asset's value in whole tokens as a float."""
    if not isinstance(quantity, Asset):
        raise AmountDomainError("to_reference(): expected Asset")
    return quantity.amount / quantity.symbol.unit()


def from_reference(value: float, symbol: Symbol) -> Asset:
    """Quantise a float value onto the symbol grid (nearest, ties away from zero).

    Raises PrecisionError if the symbol has no usable precision, the value is
    not finite, or the quantised amount falls outside the ledger bound.
    """
    if not isinstance(symbol, Symbol):
        raise PrecisionError(f"from_reference(): undefined precision for {symbol!r}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PrecisionError(f"from_reference(): numeric value expected, got {value!r}", token=symbol.code)
    if not math.isfinite(value):
        raise PrecisionError(f"{symbol.code} value is not finite: {value}", token=symbol.code)

    with localcontext() as ctx:
        ctx.prec = CONVERT_DECIMAL_PRECISION
        scaled = Decimal(value).scaleb(symbol.precision)
        amount = int(scaled.to_integral_value(rounding=ROUND_HALF_UP))
    _dbg(f"from_reference: value={value!r} scaled={scaled} amount={amount} symbol={symbol}")

    if abs(amount) > MAX_AMOUNT:
        raise PrecisionError(
            f"{symbol.code} value {value} exceeds representable amount",
            token=symbol.code,
            bound=MAX_AMOUNT,
        )
    return Asset(amount, symbol)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_dec(x: Decimal, places: int = 8) -> str:
    """Format a Decimal with fixed fractional digits, for logs and tests."""
    return format(x, f".{places}f")


def asset_to_decimal(a: Asset) -> Decimal:
    """Exact Decimal value of an asset (logging/printing only)."""
    if a is None:
        raise AmountDomainError("asset_to_decimal(): received None")
    if not isinstance(a, Asset):
        raise AmountDomainError("asset_to_decimal(): unsupported amount type")
    return a.to_decimal()


__all__ = [
    "CONVERT_DECIMAL_PRECISION",
    "to_reference",
    "from_reference",
    "fmt_dec",
    "asset_to_decimal",
]

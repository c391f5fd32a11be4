"""
Quantity primitives: Symbol (code + decimal precision) and Asset (integer amount).

- Asset: signed integer amount in the smallest unit of its symbol, bounded by
  MAX_AMOUNT in magnitude (ledger asset semantics).
- Arithmetic and ordering are only defined between assets of the same symbol;
  mixing symbols raises AmountDomainError instead of silently coercing.
- Division rounds toward negative infinity (floor); Decimal is used only for
  display and parsing, never for arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .constants import MAX_AMOUNT, MAX_PRECISION, SYMBOL_CODE_MAX_LEN
from .exc import AmountDomainError, InvalidSymbol, PrecisionError

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


# ----------------------------
# Symbol
# ----------------------------

def is_valid_code(code: object) -> bool:
    """Return True if code is 1..7 upper-case ASCII letters."""
    if not isinstance(code, str):
        return False
    if not (1 <= len(code) <= SYMBOL_CODE_MAX_LEN):
        return False
    return all("A" <= c <= "Z" for c in code)


def _check_int(name: str, v: object) -> None:
    if not isinstance(v, int) or isinstance(v, bool):
        raise AmountDomainError(f"{name} must be an int, got {v!r}")


@dataclass(frozen=True)
class Symbol:
    """Token identifier plus the number of decimal places of its grid."""
    code: str
    precision: int

    def __post_init__(self):
        if not is_valid_code(self.code):
            raise InvalidSymbol(f"invalid symbol code {self.code!r}", token=str(self.code))
        p = self.precision
        if p is None or not isinstance(p, int) or isinstance(p, bool):
            raise PrecisionError(f"{self.code} has undefined precision", token=self.code)
        if not (0 <= p <= MAX_PRECISION):
            raise PrecisionError(
                f"{self.code} precision must be in [0, {MAX_PRECISION}], got {p}",
                token=self.code,
                bound=MAX_PRECISION,
            )

    def unit(self) -> int:
        """Number of smallest units in one whole token (10**precision)."""
        return 10 ** self.precision

    def __str__(self) -> str:
        return f"{self.precision},{self.code}"


# ----------------------------
# Asset (integer amount on a symbol grid)
# ----------------------------

@dataclass(frozen=True)
class Asset:
    """Ledger quantity: integer amount on the grid of `symbol`."""
    amount: int
    symbol: Symbol

    def __post_init__(self):
        _check_int("Asset.amount", self.amount)
        if not isinstance(self.symbol, Symbol):
            raise AmountDomainError("Asset.symbol must be a Symbol")
        if abs(self.amount) > MAX_AMOUNT:
            raise AmountDomainError(f"{self.symbol.code} amount out of range: {self.amount}")

    # ------------- constructors -------------

    @staticmethod
    def zero(symbol: Symbol) -> "Asset":
        return Asset(0, symbol)

    @classmethod
    def from_string(cls, text: str) -> "Asset":
        """Parse the ledger string form, e.g. '1000.0000 EOS'.

        Precision is the number of fractional digits written.
        """
        if not isinstance(text, str):
            raise AmountDomainError(f"asset string expected, got {text!r}")
        parts = text.strip().split()
        if len(parts) != 2:
            raise AmountDomainError(f"malformed asset string {text!r}")
        num, code = parts
        negative = num.startswith("-")
        if negative:
            num = num[1:]
        whole, dot, frac = num.partition(".")
        if not whole.isdigit() or (dot and not frac.isdigit()):
            raise AmountDomainError(f"malformed asset amount {text!r}")
        symbol = Symbol(code, len(frac))
        amount = int(whole + frac)
        _dbg(f"from_string: {text!r} -> amount={amount}, symbol={symbol}")
        return cls(-amount if negative else amount, symbol)

    # ------------- accessors -------------

    @property
    def code(self) -> str:
        return self.symbol.code

    @property
    def precision(self) -> int:
        return self.symbol.precision

    def is_zero(self) -> bool:
        return self.amount == 0

    def to_decimal(self) -> Decimal:
        """Exact Decimal value (amount * 10^-precision), for display only."""
        return Decimal(self.amount).scaleb(-self.symbol.precision)

    # ------------- comparisons (same symbol only) -------------

    def _check_same(self, other: object, op: str) -> "Asset":
        if not isinstance(other, Asset):
            raise AmountDomainError(f"Asset {op} requires Asset operands")
        if other.symbol != self.symbol:
            raise AmountDomainError(
                f"Asset {op} symbol mismatch: {self.symbol} vs {other.symbol}"
            )
        return other

    def __lt__(self, other: "Asset") -> bool:
        return self.amount < self._check_same(other, "comparison").amount

    def __le__(self, other: "Asset") -> bool:
        return self.amount <= self._check_same(other, "comparison").amount

    def __gt__(self, other: "Asset") -> bool:
        return self.amount > self._check_same(other, "comparison").amount

    def __ge__(self, other: "Asset") -> bool:
        return self.amount >= self._check_same(other, "comparison").amount

    # ------------- arithmetic (integer domain) -------------

    def __add__(self, other: "Asset") -> "Asset":
        other = self._check_same(other, "addition")
        return Asset(self.amount + other.amount, self.symbol)

    def __sub__(self, other: "Asset") -> "Asset":
        other = self._check_same(other, "subtraction")
        return Asset(self.amount - other.amount, self.symbol)

    def __neg__(self) -> "Asset":
        return Asset(-self.amount, self.symbol)

    def mul_by_scalar(self, k: int) -> "Asset":
        _check_int("scalar", k)
        return Asset(self.amount * k, self.symbol)

    def div_by_scalar_down(self, k: int) -> "Asset":
        """Divide by a positive integer scalar, rounding toward negative infinity."""
        _check_int("scalar", k)
        if k == 0:
            raise ZeroDivisionError("division by zero scalar")
        if k < 0:
            raise AmountDomainError(f"negative scalar not allowed: k={k}")
        return Asset(self.amount // k, self.symbol)

    # ------------- display -------------

    def __str__(self) -> str:
        p = self.symbol.precision
        sign = "-" if self.amount < 0 else ""
        whole, frac = divmod(abs(self.amount), self.symbol.unit())
        if p == 0:
            return f"{sign}{whole} {self.symbol.code}"
        return f"{sign}{whole}.{frac:0{p}d} {self.symbol.code}"


__all__ = [
    "is_valid_code",
    "Symbol",
    "Asset",
]

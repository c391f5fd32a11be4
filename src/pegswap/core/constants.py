"""
pegswap core constants
======================

Ledger-aligned integer bounds and the pricing limits enforced around a swap.
Float thresholds are compared against raw integer ratios (balance / depth).
"""

# ---------------------------------------------------------------------------
# Ledger asset bounds
# ---------------------------------------------------------------------------

#: Largest magnitude an asset amount may hold (ledger asset bound).
MAX_AMOUNT: int = (1 << 62) - 1

#: Maximum number of decimal places a token symbol may declare.
MAX_PRECISION: int = 18

#: Symbol codes are 1..7 upper-case letters.
SYMBOL_CODE_MAX_LEN: int = 7


# ---------------------------------------------------------------------------
# Pricing limits
# ---------------------------------------------------------------------------

#: Basis-point denominator for the pool fee (1 bps = 1/10000).
BPS_DENOM: int = 10_000

#: A deposit may not lift a pool above 500% of its depth.
MAX_POOL_RATIO: float = 5.0

#: A withdrawal may not drop a pool below 20% of its depth.
MIN_POOL_RATIO: float = 0.2

#: Default code of the common reference unit pegs are expressed in.
REFERENCE_UNIT: str = "USD"

#: Memo attached to every outbound transfer.
CONVERT_MEMO: str = "convert"

#: Default name of the account the engine holds pool funds under.
DEFAULT_ACCOUNT: str = "pegswap"


__all__ = [
    "MAX_AMOUNT",
    "MAX_PRECISION",
    "SYMBOL_CODE_MAX_LEN",
    "BPS_DENOM",
    "MAX_POOL_RATIO",
    "MIN_POOL_RATIO",
    "REFERENCE_UNIT",
    "CONVERT_MEMO",
    "DEFAULT_ACCOUNT",
]

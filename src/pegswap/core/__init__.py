"""
pegswap core
============

Unified exports for the integer-domain quantity primitives, the pegged-value
bridge, the persisted records and the exception hierarchy.
Floats appear only in the pegged-value bridge (`fmt`); every other core type
is integer-domain.
"""

# Ledger bounds and pricing limits
from .constants import (
    MAX_AMOUNT,
    MAX_PRECISION,
    SYMBOL_CODE_MAX_LEN,
    BPS_DENOM,
    MAX_POOL_RATIO,
    MIN_POOL_RATIO,
    REFERENCE_UNIT,
    CONVERT_MEMO,
    DEFAULT_ACCOUNT,
)

# Quantity primitives
from .amounts import (
    Symbol,
    Asset,
    is_valid_code,
)

# Pegged-value bridge and display helpers
from .fmt import (
    to_reference,
    from_reference,
    fmt_dec,
    asset_to_decimal,
)

# Persisted records and swap lifecycle types
from .datatypes import (
    Pool,
    Settings,
    SwapState,
    SwapRequest,
    TransferInstruction,
    SwapResult,
)

# Exceptions
from .exc import (
    AmountDomainError,
    InvariantViolation,
    ConvertError,
    Unauthorized,
    PoolError,
    PoolNotFound,
    PoolDisabled,
    PoolHasNoBalance,
    PoolHasNoDepth,
    ConnectorMissing,
    SameTokenConversion,
    InvalidSymbol,
    BelowMinimumConvert,
    RatioTooHigh,
    RatioTooLow,
    FeeExceedsQuantity,
    ZeroOutputQuantity,
    InvalidQuantity,
    AmountOutOfRange,
    PrecisionError,
)

__all__ = [
    # constants
    "MAX_AMOUNT",
    "MAX_PRECISION",
    "SYMBOL_CODE_MAX_LEN",
    "BPS_DENOM",
    "MAX_POOL_RATIO",
    "MIN_POOL_RATIO",
    "REFERENCE_UNIT",
    "CONVERT_MEMO",
    "DEFAULT_ACCOUNT",
    # amounts
    "Symbol",
    "Asset",
    "is_valid_code",
    # fmt
    "to_reference",
    "from_reference",
    "fmt_dec",
    "asset_to_decimal",
    # datatypes
    "Pool",
    "Settings",
    "SwapState",
    "SwapRequest",
    "TransferInstruction",
    "SwapResult",
    # exceptions
    "AmountDomainError",
    "InvariantViolation",
    "ConvertError",
    "Unauthorized",
    "PoolError",
    "PoolNotFound",
    "PoolDisabled",
    "PoolHasNoBalance",
    "PoolHasNoDepth",
    "ConnectorMissing",
    "SameTokenConversion",
    "InvalidSymbol",
    "BelowMinimumConvert",
    "RatioTooHigh",
    "RatioTooLow",
    "FeeExceedsQuantity",
    "ZeroOutputQuantity",
    "InvalidQuantity",
    "AmountOutOfRange",
    "PrecisionError",
]

"""
Core exception types for pegswap.

These are dependency-free and may be imported by all modules. Every swap
failure derives from ConvertError; pool preconditions share PoolError.
"""

from typing import Optional

__all__ = [
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


class AmountDomainError(Exception):
    """Raised when asset arithmetic mixes symbols or leaves the amount bound."""
    pass


class InvariantViolation(Exception):
    """Raised when an internal guard would break a core invariant."""
    pass


class ConvertError(Exception):
    """Base class for every reason a swap is rejected.

    Attributes
    ----------
    token : str | None
        Identifier of the offending token, when one applies.
    bound : Any | None
        The violated bound (minimum amount, ratio limit), when one applies.
    state : Any | None
        Last stage the swap reached before failing; set by the orchestrator.
    """

    def __init__(self, message: str, *, token: Optional[str] = None, bound=None):
        super().__init__(message)
        self.token = token
        self.bound = bound
        self.state = None


class Unauthorized(ConvertError):
    """Raised when the requester is not the authorized sender."""


class PoolError(ConvertError):
    """Raised when a pool precondition of the curve is violated."""


class PoolNotFound(PoolError):
    """Raised when no pool exists for a token identifier."""


class PoolDisabled(PoolError):
    """Raised when a swap touches a disabled pool."""


class PoolHasNoBalance(PoolError):
    """Raised when a participating pool holds a zero balance."""


class PoolHasNoDepth(PoolError):
    """Raised when a participating pool has a zero depth."""


class ConnectorMissing(PoolError):
    """Raised when the source pool may not swap against the target."""


class SameTokenConversion(PoolError):
    """Raised when source and target identifiers are equal."""


class InvalidSymbol(PoolError):
    """Raised when a token identifier is empty or malformed."""


class BelowMinimumConvert(ConvertError):
    """Raised when the inbound value is below settings.min_convert."""


class RatioTooHigh(ConvertError):
    """Raised when a deposit would lift a pool above its maximum ratio."""


class RatioTooLow(ConvertError):
    """Raised when a withdrawal would drop a pool below its minimum ratio."""


class FeeExceedsQuantity(ConvertError):
    """Raised when the fee would consume the whole inbound quantity."""


class ZeroOutputQuantity(ConvertError):
    """Raised when the curve yields no positive outbound quantity."""


class InvalidQuantity(ConvertError):
    """Raised when the inbound quantity is not strictly positive."""


class AmountOutOfRange(ConvertError):
    """Raised when a committed total would leave the ledger amount bound."""


class PrecisionError(ConvertError):
    """Raised when a value cannot be quantised on a token's precision grid."""

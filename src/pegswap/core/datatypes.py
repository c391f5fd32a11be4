"""
Core records used by the pricing engine.

Pool and Settings mirror the persisted ledger rows; they are immutable here and
updated by storage through `dataclasses.replace`. SwapRequest, SwapResult and
TransferInstruction are transient and live for a single swap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from .amounts import Asset, Symbol, is_valid_code
from .constants import BPS_DENOM, CONVERT_MEMO, REFERENCE_UNIT
from .exc import AmountDomainError, InvalidSymbol


# ---------------------------------------------------------------------------
# Pool
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Pool:
    """Liquidity record for one token.

    Fields:
    - token_identifier: symbol code and primary key.
    - contract_owner: token contract account holding/issuing the pool's funds.
    - balance: cached quantity held by the engine account.
    - depth: virtual liquidity used as the curve denominator.
    - pegged: value of one token in the reference unit (e.g. 1.0000 USD).
    - peg_unit: code of the unit the pool is pegged to.
    - amplifier: curve flatness, >= 1 (higher is flatter).
    - connectors: identifiers this pool may swap against.
    - enabled: swaps touching a disabled pool are rejected.
    - proceeds: accrued, unwithdrawn fees in this token.
    """

    token_identifier: str
    contract_owner: str
    balance: Asset
    depth: Asset
    pegged: Asset
    peg_unit: str = REFERENCE_UNIT
    amplifier: int = 1
    connectors: FrozenSet[str] = field(default_factory=frozenset)
    enabled: bool = True
    proceeds: Optional[Asset] = None

    def __post_init__(self):
        code = self.token_identifier
        if not is_valid_code(code):
            raise InvalidSymbol(f"invalid pool identifier {code!r}", token=str(code))
        for name in ("balance", "depth"):
            a = getattr(self, name)
            if not isinstance(a, Asset) or a.code != code:
                raise AmountDomainError(f"{code} pool {name} must be denominated in {code}, got {a}")
        if self.depth.symbol != self.balance.symbol:
            raise AmountDomainError(f"{code} pool depth precision differs from balance")
        if self.proceeds is None:
            object.__setattr__(self, "proceeds", Asset.zero(self.balance.symbol))
        elif not isinstance(self.proceeds, Asset) or self.proceeds.symbol != self.balance.symbol:
            raise AmountDomainError(f"{code} pool proceeds must be denominated in {code}, got {self.proceeds}")
        if not isinstance(self.pegged, Asset) or self.pegged.amount <= 0:
            raise AmountDomainError(f"{code} pool pegged value must be a positive asset, got {self.pegged}")
        if not is_valid_code(self.peg_unit):
            raise InvalidSymbol(f"invalid peg unit {self.peg_unit!r} for {code}", token=code)
        if not isinstance(self.amplifier, int) or isinstance(self.amplifier, bool) or self.amplifier < 1:
            raise AmountDomainError(f"{code} pool amplifier must be an int >= 1, got {self.amplifier!r}")
        object.__setattr__(self, "connectors", connectors_from(self.connectors))

    @property
    def symbol(self) -> Symbol:
        return self.balance.symbol

    def has_connector(self, code: str) -> bool:
        return code in self.connectors


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Settings:
    """Global engine settings: minimum trade size and fee rate (bps)."""

    min_convert: Asset
    pool_fee: int
    reference_unit: str = REFERENCE_UNIT

    def __post_init__(self):
        if not isinstance(self.min_convert, Asset):
            raise AmountDomainError("min_convert must be an Asset")
        if not isinstance(self.pool_fee, int) or isinstance(self.pool_fee, bool):
            raise AmountDomainError("pool_fee must be an int (basis points)")
        if not (0 <= self.pool_fee <= BPS_DENOM):
            raise AmountDomainError(f"pool_fee must be in [0, {BPS_DENOM}]: {self.pool_fee}")
        if not is_valid_code(self.reference_unit):
            raise InvalidSymbol(f"invalid reference unit {self.reference_unit!r}")


# ---------------------------------------------------------------------------
# Swap lifecycle
# ---------------------------------------------------------------------------

class SwapState(Enum):
    """Stages of one orchestrated swap; COMMITTED and REJECTED are terminal."""
    VALIDATING = "validating"
    FEE_DEDUCTED = "fee_deducted"
    PRICE_COMPUTED = "price_computed"
    RATIO_CHECKED = "ratio_checked"
    COMMITTED = "committed"
    REJECTED = "rejected"

    @property
    def terminal(self) -> bool:
        return self in (SwapState.COMMITTED, SwapState.REJECTED)


@dataclass(frozen=True)
class SwapRequest:
    requester: str
    quantity: Asset
    target: str


@dataclass(frozen=True)
class TransferInstruction:
    """Outbound token movement for the ledger to settle (not executed here)."""

    contract: str
    sender: str
    receiver: str
    quantity: Asset
    memo: str = CONVERT_MEMO


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a priced swap.

    `transfer` is None for quotes, which never reach COMMITTED.
    """

    request: SwapRequest
    fee: Asset
    net_in: Asset
    out: Asset
    state: SwapState
    transfer: Optional[TransferInstruction] = None

    @property
    def committed(self) -> bool:
        return self.state is SwapState.COMMITTED


def connectors_from(codes: Iterable[str]) -> FrozenSet[str]:
    """Validate and freeze a connector list (an iterable of codes, not one code string)."""
    if isinstance(codes, str):
        raise InvalidSymbol(f"connectors must be a list of codes, got the string {codes!r}", token=codes)
    out = frozenset(codes)
    for c in out:
        if not is_valid_code(c):
            raise InvalidSymbol(f"invalid connector {c!r}", token=str(c))
    return out


__all__ = [
    "Pool",
    "Settings",
    "SwapState",
    "SwapRequest",
    "TransferInstruction",
    "SwapResult",
    "connectors_from",
]

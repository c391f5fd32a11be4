# Top-level API for pegswap.
"""
Top-level API for pegswap.

Pegged, amplified bonding-curve pricing for swapping one ledger token for
another through per-token liquidity pools:
  - Converter: one-swap orchestrator (fee -> bounds -> curve -> bounds -> commit)
  - calculate_pool_fee / check_* / calculate_out: the pricing kernels
  - MemoryLedger & co.: in-memory collaborators for running without a ledger

Quantities are integer-domain Assets; floats only appear inside the curve and
the pegged-value bridge.
"""

from __future__ import annotations

from .convert import Converter, SwapOutcome, SwapSandbox, parse_memo
from .curve import CurveTrace, calculate_out, trace_out, validate_pair, spot_rate
from .fees import calculate_pool_fee
from .ratio import check_min_convert, check_max_pool_ratio, check_min_pool_ratio, get_ratio
from .ledger import MemoryLedger, AccountAuthorizer, TransferOutbox, VolumeBook

from .core import (
    Symbol,
    Asset,
    Pool,
    Settings,
    SwapState,
    SwapRequest,
    SwapResult,
    TransferInstruction,
    to_reference,
    from_reference,
    ConvertError,
)

__all__ = [
    # orchestration
    "Converter",
    "SwapOutcome",
    "SwapSandbox",
    "parse_memo",
    # kernels
    "CurveTrace",
    "calculate_out",
    "trace_out",
    "validate_pair",
    "spot_rate",
    "calculate_pool_fee",
    "check_min_convert",
    "check_max_pool_ratio",
    "check_min_pool_ratio",
    "get_ratio",
    # collaborators
    "MemoryLedger",
    "AccountAuthorizer",
    "TransferOutbox",
    "VolumeBook",
    # core types
    "Symbol",
    "Asset",
    "Pool",
    "Settings",
    "SwapState",
    "SwapRequest",
    "SwapResult",
    "TransferInstruction",
    "to_reference",
    "from_reference",
    "ConvertError",
]

__version__ = "0.1.0"

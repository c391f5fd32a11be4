"""
Converter: orchestrates one swap over the fee, ratio and curve kernels.

Stages run strictly in order:

    VALIDATING -> FEE_DEDUCTED -> PRICE_COMPUTED -> RATIO_CHECKED -> COMMITTED

and any ConvertError ends the swap as REJECTED. Side effects (fee accrual,
cached balances, volume, outbound transfer) are staged in a SwapSandbox and only
handed to the collaborators once the post-withdrawal ratio check has passed and
every staged total has been checked against the amount bound, so a rejected
swap never touches external state.

Collaborators are duck-typed; see `pegswap.ledger` for the expected methods and
in-memory implementations.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .core import (
    Asset,
    Pool,
    SwapRequest,
    SwapResult,
    SwapState,
    TransferInstruction,
    CONVERT_MEMO,
    DEFAULT_ACCOUNT,
    MAX_AMOUNT,
    is_valid_code,
)
from .core.exc import (
    AmountDomainError,
    AmountOutOfRange,
    ConvertError,
    InvalidQuantity,
    InvalidSymbol,
    Unauthorized,
    ZeroOutputQuantity,
)
from .core.fmt import to_reference
from .curve import calculate_out, validate_pair
from .fees import calculate_pool_fee
from .ratio import (
    check_max_pool_ratio,
    check_min_convert,
    check_min_pool_ratio,
    get_ratio as _pool_ratio_live,
)

logger = logging.getLogger(__name__)


# ----------------------------
# Staged effects
# ----------------------------

class SwapSandbox:
    """Stage the writebacks of one swap; collaborators are only called by apply().

    check() evaluates every staged write against the current records first, so
    a write that would leave the amount bound rejects the swap before any
    collaborator is touched.
    """

    def __init__(self) -> None:
        self.proceeds: List[Asset] = []
        self.balances: List[Tuple[int, Asset]] = []
        self.volumes: List[Tuple[Asset, Asset]] = []
        self.transfers: List[TransferInstruction] = []

    def stage_fee(self, fee: Asset) -> None:
        self.proceeds.append(fee)

    def stage_balance(self, sign: int, quantity: Asset) -> None:
        self.balances.append((sign, quantity))

    def stage_volume(self, quantity: Asset, fee: Asset) -> None:
        self.volumes.append((quantity, fee))

    def stage_transfer(self, instruction: TransferInstruction) -> None:
        self.transfers.append(instruction)

    def check(self, storage: Any, volume: Any = None) -> Dict[str, Pool]:
        """Resulting pool records of the staged writes; nothing is applied.

        Raises AmountOutOfRange if a cached balance, proceeds or volume total
        would leave the ledger amount bound.
        """
        pools: Dict[str, Pool] = {}

        def current(code: str) -> Pool:
            if code not in pools:
                pools[code] = storage.get_pool(code)
            return pools[code]

        for fee in self.proceeds:
            p = current(fee.code)
            with _amount_bound(fee, "proceeds"):
                pools[fee.code] = replace(p, proceeds=p.proceeds + fee)
        for sign, quantity in self.balances:
            p = current(quantity.code)
            with _amount_bound(quantity, "balance"):
                balance = p.balance + quantity if sign > 0 else p.balance - quantity
                pools[quantity.code] = replace(p, balance=balance)
        if volume is not None:
            for quantity, fee in self.volumes:
                with _amount_bound(quantity, "volume"):
                    volume.preview_volume(quantity, fee)
        return pools

    def apply(self, storage: Any, volume: Any = None, transfers: Any = None) -> None:
        for fee in self.proceeds:
            storage.add_proceeds(fee)
        for sign, quantity in self.balances:
            if sign > 0:
                storage.add_balance(quantity)
            else:
                storage.sub_balance(quantity)
        if volume is not None:
            for quantity, fee in self.volumes:
                volume.add_volume(quantity, fee)
        if transfers is not None:
            for t in self.transfers:
                transfers.send(t)
        self.clear()

    def clear(self) -> None:
        self.proceeds.clear()
        self.balances.clear()
        self.volumes.clear()
        self.transfers.clear()


@contextmanager
def _amount_bound(quantity: Asset, what: str) -> Iterator[None]:
    try:
        yield
    except AmountDomainError as exc:
        raise AmountOutOfRange(
            f"{quantity.code} {what} would leave the ledger amount bound: {exc}",
            token=quantity.code,
            bound=MAX_AMOUNT,
        ) from exc


@dataclass(frozen=True)
class SwapOutcome:
    """Tagged result of try_convert: either a committed result or the rejection."""

    ok: bool
    state: SwapState
    result: Optional[SwapResult] = None
    error: Optional[ConvertError] = None
    stage: Optional[SwapState] = None


def parse_memo(memo: str) -> str:
    """Target token identifier carried in an inbound transfer memo."""
    code = (memo or "").strip()
    if not is_valid_code(code):
        raise InvalidSymbol(f"memo {memo!r} must be the target symbol code", token=code or None)
    return code


# ----------------------------
# Converter
# ----------------------------

class Converter:
    """Pricing engine bound to its ledger collaborators.

    `storage` is required; `authorizer`, `transfers` and `volume` are optional
    (no authorization check, no outbound instruction, no bookkeeping when None).
    """

    def __init__(self,
                 storage: Any,
                 *,
                 authorizer: Any = None,
                 transfers: Any = None,
                 volume: Any = None,
                 account: Optional[str] = None) -> None:
        self.storage = storage
        self.authorizer = authorizer
        self.transfers = transfers
        self.volume = volume
        self.account = account or getattr(storage, "account", DEFAULT_ACCOUNT)

    # --- public entry points ---
    def convert(self, requester: str, quantity: Asset, target: str) -> Asset:
        """Swap `quantity` for token `target` on behalf of `requester`; return the output."""
        return self.execute(SwapRequest(requester, quantity, target)).out

    def execute(self, request: SwapRequest) -> SwapResult:
        return self._run(request, commit=True)

    def quote(self, quantity: Asset, target: str) -> SwapResult:
        """Price a swap without authorization or side effects (ends at RATIO_CHECKED)."""
        return self._run(SwapRequest("", quantity, target), commit=False)

    def try_convert(self, request: SwapRequest) -> SwapOutcome:
        """Like execute, but returns the rejection instead of raising it."""
        try:
            result = self.execute(request)
        except ConvertError as exc:
            return SwapOutcome(ok=False, state=SwapState.REJECTED, error=exc, stage=exc.state)
        return SwapOutcome(ok=True, state=SwapState.COMMITTED, result=result)

    def handle_transfer(self,
                        contract: str,
                        sender: str,
                        receiver: str,
                        quantity: Asset,
                        memo: str) -> Optional[SwapResult]:
        """Inbound transfer notification: convert the deposit into the memo's token.

        Transfers not addressed to the engine account, or sent by it, are ignored.
        """
        if receiver != self.account or sender == self.account:
            return None
        try:
            target = parse_memo(memo)
        except ConvertError as exc:
            exc.state = SwapState.VALIDATING
            raise
        return self._run(SwapRequest(sender, quantity, target), commit=True, contract=contract)

    # --- monitoring ---
    def get_ratio(self, code: str) -> float:
        """Live ledger balance net of proceeds over depth, for pool `code`."""
        pool = self.storage.get_pool(code)
        live = self.storage.get_balance(pool.contract_owner, self.account, code)
        return _pool_ratio_live(pool, live)

    def get_ratios(self) -> Dict[str, float]:
        return {p.token_identifier: self.get_ratio(p.token_identifier) for p in self.storage.pools()}

    def get_rate(self, quantity: Asset, target: str) -> float:
        """Effective out/in rate (whole tokens) of quoting `quantity` into `target`."""
        r = self.quote(quantity, target)
        return to_reference(r.out) / to_reference(quantity)

    # --- pipeline ---
    def _advance(self, request: SwapRequest, state: SwapState) -> SwapState:
        logger.debug("swap %s->%s: %s", request.quantity, request.target, state.value)
        return state

    def _run(self, request: SwapRequest, *, commit: bool, contract: Optional[str] = None) -> SwapResult:
        state = SwapState.VALIDATING
        quantity = request.quantity
        try:
            if commit and self.authorizer is not None:
                self.authorizer.require_auth(request.requester)
            if not isinstance(quantity, Asset) or quantity.amount <= 0:
                raise InvalidQuantity(f"[quantity] must be a positive asset, got {quantity}",
                                      token=getattr(quantity, "code", None))

            # one snapshot for the whole swap
            settings = self.storage.get_settings()
            base = self.storage.find_pool(quantity.code)
            quote = self.storage.find_pool(request.target)
            validate_pair(base, quote, quantity.code, request.target)
            if quantity.symbol != base.symbol:
                raise InvalidSymbol(f"{quantity} does not match {base.token_identifier} pool precision {base.symbol}",
                                    token=quantity.code)
            if contract is not None and contract != base.contract_owner:
                raise Unauthorized(f"{quantity.code} must be transferred from {base.contract_owner}, not {contract}",
                                   token=quantity.code)

            fee = calculate_pool_fee(quantity, settings)
            check_min_convert(quantity, base, settings)
            check_max_pool_ratio(quantity, base)
            net_in = quantity - fee
            state = self._advance(request, SwapState.FEE_DEDUCTED)

            out = calculate_out(net_in, base, quote)
            if out.amount <= 0:
                raise ZeroOutputQuantity(f"{quote.token_identifier} output is zero for {net_in}",
                                         token=quote.token_identifier)
            state = self._advance(request, SwapState.PRICE_COMPUTED)

            check_min_pool_ratio(out, quote)
            state = self._advance(request, SwapState.RATIO_CHECKED)

            if commit:
                transfer = TransferInstruction(quote.contract_owner, self.account, request.requester, out, CONVERT_MEMO)
                sandbox = SwapSandbox()
                sandbox.stage_fee(fee)
                sandbox.stage_balance(+1, net_in)
                sandbox.stage_balance(-1, out)
                sandbox.stage_volume(quantity, fee)
                sandbox.stage_volume(out, Asset.zero(out.symbol))
                sandbox.stage_transfer(transfer)
                sandbox.check(self.storage, self.volume)
        except ConvertError as exc:
            exc.state = state
            logger.warning("swap %s->%s rejected at %s: %s", quantity, request.target, state.value, exc)
            raise

        if not commit:
            return SwapResult(request, fee, net_in, out, state)

        sandbox.apply(self.storage, self.volume, self.transfers)
        state = self._advance(request, SwapState.COMMITTED)

        logger.info("convert %s -> %s for %s (fee %s)", quantity, out, request.requester, fee)
        return SwapResult(request, fee, net_in, out, state, transfer)


__all__ = [
    "SwapSandbox",
    "SwapOutcome",
    "parse_memo",
    "Converter",
]

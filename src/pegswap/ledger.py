"""
In-memory ledger collaborators for the converter.

The engine talks to its host through four duck-typed collaborators:

- storage: get_pool / find_pool / get_settings / get_balance and the
  mutations add_proceeds / add_balance / sub_balance
- authorizer: require_auth(account)
- transfers: send(TransferInstruction)
- volume: preview_volume(quantity, fee) and add_volume(quantity, fee)

The classes below implement them over plain dicts so the engine can run and be
tested without a ledger. They are not thread-safe: callers run one swap at a
time per MemoryLedger, which stands in for the host's serialized transaction.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .core import Asset, Pool, Settings, TransferInstruction, DEFAULT_ACCOUNT, REFERENCE_UNIT
from .core.exc import AmountDomainError, InvariantViolation, PoolNotFound, Unauthorized


# ----------------------------
# Storage + live balances
# ----------------------------

class MemoryLedger:
    """Pool/settings storage plus live token balances keyed by (contract, account, code)."""

    def __init__(self, settings: Settings, pools: Iterable[Pool] = (), *, account: str = DEFAULT_ACCOUNT) -> None:
        self.settings = settings
        self.account = account
        self._pools: Dict[str, Pool] = {}
        self._live: Dict[Tuple[str, str, str], Asset] = {}
        for pool in pools:
            self.put_pool(pool)

    # --- records ---
    def put_pool(self, pool: Pool) -> None:
        self._pools[pool.token_identifier] = pool

    def find_pool(self, code: str) -> Optional[Pool]:
        return self._pools.get(code)

    def get_pool(self, code: str) -> Pool:
        pool = self._pools.get(code)
        if pool is None:
            raise PoolNotFound(f"{code} pool does not exist", token=code)
        return pool

    def pools(self) -> List[Pool]:
        return [self._pools[c] for c in sorted(self._pools)]

    def get_settings(self) -> Settings:
        return self.settings

    # --- mutations proposed by the engine ---
    def add_proceeds(self, fee: Asset) -> None:
        pool = self.get_pool(fee.code)
        self.put_pool(replace(pool, proceeds=pool.proceeds + fee))

    def add_balance(self, quantity: Asset) -> None:
        pool = self.get_pool(quantity.code)
        self.put_pool(replace(pool, balance=pool.balance + quantity))

    def sub_balance(self, quantity: Asset) -> None:
        pool = self.get_pool(quantity.code)
        self.put_pool(replace(pool, balance=pool.balance - quantity))

    # --- live ledger balances ---
    def get_balance(self, contract: str, account: str, code: str) -> Asset:
        """Live balance of `account` in token `code` issued by `contract`."""
        key = (contract, account, code)
        if key in self._live:
            return self._live[key]
        return Asset.zero(self.get_pool(code).symbol)

    def credit(self, contract: str, account: str, quantity: Asset) -> None:
        key = (contract, account, quantity.code)
        current = self._live.get(key)
        self._live[key] = quantity if current is None else current + quantity

    def debit(self, contract: str, account: str, quantity: Asset) -> None:
        key = (contract, account, quantity.code)
        current = self._live.get(key)
        if current is None or current < quantity:
            raise InvariantViolation(f"{account} overdrawn on {quantity.code}: has {current}, needs {quantity}")
        self._live[key] = current - quantity

    # --- snapshots ---
    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "MemoryLedger":
        """Build a ledger from a JSON-compatible dict (assets as '1.0000 EOS' strings).

        `balances` maps token codes to the engine account's live balance; a pool
        without an entry gets balance + proceeds.
        """
        s = data["settings"]
        settings = Settings(
            min_convert=Asset.from_string(s["min_convert"]),
            pool_fee=int(s["pool_fee"]),
            reference_unit=s.get("reference_unit", REFERENCE_UNIT),
        )
        pools = [_pool_from_dict(p) for p in data.get("pools", [])]
        ledger = cls(settings, pools, account=data.get("account", DEFAULT_ACCOUNT))
        live = data.get("balances", {})
        for pool in pools:
            raw = live.get(pool.token_identifier)
            amount = Asset.from_string(raw) if raw is not None else pool.balance + pool.proceeds
            if amount.symbol != pool.symbol:
                raise AmountDomainError(f"live balance {amount} does not match pool {pool.token_identifier}")
            ledger.credit(pool.contract_owner, ledger.account, amount)
        return ledger

    def snapshot(self) -> Dict[str, Any]:
        return {
            "account": self.account,
            "settings": {
                "min_convert": str(self.settings.min_convert),
                "pool_fee": self.settings.pool_fee,
                "reference_unit": self.settings.reference_unit,
            },
            "pools": [_pool_to_dict(p) for p in self.pools()],
            "balances": {
                p.token_identifier: str(self.get_balance(p.contract_owner, self.account, p.token_identifier))
                for p in self.pools()
            },
        }


def _pool_from_dict(p: Dict[str, Any]) -> Pool:
    proceeds = p.get("proceeds")
    return Pool(
        token_identifier=p["token_identifier"],
        contract_owner=p["contract_owner"],
        balance=Asset.from_string(p["balance"]),
        depth=Asset.from_string(p["depth"]),
        pegged=Asset.from_string(p["pegged"]),
        peg_unit=p.get("peg_unit", REFERENCE_UNIT),
        amplifier=int(p.get("amplifier", 1)),
        connectors=p.get("connectors", ()),
        enabled=bool(p.get("enabled", True)),
        proceeds=Asset.from_string(proceeds) if proceeds is not None else None,
    )


def _pool_to_dict(p: Pool) -> Dict[str, Any]:
    return {
        "token_identifier": p.token_identifier,
        "contract_owner": p.contract_owner,
        "balance": str(p.balance),
        "depth": str(p.depth),
        "pegged": str(p.pegged),
        "peg_unit": p.peg_unit,
        "amplifier": p.amplifier,
        "connectors": sorted(p.connectors),
        "enabled": p.enabled,
        "proceeds": str(p.proceeds),
    }


# ----------------------------
# Authorization
# ----------------------------

class AccountAuthorizer:
    """Accounts whose authority is present on the current transaction."""

    def __init__(self, signers: Iterable[str] = ()) -> None:
        self.signers = set(signers)

    def authorize(self, account: str) -> None:
        self.signers.add(account)

    def revoke(self, account: str) -> None:
        self.signers.discard(account)

    def require_auth(self, account: str) -> None:
        if not account or account not in self.signers:
            raise Unauthorized(f"missing authority of {account!r}")


# ----------------------------
# Outbound transfers
# ----------------------------

class TransferOutbox:
    """Collects outbound transfer instructions until the host settles them."""

    def __init__(self) -> None:
        self.pending: List[TransferInstruction] = []
        self.settled: List[TransferInstruction] = []

    def send(self, instruction: TransferInstruction) -> None:
        self.pending.append(instruction)

    def settle(self, ledger: MemoryLedger) -> int:
        """Move live balances for every pending instruction; return how many settled."""
        n = 0
        while self.pending:
            t = self.pending.pop(0)
            ledger.debit(t.contract, t.sender, t.quantity)
            ledger.credit(t.contract, t.receiver, t.quantity)
            self.settled.append(t)
            n += 1
        return n


# ----------------------------
# Volume accounting
# ----------------------------

@dataclass
class VolumeEntry:
    volume: Asset
    fees: Asset
    legs: int = 0


class VolumeBook:
    """Additive per-token volume and fee totals; never read by pricing."""

    def __init__(self) -> None:
        self.entries: Dict[str, VolumeEntry] = {}

    def preview_volume(self, quantity: Asset, fee: Asset) -> VolumeEntry:
        """Totals after recording one leg, without recording it.

        Raises AmountDomainError on a symbol mismatch or a total beyond the
        amount bound.
        """
        if fee.symbol != quantity.symbol:
            raise AmountDomainError(f"fee {fee} does not match volume {quantity}")
        entry = self.entries.get(quantity.code)
        if entry is None:
            entry = VolumeEntry(Asset.zero(quantity.symbol), Asset.zero(quantity.symbol))
        return VolumeEntry(entry.volume + quantity, entry.fees + fee, entry.legs + 1)

    def add_volume(self, quantity: Asset, fee: Asset) -> None:
        self.entries[quantity.code] = self.preview_volume(quantity, fee)

    def get(self, code: str) -> Optional[VolumeEntry]:
        return self.entries.get(code)


__all__ = [
    "MemoryLedger",
    "AccountAuthorizer",
    "TransferOutbox",
    "VolumeEntry",
    "VolumeBook",
]

"""Builders shared by the test modules (importable; fixtures live in conftest)."""
from __future__ import annotations

from typing import Iterable

from pegswap.core import Asset, Pool
from pegswap.ledger import MemoryLedger


def _amt(text: str) -> Asset:
    """Shorthand for Asset.from_string('1.0000 USDT')."""
    return Asset.from_string(text)


def make_pool(code: str,
              balance: str = "1000.0000",
              depth: str = "1000.0000",
              *,
              contract: str = "",
              pegged: str = "1.0000 USD",
              peg_unit: str = "USD",
              amplifier: int = 1,
              connectors: Iterable[str] = (),
              enabled: bool = True,
              proceeds: str = "") -> Pool:
    """Pool with balance/depth written without the code, e.g. make_pool('USDT', '500.0000')."""
    return Pool(
        token_identifier=code,
        contract_owner=contract or f"{code.lower()}.token",
        balance=_amt(f"{balance} {code}"),
        depth=_amt(f"{depth} {code}"),
        pegged=_amt(pegged),
        peg_unit=peg_unit,
        amplifier=amplifier,
        connectors=frozenset(connectors),
        enabled=enabled,
        proceeds=_amt(f"{proceeds} {code}") if proceeds else None,
    )


def fund_pools(ledger: MemoryLedger) -> MemoryLedger:
    """Credit the engine account with every pool's cached balance plus proceeds."""
    for pool in ledger.pools():
        ledger.credit(pool.contract_owner, ledger.account, pool.balance + pool.proceeds)
    return ledger

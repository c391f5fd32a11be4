from __future__ import annotations

import pytest

from pegswap.core import Pool, Settings
from pegswap.convert import Converter
from pegswap.ledger import AccountAuthorizer, MemoryLedger, TransferOutbox, VolumeBook

from helpers import _amt, fund_pools, make_pool


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def settings_default() -> Settings:
    return Settings(min_convert=_amt("1.0000 USD"), pool_fee=30)


@pytest.fixture()
def pool_usdt() -> Pool:
    return make_pool("USDT", contract="tethertether", connectors=("USDC",))


@pytest.fixture()
def pool_usdc() -> Pool:
    return make_pool("USDC", contract="circlecircle", connectors=("USDT",))


@pytest.fixture()
def ledger_pair(settings_default, pool_usdt, pool_usdc) -> MemoryLedger:
    """Two 1000/1000 pools pegged at 1.0000 USD, amplifier 1, connected both ways."""
    return fund_pools(MemoryLedger(settings_default, [pool_usdt, pool_usdc]))


@pytest.fixture()
def outbox() -> TransferOutbox:
    return TransferOutbox()


@pytest.fixture()
def volume_book() -> VolumeBook:
    return VolumeBook()


@pytest.fixture()
def converter(ledger_pair, outbox, volume_book) -> Converter:
    return Converter(
        ledger_pair,
        authorizer=AccountAuthorizer(["alice", "bob"]),
        transfers=outbox,
        volume=volume_book,
    )

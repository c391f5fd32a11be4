#!/usr/bin/env python3
"""
Run one conversion against a pool snapshot, using the production pegswap APIs.

Printing policy:
1) Pre-swap pools (balance, depth, ratio) for the two tokens involved.
2) Fee, net input, output and effective rate.
3) Post-swap ratios and the outbound transfer (skipped with --quote).
4) Errors: message and the stage the swap was rejected in; exit code 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pegswap.core import AmountDomainError
from pegswap import (
    AccountAuthorizer,
    Asset,
    ConvertError,
    Converter,
    MemoryLedger,
    TransferOutbox,
    VolumeBook,
    spot_rate,
    to_reference,
)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Convert one token into another through pegswap pools.")
    p.add_argument("--input", required=True, help="Path to pool snapshot JSON")
    p.add_argument("--quantity", required=True, help="Inbound quantity, e.g. '100.0000 USDT'")
    p.add_argument("--target", required=True, help="Target token identifier, e.g. EOSDT")
    p.add_argument("--requester", default="alice", help="Account converting (default: alice)")
    p.add_argument("--quote", action="store_true", help="Price only; do not commit")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return p.parse_args(argv)


def _pool_line(conv: Converter, code: str) -> str:
    pool = conv.storage.get_pool(code)
    return (f"  {code:<6} balance={pool.balance} depth={pool.depth} "
            f"ratio={conv.get_ratio(code):.4f} proceeds={pool.proceeds}")


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    with open(args.input, "r", encoding="utf-8") as f:
        ledger = MemoryLedger.from_snapshot(json.load(f))

    outbox = TransferOutbox()
    conv = Converter(
        ledger,
        authorizer=AccountAuthorizer([args.requester]),
        transfers=outbox,
        volume=VolumeBook(),
    )

    try:
        quantity = Asset.from_string(args.quantity)
        print("== pre-swap ==")
        for code in (quantity.code, args.target):
            if ledger.find_pool(code) is not None:
                print(_pool_line(conv, code))

        if args.quote:
            res = conv.quote(quantity, args.target)
        else:
            # inbound transfer lands on the engine account before the notification
            pool = ledger.get_pool(quantity.code)
            ledger.credit(pool.contract_owner, ledger.account, quantity)
            res = conv.handle_transfer(pool.contract_owner, args.requester, ledger.account, quantity, args.target)
    except ConvertError as exc:
        stage = exc.state.value if exc.state is not None else "n/a"
        print(f"[rejected @ {stage}] {type(exc).__name__}: {exc}")
        return 1
    except AmountDomainError as exc:
        print(f"[invalid input] {exc}")
        return 2

    if res is None:
        print("transfer ignored (sent by the engine account)")
        return 0

    base = ledger.get_pool(quantity.code)
    quote = ledger.get_pool(args.target)
    print("== swap ==")
    print(f"  in={quantity} fee={res.fee} net_in={res.net_in}")
    print(f"  out={res.out} rate={to_reference(res.out) / to_reference(quantity):.6f} state={res.state.value}")

    if args.quote:
        print(f"  spot_rate={spot_rate(base, quote):.6f}")
        return 0

    outbox.settle(ledger)
    print("== post-swap ==")
    print(_pool_line(conv, quantity.code))
    print(_pool_line(conv, args.target))
    for t in outbox.settled:
        print(f"  transfer {t.quantity} {t.sender} -> {t.receiver} via {t.contract} memo={t.memo!r}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

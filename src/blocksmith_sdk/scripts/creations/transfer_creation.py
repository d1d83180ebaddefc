from __future__ import annotations

import argparse

from blocksmith_sdk.scripts.common import append_log, get_context, print_json
from blocksmith_sdk.transport.errors import FlowError


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="blocksmith-transfer", description="Transfer an owned creation")
    ap.add_argument("--owner", required=True, help="current owner (signer), address or account name")
    ap.add_argument("--to", required=True, help="recipient with a collection set up")
    ap.add_argument("--creation-id", type=int, required=True)
    args = ap.parse_args(argv)

    ctx = get_context()
    accounts = ctx.client.accounts

    try:
        owner = accounts.address_of(args.owner)
        to = accounts.address_of(args.to)
        result = ctx.client.blocksmith.transfer_creation(owner, to, args.creation_id)
    except FlowError as e:
        append_log(ctx, "transfers", action="transfer_creation", ok=False, details=str(e))
        print(f"❌ transfer_creation failed: {e}")
        return 1

    append_log(ctx, "transfers", action="transfer_creation", ok=True,
               details={"from": owner, "to": to, "creation_id": args.creation_id})
    print_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse

from blocksmith_sdk.apis.accounts import ADMIN
from blocksmith_sdk.scripts.common import append_log, creator_root_key, get_context, print_json
from blocksmith_sdk.transport.errors import FlowError


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="blocksmith-mint", description="Mint a creation from a set/blueprint")
    ap.add_argument("--creator-id", type=int, required=True)
    ap.add_argument("--set-id", type=int, required=True)
    ap.add_argument("--blueprint-id", type=int, required=True)
    ap.add_argument("--recipient", required=True, help="address or flow.json account name")
    ap.add_argument("--signer", default=ADMIN, help="admin account (default: Admin)")
    args = ap.parse_args(argv)

    ctx = get_context()
    accounts = ctx.client.accounts
    key = creator_root_key(args.creator_id)

    try:
        recipient = accounts.address_of(args.recipient)
        result = ctx.client.blocksmith.mint_creation(
            accounts.address_of(args.signer),
            args.creator_id,
            args.set_id,
            args.blueprint_id,
            recipient,
        )
    except FlowError as e:
        append_log(ctx, key, action="mint_creation", ok=False, details=str(e))
        print(f"❌ mint_creation failed: {e}")
        return 1

    append_log(
        ctx, key,
        action="mint_creation",
        ok=True,
        details={"set_id": args.set_id, "blueprint_id": args.blueprint_id, "recipient": recipient},
    )
    print_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

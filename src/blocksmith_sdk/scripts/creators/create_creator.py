from __future__ import annotations

import argparse

from blocksmith_sdk.apis.accounts import SUPER_ADMIN
from blocksmith_sdk.scripts.common import append_log, get_context, print_json
from blocksmith_sdk.transport.errors import FlowError


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="blocksmith-create-creator", description="Create a creator owned by an address")
    ap.add_argument("--owner", required=True, help="creator address or flow.json account name")
    ap.add_argument("--signer", default=SUPER_ADMIN, help="super admin account (default: SuperAdmin)")
    args = ap.parse_args(argv)

    ctx = get_context()
    accounts = ctx.client.accounts

    try:
        owner = accounts.address_of(args.owner)
        result = ctx.client.blocksmith.create_creator(accounts.address_of(args.signer), owner)
    except FlowError as e:
        append_log(ctx, "creators", action="create_creator", ok=False, details=str(e))
        print(f"❌ create_creator failed: {e}")
        return 1

    append_log(ctx, "creators", action="create_creator", ok=True, details={"owner": owner, "tx": result.get("id")})
    print_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse

from blocksmith_sdk.client import BlocksmithClient
from blocksmith_sdk.scripts.common import ScriptContext, append_log, print_json
from blocksmith_sdk.transport.errors import FlowError


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="blocksmith-deploy",
        description="Deploy NonFungibleToken and Blocksmith to SuperAdmin on a running emulator",
    )
    ap.parse_args(argv)

    # fresh registry: a deployment always creates its own SuperAdmin
    ctx = ScriptContext(client=BlocksmithClient.from_env())
    bh = ctx.client.blocksmith

    try:
        bh.deploy_blocksmith()
    except FlowError as e:
        append_log(ctx, "deploy", action="deploy_blocksmith", ok=False, details=str(e))
        print(f"❌ deploy failed: {e}")
        return 1

    out = {"contracts": ctx.client.contracts.deployed(), "accounts": ctx.client.accounts.known()}
    append_log(ctx, "deploy", action="deploy_blocksmith", ok=True, details=out)
    print_json(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

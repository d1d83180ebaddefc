from __future__ import annotations

import argparse

from blocksmith_sdk.scripts.common import creator_root_key, get_context, print_json, store_result
from blocksmith_sdk.transport.errors import FlowError


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="blocksmith-creator-data", description="Read a creator's on-chain data")
    ap.add_argument("--creator-id", type=int, required=True)
    ap.add_argument("--no-store", action="store_true")
    args = ap.parse_args(argv)

    ctx = get_context()

    try:
        creator = ctx.client.blocksmith.get_creator_data(args.creator_id)
    except FlowError as e:
        print(f"❌ get_creator_data failed: {e}")
        return 1

    store_result(ctx, f"{creator_root_key(args.creator_id)}/data", creator, no_store=args.no_store)
    print_json(creator)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from blocksmith_sdk.apis.accounts import SUPER_ADMIN
from blocksmith_sdk.client import BlocksmithClient


@dataclass
class ScriptContext:
    client: BlocksmithClient


def get_context() -> ScriptContext:
    """
    Client for an emulator that is already running: named accounts come from
    flow.json and the contracts are assumed to live on SuperAdmin.
    """
    client = BlocksmithClient.from_env()
    known = client.accounts.load_from_config()

    super_admin = known.get(SUPER_ADMIN)
    if super_admin:
        client.contracts.remember("NonFungibleToken", super_admin)
        client.contracts.remember("Blocksmith", super_admin)

    return ScriptContext(client=client)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def creator_root_key(creator_id: int) -> str:
    if creator_id < 1:
        raise ValueError(f"creator id must be >= 1, got {creator_id}")
    return f"creators/{creator_id}"


def store_result(ctx: ScriptContext, key: str, payload: Any, *, no_store: bool) -> Optional[str]:
    """
    <key>/<timestamp>.json
    """
    if no_store or not ctx.client.storage:
        return None
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return ctx.client.storage.write_json(f"{key}/{ts}", payload)


def append_log(ctx: ScriptContext, key: str, *, action: str, ok: bool, details: Any | None = None) -> None:
    """
    <key>/logs.json  (list of dicts, append)
    """
    if not ctx.client.storage:
        return
    ctx.client.storage.append_json(
        f"{key}/logs",
        {"ts": utc_now_iso(), "action": action, "ok": ok, "details": details},
    )


def print_json(payload: Any) -> None:
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(mode="json", by_alias=True)
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))

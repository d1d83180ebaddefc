from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Callable

from blocksmith_sdk.transport.errors import FlowError

# ----------------------------
# env helpers
# ----------------------------
OUT_DIR = Path("out") / "tests"


def flow_available(flow_bin: str = "flow") -> bool:
    return shutil.which(flow_bin) is not None


def cadence_project_ready(base_path: str) -> bool:
    base = Path(base_path)
    return (base / "flow.json").is_file() and (base / "contracts" / "Blocksmith.cdc").is_file()


# ----------------------------
# generic helpers
# ----------------------------

def safe_call(label: str, fn: Callable[[], Any]) -> Any:
    """Run a call, print a friendly result; Flow rejections are printed and swallowed."""
    try:
        out = fn()
        print(f"✅ {label}")
        return out
    except FlowError as e:
        print(f"❌ {label} failed: {type(e).__name__}: {e}")
        return None


def safe_filename(s: str) -> str:
    return "".join(ch if ch.isalnum() or ch in {"_", "-", "."} else "_" for ch in s)


def _jsonable(obj: Any) -> Any:
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, list):
        return [_jsonable(o) for o in obj]
    return obj


def write_artifact(name: str, obj: Any, *, subdir: str | Path = "") -> Path:
    sub = Path(subdir)
    base = sub if sub.is_absolute() else (OUT_DIR / sub if subdir else OUT_DIR)

    base.mkdir(parents=True, exist_ok=True)
    p = base / f"{safe_filename(name)}.json"
    p.write_text(json.dumps(_jsonable(obj), indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    print(f"📄 wrote artifact: {p}")
    return p

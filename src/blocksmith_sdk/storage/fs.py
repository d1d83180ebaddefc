from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass
class FileStorage:
    root: Path

    def _norm_key(self, key: str) -> str:
        key = key.replace("\\", "/").strip("/")
        if not key:
            raise ValueError("Invalid storage key: empty")
        if ".." in key.split("/"):
            raise ValueError(f"Invalid storage key: {key}")
        return key

    def _path_json(self, key: str) -> Path:
        key = self._norm_key(key)
        p = self.root / f"{key}.json"
        p.parent.mkdir(parents=True, exist_ok=True)
        return p

    def write_json(self, key: str, payload: Any) -> str:
        p = self._path_json(key)

        if hasattr(payload, "model_dump"):
            payload = payload.model_dump(mode="json", by_alias=True)

        p.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
        return str(p)

    def read_json(self, key: str) -> Optional[Any]:
        p = self._path_json(key)
        if not p.exists():
            return None
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except ValueError:
            return None

    def append_json(self, key: str, entry: Any) -> str:
        """Append one entry to a JSON list stored under key (created if missing)."""
        existing = self.read_json(key)
        items = existing if isinstance(existing, list) else []
        items.append(entry)
        return self.write_json(key, items)

    def delete(self, key: str) -> None:
        p = self._path_json(key)
        if p.exists():
            p.unlink()

# config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _load_env() -> None:
    cwd_env = Path.cwd() / ".env"
    pkg_env = Path(__file__).resolve().parents[2] / ".env"

    if pkg_env.exists():
        load_dotenv(pkg_env, override=False)
    if cwd_env.exists():
        load_dotenv(cwd_env, override=False)


_load_env()


@dataclass(frozen=True)
class Settings:
    # Cadence project: flow.json + scripts/ transactions/ contracts/
    base_path: str = "cadence"
    flow_bin: str = "flow"
    network: str = "emulator"
    flow_config: Optional[str] = None
    service_account: str = "emulator-account"

    # emulator endpoints
    rest_url: str = "http://127.0.0.1:8888"
    grpc_port: int = 3569
    admin_port: int = 8080
    timeout: int = 60
    emulator_logging: bool = False

    # storage (optional, used by the CLI scripts)
    storage_backend: str = "fs"
    storage_dir: Optional[str] = None

    @property
    def flow_config_path(self) -> str:
        return self.flow_config or str(Path(self.base_path) / "flow.json")

    @property
    def rest_port(self) -> int:
        tail = self.rest_url.rstrip("/").rsplit(":", 1)[-1]
        return int(tail) if tail.isdigit() else 8888


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name, "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _bool_env(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def get_settings() -> Settings:
    base_path = os.getenv("BLOCKSMITH_BASE_PATH", "").strip() or "cadence"

    return Settings(
        base_path=base_path,
        flow_bin=os.getenv("BLOCKSMITH_FLOW_BIN", "").strip() or "flow",
        network=os.getenv("BLOCKSMITH_NETWORK", "").strip() or "emulator",
        flow_config=os.getenv("BLOCKSMITH_FLOW_CONFIG", "").strip() or None,
        service_account=os.getenv("BLOCKSMITH_SERVICE_ACCOUNT", "").strip() or "emulator-account",

        rest_url=os.getenv("BLOCKSMITH_REST_URL", "").strip() or "http://127.0.0.1:8888",
        grpc_port=_int_env("BLOCKSMITH_GRPC_PORT", 3569),
        admin_port=_int_env("BLOCKSMITH_ADMIN_PORT", 8080),
        timeout=_int_env("BLOCKSMITH_TIMEOUT", 60),
        emulator_logging=_bool_env("BLOCKSMITH_EMULATOR_LOGGING"),

        storage_backend=os.getenv("BLOCKSMITH_STORAGE_BACKEND", "fs").strip() or "fs",
        storage_dir=os.getenv("BLOCKSMITH_STORAGE_DIR", "").strip() or None,
    )

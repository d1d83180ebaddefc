from __future__ import annotations

import json
import logging
import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from ..templates import builtin_transaction
from ..transport.cli import FlowCli
from ..transport.errors import FlowError, UnknownAccount
from ..transport.http import HttpTransport
from ..transport.serializers import encode_args
from .. import types as t

log = logging.getLogger(__name__)

SUPER_ADMIN = "SuperAdmin"
ADMIN = "Admin"
USER = "User"

# FLOW balances are reported in 1e-8 units by the Access API
_FLOW_UNIT = Decimal("100000000")

_ADDRESS_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]{16}$")


def _norm(address: str) -> str:
    address = address.strip()
    if address[:2].lower() == "0x":
        address = address[2:]
    return "0x" + address.lower()


class AccountsAPI:
    """
    Named emulator accounts.

    Every account is created on first use with the service account's public
    key and written into flow.json under its name with the service key, so
    the CLI can sign for it afterwards.
    """

    def __init__(
        self,
        cli: FlowCli,
        http: HttpTransport,
        *,
        flow_config_path: str,
        service_account: str = "emulator-account",
    ):
        self._cli = cli
        self._http = http
        self.flow_config_path = Path(flow_config_path)
        self.service_account = service_account
        self._by_name: Dict[str, str] = {}
        self._service_public_key: Optional[str] = None

    # ---------- flow.json ----------

    def _read_config(self) -> Dict[str, Any]:
        if not self.flow_config_path.exists():
            raise FlowError(message=f"flow.json not found: {self.flow_config_path}")
        return json.loads(self.flow_config_path.read_text(encoding="utf-8"))

    def _write_config(self, cfg: Dict[str, Any]) -> None:
        self.flow_config_path.write_text(json.dumps(cfg, indent=2) + "\n", encoding="utf-8")

    def _service_entry(self) -> Dict[str, Any]:
        cfg = self._read_config()
        entry = (cfg.get("accounts") or {}).get(self.service_account)
        if not entry:
            raise FlowError(message=f"service account {self.service_account!r} missing from {self.flow_config_path}")
        return entry

    def service_address(self) -> str:
        return _norm(self._service_entry()["address"])

    def _service_private_key(self) -> str:
        key = self._service_entry().get("key")
        if isinstance(key, dict):
            key = key.get("privateKey")
        if not isinstance(key, str) or not key.strip():
            raise FlowError(message=f"service account {self.service_account!r} has no inline private key")
        return key.strip()

    def service_public_key(self) -> str:
        if self._service_public_key is None:
            self._service_public_key = self._cli.derive_public_key(self._service_private_key())
        return self._service_public_key

    def _register(self, name: str, address: str) -> None:
        cfg = self._read_config()
        service_key = cfg["accounts"][self.service_account]["key"]
        cfg.setdefault("accounts", {})[name] = {
            "address": address.removeprefix("0x"),
            "key": service_key,
        }
        self._write_config(cfg)

    # ---------- names <-> addresses ----------

    def get_account_address(self, name: str) -> str:
        if name in self._by_name:
            return self._by_name[name]

        address = _norm(self._cli.create_account(self.service_public_key(), signer=self.service_account))
        self._register(name, address)
        self._by_name[name] = address
        log.info("created account %s at %s", name, address)
        return address

    def get_super_admin_address(self) -> str:
        return self.get_account_address(SUPER_ADMIN)

    def get_admin_address(self) -> str:
        return self.get_account_address(ADMIN)

    def get_user_address(self) -> str:
        return self.get_account_address(USER)

    def name_for(self, address_or_name: str) -> str:
        """
        flow.json name of a signer; accepts an address created through this
        registry, the service address, or a name that is already known.
        """
        if address_or_name in self._by_name or address_or_name == self.service_account:
            return address_or_name
        wanted = _norm(address_or_name)
        for name, address in self._by_name.items():
            if address == wanted:
                return name
        if wanted == self.service_address():
            return self.service_account
        raise UnknownAccount(message=f"no known account for {address_or_name}")

    def address_of(self, address_or_name: str) -> str:
        if _ADDRESS_RE.match(address_or_name.strip()):
            return _norm(address_or_name.strip())
        if address_or_name == self.service_account:
            return self.service_address()
        return self.get_account_address(address_or_name)

    def load_from_config(self) -> Dict[str, str]:
        """
        Adopt the named accounts already in flow.json. Only meaningful while
        the emulator that created them is still running.
        """
        cfg = self._read_config()
        for name, entry in (cfg.get("accounts") or {}).items():
            if name == self.service_account or not isinstance(entry, dict) or not entry.get("address"):
                continue
            self._by_name[name] = _norm(entry["address"])
        return self.known()

    def known(self) -> Dict[str, str]:
        return dict(self._by_name)

    def reset(self) -> None:
        self._by_name.clear()

    # ---------- FLOW ----------

    def mint_flow(self, address: str, amount: str) -> Dict[str, Any]:
        code = builtin_transaction("mint_flow")
        args = encode_args([
            (address, t.Address),
            (amount, t.UFix64),
        ])
        return self._cli.send_transaction(code, args, [self.service_account], name="mint_flow")

    def fund_user(self, address: str, amount: str = "1000.0") -> Optional[Dict[str, Any]]:
        try:
            return self.mint_flow(address, amount)
        except FlowError as e:
            log.error("funding %s with %s FLOW failed: %s", address, amount, e)
            return None

    def get_flow_balance(self, address: str) -> Decimal:
        acct = self._http.get_account(address)
        return Decimal(str(acct.get("balance", "0"))) / _FLOW_UNIT

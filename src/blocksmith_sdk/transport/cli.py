from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .errors import CliError, TransactionReverted

log = logging.getLogger(__name__)


class FlowCli:
    """
    Runs the `flow` binary for everything that needs signing: sending
    transactions, creating accounts and deploying contracts. Signing keys
    come from the project's flow.json, so signers are flow.json account names.
    """

    def __init__(
        self,
        flow_bin: str = "flow",
        *,
        config_path: Optional[str] = None,
        network: str = "emulator",
        cwd: Optional[str] = None,
        timeout: int = 60,
    ):
        self.flow_bin = flow_bin
        self.config_path = config_path
        self.network = network
        self.cwd = cwd
        self.timeout = timeout

    def _common_flags(self) -> List[str]:
        flags = ["--network", self.network, "--output", "json", "--skip-version-check"]
        if self.config_path:
            flags += ["--config-path", self.config_path]
        return flags

    def run(self, args: Sequence[str]) -> Any:
        cmd = [self.flow_bin, *args, *self._common_flags()]
        log.debug("running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=self.cwd,
            )
        except FileNotFoundError as e:
            raise CliError(message=f"flow binary not found: {self.flow_bin}", returncode=127) from e
        except subprocess.TimeoutExpired as e:
            raise CliError(message=f"{' '.join(args[:2])} timed out after {self.timeout}s", returncode=-1) from e

        output = (result.stdout or "") + (result.stderr or "")
        if result.returncode != 0:
            raise CliError(
                message=f"flow {' '.join(args[:2])} exited with {result.returncode}",
                output=output.strip(),
                returncode=result.returncode,
            )
        return _parse_json(result.stdout)

    # -------- commands --------

    def send_transaction(
        self,
        code: str,
        arguments: List[Dict[str, Any]],
        signers: Sequence[str],
        *,
        name: str = "transaction",
    ) -> Dict[str, Any]:
        """
        First signer proposes and pays; every signer authorizes.
        """
        if not signers:
            raise ValueError("at least one signer is required")

        with tempfile.TemporaryDirectory(prefix="blocksmith-") as tmp:
            path = _write_code(tmp, name, code)
            return self._send(path, name, arguments, signers)

    def _send(
        self,
        path: Path,
        name: str,
        arguments: List[Dict[str, Any]],
        signers: Sequence[str],
    ) -> Dict[str, Any]:
        args = ["transactions", "send", str(path), "--args-json", json.dumps(arguments)]
        if len(signers) == 1:
            args += ["--signer", signers[0]]
        else:
            args += ["--proposer", signers[0], "--payer", signers[0]]
            for s in signers:
                args += ["--authorizer", s]

        try:
            out = self.run(args)
        except CliError as e:
            raise TransactionReverted(message=f"transaction {name} failed", output=e.output) from e

        result = out if isinstance(out, dict) else {}
        error = result.get("error")
        if error:
            raise TransactionReverted(
                message=f"transaction {name} reverted",
                output=str(error),
                tx_id=result.get("id"),
            )
        return result

    def create_account(self, public_key: str, *, signer: str) -> str:
        out = self.run(["accounts", "create", "--key", public_key, "--signer", signer])
        address = out.get("address") if isinstance(out, dict) else None
        if not address:
            raise CliError(message="accounts create returned no address", output=str(out))
        return address

    def derive_public_key(self, private_key: str) -> str:
        out = self.run(["keys", "derive", private_key])
        public = out.get("public") if isinstance(out, dict) else None
        if not public:
            raise CliError(message="keys derive returned no public key", output=str(out))
        return public

    def add_contract(self, code: str, *, name: str, signer: str) -> Dict[str, Any]:
        with tempfile.TemporaryDirectory(prefix="blocksmith-") as tmp:
            path = _write_code(tmp, name, code)
            out = self.run(["accounts", "add-contract", str(path), "--signer", signer])
        return out if isinstance(out, dict) else {}


def _write_code(tmp: str, name: str, code: str) -> Path:
    p = Path(tmp) / f"{name.replace('/', '_')}.cdc"
    p.write_text(code, encoding="utf-8")
    return p


def _parse_json(stdout: str) -> Any:
    text = (stdout or "").strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        # some commands print a banner before the JSON document
        start = text.find("{")
        if start < 0:
            return text
        try:
            return json.loads(text[start:])
        except ValueError:
            return text

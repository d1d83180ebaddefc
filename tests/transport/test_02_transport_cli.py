from __future__ import annotations

import json
import subprocess
from pathlib import Path

import pytest

from blocksmith_sdk.transport.cli import FlowCli
from blocksmith_sdk.transport.errors import CliError, TransactionReverted


class _Runs:
    """Stands in for subprocess.run; remembers commands and the code file contents."""

    def __init__(self, stdout: str = "{}", returncode: int = 0, stderr: str = ""):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.calls = []
        self.files = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        for part in cmd:
            if str(part).endswith(".cdc") and Path(part).exists():
                self.files.append(Path(part).read_text(encoding="utf-8"))
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def cli() -> FlowCli:
    return FlowCli("flow", config_path="/tmp/proj/flow.json", network="emulator", timeout=5)


def test_send_transaction_single_signer(monkeypatch, cli):
    runs = _Runs(stdout=json.dumps({"id": "abc", "status": "SEALED", "events": []}))
    monkeypatch.setattr(subprocess, "run", runs)

    args = [{"type": "UInt32", "value": "1"}]
    out = cli.send_transaction("transaction(id: UInt32) {}", args, ["Admin"], name="admin/lock_set")

    assert out["status"] == "SEALED"
    cmd, kwargs = runs.calls[0]
    assert cmd[:3] == ["flow", "transactions", "send"]
    assert cmd[3].endswith("admin_lock_set.cdc")
    assert cmd[cmd.index("--args-json") + 1] == json.dumps(args)
    assert cmd[cmd.index("--signer") + 1] == "Admin"
    assert cmd[cmd.index("--network") + 1] == "emulator"
    assert cmd[cmd.index("--config-path") + 1] == "/tmp/proj/flow.json"
    assert "--skip-version-check" in cmd
    assert kwargs["timeout"] == 5
    assert runs.files == ["transaction(id: UInt32) {}"]


def test_send_transaction_many_signers(monkeypatch, cli):
    runs = _Runs(stdout=json.dumps({"id": "abc", "status": "SEALED"}))
    monkeypatch.setattr(subprocess, "run", runs)

    cli.send_transaction("transaction {}", [], ["SuperAdmin", "User"])

    cmd, _ = runs.calls[0]
    assert "--signer" not in cmd
    assert cmd[cmd.index("--proposer") + 1] == "SuperAdmin"
    assert cmd[cmd.index("--payer") + 1] == "SuperAdmin"
    authorizers = [cmd[i + 1] for i, part in enumerate(cmd) if part == "--authorizer"]
    assert authorizers == ["SuperAdmin", "User"]


def test_send_transaction_requires_a_signer(cli):
    with pytest.raises(ValueError):
        cli.send_transaction("transaction {}", [], [])


def test_error_in_result_is_a_revert(monkeypatch, cli):
    runs = _Runs(stdout=json.dumps({"id": "dead", "status": "SEALED", "error": "panic: set is locked"}))
    monkeypatch.setattr(subprocess, "run", runs)

    with pytest.raises(TransactionReverted) as ei:
        cli.send_transaction("transaction {}", [], ["Admin"], name="admin/add_blueprints_to_set")
    assert ei.value.tx_id == "dead"
    assert "set is locked" in str(ei.value)


def test_nonzero_exit_is_a_revert(monkeypatch, cli):
    monkeypatch.setattr(subprocess, "run", _Runs(stdout="", returncode=1, stderr="❌ Transaction Error"))

    with pytest.raises(TransactionReverted) as ei:
        cli.send_transaction("transaction {}", [], ["User"])
    assert "Transaction Error" in ei.value.output


def test_missing_binary(monkeypatch, cli):
    def _boom(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", _boom)
    with pytest.raises(CliError) as ei:
        cli.run(["version"])
    assert ei.value.returncode == 127


def test_create_account_and_derive_key(monkeypatch, cli):
    runs = _Runs(stdout=json.dumps({"address": "0x01cf0e2f2f715450"}))
    monkeypatch.setattr(subprocess, "run", runs)
    assert cli.create_account("pubkey", signer="emulator-account") == "0x01cf0e2f2f715450"
    cmd, _ = runs.calls[0]
    assert cmd[1:5] == ["accounts", "create", "--key", "pubkey"]

    monkeypatch.setattr(subprocess, "run", _Runs(stdout=json.dumps({"private": "aa", "public": "bb"})))
    assert cli.derive_public_key("aa") == "bb"


def test_create_account_without_address_fails(monkeypatch, cli):
    monkeypatch.setattr(subprocess, "run", _Runs(stdout="{}"))
    with pytest.raises(CliError):
        cli.create_account("pubkey", signer="emulator-account")


def test_add_contract_writes_code(monkeypatch, cli):
    runs = _Runs(stdout=json.dumps({"address": "f8d6e0586b0a20c7", "contracts": ["Blocksmith"]}))
    monkeypatch.setattr(subprocess, "run", runs)

    out = cli.add_contract("pub contract Blocksmith {}", name="Blocksmith", signer="SuperAdmin")

    assert out["contracts"] == ["Blocksmith"]
    cmd, _ = runs.calls[0]
    assert cmd[1:3] == ["accounts", "add-contract"]
    assert cmd[3].endswith("Blocksmith.cdc")
    assert runs.files == ["pub contract Blocksmith {}"]


def test_banner_before_json_is_tolerated(monkeypatch, cli):
    monkeypatch.setattr(subprocess, "run", _Runs(stdout='Version warning\n{"address": "0x01"}'))
    assert cli.run(["accounts", "get", "0x01"]) == {"address": "0x01"}

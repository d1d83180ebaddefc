from __future__ import annotations

import logging
from pathlib import Path

import pytest

from blocksmith_sdk import types as t
from blocksmith_sdk.apis.accounts import AccountsAPI
from blocksmith_sdk.apis.interactions import InteractionsAPI
from blocksmith_sdk.templates import TemplateLoader
from blocksmith_sdk.transport.errors import BadRequest, TransactionReverted, UnknownAccount


class FakeHttp:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def execute_script(self, code, arguments):
        self.calls.append((code, arguments))
        if self.error:
            raise self.error
        return self.result


class FakeCli:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def send_transaction(self, code, arguments, signers, *, name="transaction"):
        self.calls.append((code, arguments, list(signers), name))
        if self.error:
            raise self.error
        return {"id": "1", "status": "SEALED"}

    def create_account(self, public_key, *, signer):
        return "0x01cf0e2f2f715450"

    def derive_public_key(self, private_key):
        return "pub"


def _ix(flow_project: Path, http, cli) -> InteractionsAPI:
    accounts = AccountsAPI(cli, http, flow_config_path=str(flow_project / "flow.json"))
    accounts.get_account_address("Admin")
    return InteractionsAPI(
        http, cli, TemplateLoader(flow_project), accounts,
        address_map=lambda: {"Blocksmith": "0x01cf0e2f2f715450", "NonFungibleToken": "0x01cf0e2f2f715450"},
    )


def test_run_script_resolves_encodes_and_decodes(flow_project: Path):
    http = FakeHttp(result={"type": "Struct", "value": {"id": "x", "fields": [
        {"name": "creatorID", "value": {"type": "UInt32", "value": "1"}},
    ]}})
    ix = _ix(flow_project, http, FakeCli())

    assert ix.run_script("creators/get_creator_data", [(1, t.UInt32)]) == {"creatorID": 1}
    code, arguments = http.calls[0]
    assert code.startswith("import Blocksmith from 0x01cf0e2f2f715450")
    assert arguments == [{"type": "UInt32", "value": "1"}]


def test_send_transaction_maps_signer_addresses_to_names(flow_project: Path):
    cli = FakeCli()
    ix = _ix(flow_project, FakeHttp(), cli)

    ix.send_transaction("admin/create_set", [(1, t.UInt32), ("Pokemon Red", t.String)], ["0x01cf0e2f2f715450"])

    code, arguments, signers, name = cli.calls[0]
    assert signers == ["Admin"]
    assert name == "admin/create_set"
    assert "import Blocksmith from 0x01cf0e2f2f715450" in code
    assert arguments[1] == {"type": "String", "value": "Pokemon Red"}


def test_rejections_are_logged_and_reraised(flow_project: Path, caplog):
    caplog.set_level(logging.WARNING)

    ix = _ix(flow_project, FakeHttp(error=BadRequest(message="panic", status_code=400)), FakeCli())
    with pytest.raises(BadRequest):
        ix.run_script("creators/get_creator_data", [(9, t.UInt32)])
    assert "script creators/get_creator_data rejected" in caplog.text

    ix = _ix(flow_project, FakeHttp(), FakeCli(error=TransactionReverted(message="reverted")))
    with pytest.raises(TransactionReverted):
        ix.send_transaction("admin/create_set", [(1, t.UInt32), ("x", t.String)], ["Admin"])
    assert "transaction admin/create_set rejected" in caplog.text


def test_unknown_signer(flow_project: Path):
    ix = _ix(flow_project, FakeHttp(), FakeCli())
    with pytest.raises(UnknownAccount):
        ix.send_transaction("admin/create_set", [], ["0x0000000000000bad"])


def test_inline_code_shares_import_rewriting_and_signer_mapping(flow_project: Path):
    http = FakeHttp(result={"type": "String", "value": "Hello"})
    cli = FakeCli()
    ix = _ix(flow_project, http, cli)

    script = 'import Blocksmith from "../contracts/Blocksmith.cdc"\n\npub fun main(): String { return "Hello" }\n'
    assert ix.run_code(script) == "Hello"
    assert http.calls[0][0].startswith("import Blocksmith from 0x01cf0e2f2f715450")

    tx = "import Blocksmith from 0xBlocksmith\n\ntransaction(message: String) {}\n"
    assert ix.send_code(tx, [("hi", t.String)], ["0x01cf0e2f2f715450"])["status"] == "SEALED"
    code, arguments, signers, name = cli.calls[0]
    assert code.startswith("import Blocksmith from 0x01cf0e2f2f715450")
    assert arguments == [{"type": "String", "value": "hi"}]
    assert signers == ["Admin"]
    assert name == "inline"


def test_inline_rejection_is_logged(flow_project: Path, caplog):
    caplog.set_level(logging.WARNING)
    ix = _ix(flow_project, FakeHttp(), FakeCli(error=TransactionReverted(message="reverted")))

    with pytest.raises(TransactionReverted):
        ix.send_code("transaction {}", signers=["Admin"], name="hello")
    assert "transaction hello rejected" in caplog.text

from __future__ import annotations

import json
from pathlib import Path

import pytest

from blocksmith_sdk.client import BlocksmithClient
from blocksmith_sdk.config import Settings, get_settings
from helpers import cadence_project_ready, flow_available

SERVICE_KEY = "f8e188e8af0b8b414be59c4a1a15cc666c898fb34d94156e9b51e18bfde754a5"


# ---------- offline fixtures ----------

@pytest.fixture
def flow_project(tmp_path: Path) -> Path:
    """
    Minimal Cadence project: flow.json with the emulator service account plus
    a couple of templates.
    """
    cfg = {
        "networks": {"emulator": "127.0.0.1:3569"},
        "accounts": {
            "emulator-account": {"address": "f8d6e0586b0a20c7", "key": SERVICE_KEY},
        },
    }
    (tmp_path / "flow.json").write_text(json.dumps(cfg, indent=2), encoding="utf-8")

    (tmp_path / "scripts" / "creators").mkdir(parents=True)
    (tmp_path / "scripts" / "creators" / "get_creator_data.cdc").write_text(
        'import Blocksmith from "../../contracts/Blocksmith.cdc"\n\n'
        "pub fun main(creatorID: UInt32): Blocksmith.CreatorData {\n"
        "    return Blocksmith.getCreatorData(creatorID: creatorID)\n"
        "}\n",
        encoding="utf-8",
    )
    (tmp_path / "transactions" / "admin").mkdir(parents=True)
    (tmp_path / "transactions" / "admin" / "create_set.cdc").write_text(
        "import NonFungibleToken from 0xNonFungibleToken\n"
        "import Blocksmith from 0xBlocksmith\n\n"
        "transaction(creatorID: UInt32, setName: String) {}\n",
        encoding="utf-8",
    )
    (tmp_path / "contracts").mkdir()
    (tmp_path / "contracts" / "Blocksmith.cdc").write_text(
        'import NonFungibleToken from "./NonFungibleToken.cdc"\n\npub contract Blocksmith {}\n',
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def offline_settings(flow_project: Path) -> Settings:
    return Settings(base_path=str(flow_project), flow_bin="flow-not-installed", timeout=5)


# ---------- emulator fixtures ----------

@pytest.fixture(scope="session")
def emulator_settings() -> Settings:
    s = get_settings()
    if not flow_available(s.flow_bin):
        pytest.skip(f"flow CLI not found ({s.flow_bin}); install it or set BLOCKSMITH_FLOW_BIN")
    if not cadence_project_ready(s.base_path):
        pytest.skip(f"Blocksmith Cadence project not found under {s.base_path} (set BLOCKSMITH_BASE_PATH)")
    return s


@pytest.fixture(scope="module")
def module_client(emulator_settings: Settings):
    """One emulator for a whole module: for groups that don't change state between tests."""
    client = BlocksmithClient(settings=emulator_settings)
    client.emulator.start()
    yield client
    client.emulator.stop()


@pytest.fixture
def client(emulator_settings: Settings):
    """Fresh emulator per test, so every test starts from an empty chain."""
    client = BlocksmithClient(settings=emulator_settings)
    client.emulator.start()
    yield client
    client.emulator.stop()


# ---------- façade fakes ----------

class RecordingInteractions:
    """Stands in for InteractionsAPI: records every call, answers scripts from a queue."""

    def __init__(self):
        self.scripts = []
        self.transactions = []
        self.script_results = []

    def run_script(self, name, args=()):
        self.scripts.append((name, list(args)))
        return self.script_results.pop(0) if self.script_results else None

    def send_transaction(self, name, args=(), signers=()):
        self.transactions.append((name, list(args), list(signers)))
        return {"id": f"tx{len(self.transactions)}", "status": "SEALED", "error": ""}


class RecordingAccounts:
    def __init__(self):
        self.funded = []
        self.minted = []

    def get_super_admin_address(self):
        return "0x01cf0e2f2f715450"

    def mint_flow(self, address, amount):
        self.minted.append((address, amount))
        return {"status": "SEALED"}

    def fund_user(self, address, amount="1000.0"):
        self.funded.append((address, amount))
        return {"status": "SEALED"}


class RecordingContracts:
    def __init__(self):
        self.deployed = []

    def deploy_contract_by_name(self, to, name, address_map=None):
        self.deployed.append((to, name, address_map))
        return {"address": to, "contracts": [name]}

    def address_map(self, *names):
        return {n: "0x01cf0e2f2f715450" for n in names}


@pytest.fixture
def recorder():
    from blocksmith_sdk.apis.blocksmith import BlocksmithAPI

    ix = RecordingInteractions()
    accounts = RecordingAccounts()
    contracts = RecordingContracts()
    api = BlocksmithAPI(ix, accounts, contracts)
    return api, ix, accounts, contracts

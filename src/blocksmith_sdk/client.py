from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .transport.cli import FlowCli
from .transport.http import HttpTransport
from .config import Settings, get_settings
from .emulator import Emulator
from .storage.base import Storage
from .storage.factory import make_storage
from .templates import TemplateLoader
from .transport.errors import ContractNotDeployed

from .apis.accounts import AccountsAPI
from .apis.blocksmith import BlocksmithAPI
from .apis.contracts import ContractsAPI
from .apis.interactions import InteractionsAPI


@dataclass
class BlocksmithClient:
    settings: Settings = field(default_factory=Settings)

    # optional storage for the CLI scripts
    storage: Optional[Storage] = None

    _http: HttpTransport = field(init=False, repr=False)
    _cli: FlowCli = field(init=False, repr=False)

    # exposed APIs
    templates: TemplateLoader = field(init=False)
    accounts: AccountsAPI = field(init=False)
    contracts: ContractsAPI = field(init=False)
    interactions: InteractionsAPI = field(init=False)
    blocksmith: BlocksmithAPI = field(init=False)
    emulator: Emulator = field(init=False)

    def __post_init__(self) -> None:
        s = self.settings
        base = str(Path(s.base_path).expanduser().resolve())
        flow_config = str(Path(s.flow_config_path).expanduser().resolve())

        self._http = HttpTransport(s.rest_url, timeout=s.timeout)
        self._cli = FlowCli(
            s.flow_bin,
            config_path=flow_config,
            network=s.network,
            cwd=base,
            timeout=s.timeout,
        )

        self.templates = TemplateLoader(base)
        self.accounts = AccountsAPI(
            self._cli,
            self._http,
            flow_config_path=flow_config,
            service_account=s.service_account,
        )
        self.contracts = ContractsAPI(self._cli, self.templates, self.accounts)
        self.interactions = InteractionsAPI(
            self._http,
            self._cli,
            self.templates,
            self.accounts,
            address_map=self._live_address_map,
        )
        self.blocksmith = BlocksmithAPI(self.interactions, self.accounts, self.contracts)

        self.emulator = Emulator(
            self._http,
            flow_bin=s.flow_bin,
            cwd=base,
            config_path=flow_config,
            grpc_port=s.grpc_port,
            rest_port=s.rest_port,
            admin_port=s.admin_port,
            logging_enabled=s.emulator_logging,
            ready_timeout=float(s.timeout),
        )
        self.emulator.on_stop(self.reset)

    def _live_address_map(self) -> Dict[str, str]:
        # contracts not deployed yet are simply left out so their imports stay untouched
        out: Dict[str, str] = {}
        for name in ("Blocksmith", "NonFungibleToken"):
            try:
                out[name] = self.contracts.get_contract_address(name)
            except ContractNotDeployed:
                continue
        return out

    def reset(self) -> None:
        """Forget accounts and deployments (the chain they lived on is gone)."""
        self.accounts.reset()
        self.contracts.reset()

    @classmethod
    def from_env(cls) -> "BlocksmithClient":
        s = get_settings()
        storage = make_storage(s.storage_backend, s.storage_dir)
        return cls(settings=s, storage=storage)

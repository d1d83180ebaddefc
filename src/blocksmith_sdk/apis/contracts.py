from __future__ import annotations

import logging
from typing import Any, Dict

from ..templates import AddressMap, TemplateLoader
from ..transport.cli import FlowCli
from ..transport.errors import ContractNotDeployed
from .accounts import AccountsAPI

log = logging.getLogger(__name__)


class ContractsAPI:
    def __init__(self, cli: FlowCli, templates: TemplateLoader, accounts: AccountsAPI):
        self._cli = cli
        self._templates = templates
        self._accounts = accounts
        self._deployed: Dict[str, str] = {}

    def deploy_contract_by_name(self, to: str, name: str, address_map: AddressMap = None) -> Dict[str, Any]:
        """
        Deploy contracts/<name>.cdc to account `to` (an address or a known
        account name), with its imports pointed at `address_map`.
        """
        code = self._templates.contract_code(name, address_map)
        signer = self._accounts.name_for(to)
        result = self._cli.add_contract(code, name=name, signer=signer)
        address = self._accounts.address_of(to)
        self._deployed[name] = address
        log.info("deployed %s to %s", name, address)
        return result

    def get_contract_address(self, name: str) -> str:
        address = self._deployed.get(name)
        if not address:
            raise ContractNotDeployed(message=f"{name} has not been deployed in this session")
        return address

    def address_map(self, *names: str) -> Dict[str, str]:
        return {n: self.get_contract_address(n) for n in names}

    def remember(self, name: str, address: str) -> None:
        self._deployed[name] = address

    def deployed(self) -> Dict[str, str]:
        return dict(self._deployed)

    def reset(self) -> None:
        self._deployed.clear()

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .. import types as t
from ..models.blocksmith import Blueprint, Creation, Creator, SetData
from .accounts import AccountsAPI
from .contracts import ContractsAPI
from .interactions import InteractionsAPI

_METADATA = t.Dictionary(t.String, t.String)


def _metadata_pairs(metadata: Mapping[str, str]) -> List[Dict[str, str]]:
    return [{"key": k, "value": v} for k, v in metadata.items()]


class BlocksmithAPI:
    """
    One call per Blocksmith script / transaction.

    Signers and recipients are account addresses as returned by
    ``AccountsAPI``; ids are plain ints.
    """

    def __init__(self, interactions: InteractionsAPI, accounts: AccountsAPI, contracts: ContractsAPI):
        self._ix = interactions
        self._accounts = accounts
        self._contracts = contracts

    # -------- deployment --------

    def deploy_blocksmith(self) -> Dict[str, Any]:
        """
        Deploys NonFungibleToken and Blocksmith to SuperAdmin.
        Raises if either deployment is rejected.
        """
        super_admin = self._accounts.get_super_admin_address()
        self._accounts.mint_flow(super_admin, "10000.0")

        self._contracts.deploy_contract_by_name(super_admin, "NonFungibleToken")

        address_map = {"NonFungibleToken": super_admin}
        return self._contracts.deploy_contract_by_name(super_admin, "Blocksmith", address_map)

    def address_map(self) -> Dict[str, str]:
        # only valid after deploy_blocksmith
        return self._contracts.address_map("Blocksmith", "NonFungibleToken")

    def fund_and_setup_accounts(self, users: Iterable[str]) -> None:
        for user in users:
            self._accounts.fund_user(user)
            self.setup_account(user)

    # -------- scripts --------

    def get_admin_access(self, address: str) -> Dict[int, bool]:
        name = "creators/get_admin_access"
        args = [(address, t.Address)]
        return self._ix.run_script(name, args)

    def get_creator_data(self, creator_id: int) -> Creator:
        name = "creators/get_creator_data"
        args = [(creator_id, t.UInt32)]
        return Creator.model_validate(self._ix.run_script(name, args))

    def get_set_data(self, creator_id: int, set_id: int) -> SetData:
        name = "sets/get_set_data"
        args = [
            (creator_id, t.UInt32),
            (set_id, t.UInt32),
        ]
        return SetData.model_validate(self._ix.run_script(name, args))

    def get_blueprint(self, creator_id: int, blueprint_id: int) -> Blueprint:
        name = "blueprints/get_blueprint"
        args = [
            (creator_id, t.UInt32),
            (blueprint_id, t.UInt32),
        ]
        return Blueprint.model_validate(self._ix.run_script(name, args))

    def get_blueprints(self, creator_id: int) -> List[Blueprint]:
        name = "blueprints/get_blueprints"
        args = [(creator_id, t.UInt32)]
        data = self._ix.run_script(name, args) or []
        return [Blueprint.model_validate(b) for b in data]

    def get_blueprint_metadata(self, creator_id: int, blueprint_id: int) -> Dict[str, str]:
        name = "blueprints/get_blueprint_metadata"
        args = [
            (creator_id, t.UInt32),
            (blueprint_id, t.UInt32),
        ]
        return self._ix.run_script(name, args)

    def get_creation_ids(self, address: str) -> List[int]:
        name = "creations/get_owned_creation_ids"
        args = [(address, t.Address)]
        return self._ix.run_script(name, args)

    def get_creation_data(self, address: str, global_id: int) -> Creation:
        name = "creations/get_creation_data"
        args = [
            (address, t.Address),
            (global_id, t.UInt64),
        ]
        return Creation.model_validate(self._ix.run_script(name, args))

    # -------- super admin transactions --------

    def check_super_admin_resource(self, address: str) -> Dict[str, Any]:
        name = "super_admin/super_admin_check"
        return self._ix.send_transaction(name, [], [address])

    def grant_admin_access(self, super_admin: str, address: str, creator_id: int) -> Dict[str, Any]:
        name = "super_admin/add_creator_access"
        args = [
            (address, t.Address),
            (creator_id, t.UInt32),
        ]
        return self._ix.send_transaction(name, args, [super_admin])

    def create_creator(self, super_admin: str, address: str) -> Dict[str, Any]:
        name = "super_admin/create_creator"
        args = [(address, t.Address)]
        return self._ix.send_transaction(name, args, [super_admin])

    # -------- admin transactions --------

    def update_creator_metadata(self, admin: str, creator_id: int, metadata: Mapping[str, str]) -> Dict[str, Any]:
        name = "admin/add_metadata_to_creator"
        args = [
            (creator_id, t.UInt32),
            (_metadata_pairs(metadata), _METADATA),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def create_blueprint(
        self,
        admin: str,
        creator_id: int,
        metadata: Mapping[str, str],
        creation_limit: Optional[int],
    ) -> Dict[str, Any]:
        name = "admin/create_blueprint"
        args = [
            (creator_id, t.UInt32),
            (_metadata_pairs(metadata), _METADATA),
            (creation_limit, t.Optional(t.UInt32)),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def create_set(self, admin: str, creator_id: int, set_name: str) -> Dict[str, Any]:
        name = "admin/create_set"
        args = [
            (creator_id, t.UInt32),
            (set_name, t.String),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def create_bulk_blueprints_and_sets(
        self,
        admin: str,
        creator_id: int,
        creation_metadatas: Iterable[Mapping[str, str]],
        creation_limit: Optional[int],
        set_names: Iterable[str],
    ) -> None:
        for creation_metadata in creation_metadatas:
            self.create_blueprint(admin, creator_id, creation_metadata, creation_limit)
        for set_name in set_names:
            self.create_set(admin, creator_id, set_name)

    def add_blueprints_to_set(
        self,
        admin: str,
        creator_id: int,
        set_id: int,
        blueprint_ids: Sequence[int],
    ) -> Dict[str, Any]:
        name = "admin/add_blueprints_to_set"
        args = [
            (creator_id, t.UInt32),
            (set_id, t.UInt32),
            (list(blueprint_ids), t.Array(t.UInt32)),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def lock_set(self, admin: str, creator_id: int, set_id: int) -> Dict[str, Any]:
        name = "admin/lock_set"
        args = [
            (creator_id, t.UInt32),
            (set_id, t.UInt32),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def mint_creation(
        self,
        admin: str,
        creator_id: int,
        set_id: int,
        blueprint_id: int,
        recipient: str,
    ) -> Dict[str, Any]:
        name = "admin/mint_creation"
        args = [
            (creator_id, t.UInt32),
            (set_id, t.UInt32),
            (blueprint_id, t.UInt32),
            (recipient, t.Address),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def mint_creations(
        self,
        admin: str,
        creator_id: int,
        set_id: int,
        blueprint_ids: Sequence[int],
        recipient: str,
    ) -> Dict[str, Any]:
        name = "admin/batch_mint_creations"
        args = [
            (creator_id, t.UInt32),
            (set_id, t.UInt32),
            (list(blueprint_ids), t.Array(t.UInt32)),
            (recipient, t.Address),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def retire_blueprint_from_set(self, admin: str, creator_id: int, set_id: int, blueprint_id: int) -> Dict[str, Any]:
        name = "admin/retire_blueprint_from_set"
        args = [
            (creator_id, t.UInt32),
            (set_id, t.UInt32),
            (blueprint_id, t.UInt32),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def create_blueprint_set(
        self,
        admin: str,
        creator_id: int,
        metadata: Mapping[str, str],
        creation_limit: Optional[int],
        set_name: str,
    ) -> Dict[str, Any]:
        name = "admin/create_blueprint_set"
        args = [
            (creator_id, t.UInt32),
            (_metadata_pairs(metadata), _METADATA),
            (creation_limit, t.Optional(t.UInt32)),
            (set_name, t.String),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def create_blueprint_set_and_mint(self, admin: str, creator_id: int, recipient: str) -> Dict[str, Any]:
        name = "admin/create_blueprint_set_and_mint"
        args = [
            (creator_id, t.UInt32),
            (recipient, t.Address),
        ]
        return self._ix.send_transaction(name, args, [admin])

    def increment_series(self, admin: str, creator_id: int) -> Dict[str, Any]:
        name = "admin/increment_series"
        args = [(creator_id, t.UInt32)]
        return self._ix.send_transaction(name, args, [admin])

    # -------- user transactions --------

    def setup_account(self, user: str) -> Dict[str, Any]:
        name = "user/setup_account"
        return self._ix.send_transaction(name, [], [user])

    def transfer_creation(self, user: str, transfer_address: str, withdraw_id: int) -> Dict[str, Any]:
        name = "user/transfer_creation"
        args = [
            (transfer_address, t.Address),
            (withdraw_id, t.UInt64),
        ]
        return self._ix.send_transaction(name, args, [user])

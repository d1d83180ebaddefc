from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from ..templates import AddressMap, TemplateLoader, replace_imports
from ..transport.cli import FlowCli
from ..transport.errors import FlowError
from ..transport.http import HttpTransport
from ..transport.serializers import decode_value, encode_args
from ..types import Arg
from .accounts import AccountsAPI

log = logging.getLogger(__name__)


class InteractionsAPI:
    """
    Runs scripts and transactions, named from the Cadence project or given
    as source.

    Scripts go through the Access REST API, transactions through the CLI
    (which holds the signing keys). Rejections are logged and re-raised.
    """

    def __init__(
        self,
        http: HttpTransport,
        cli: FlowCli,
        templates: TemplateLoader,
        accounts: AccountsAPI,
        *,
        address_map: AddressMap = None,
    ):
        self._http = http
        self._cli = cli
        self._templates = templates
        self._accounts = accounts
        self.address_map = address_map

    def run_script(self, name: str, args: Sequence[Arg] = ()) -> Any:
        code = self._templates.script_code(name)
        return self.run_code(code, args, name=name)

    def run_code(self, code: str, args: Sequence[Arg] = (), *, name: str = "inline") -> Any:
        """Execute a script given as source; imports are rewritten like templates."""
        code = replace_imports(code, self.address_map)
        try:
            raw = self._http.execute_script(code, encode_args(args))
        except FlowError as e:
            log.warning("script %s rejected: %s", name, e)
            raise
        return decode_value(raw)

    def send_transaction(
        self,
        name: str,
        args: Sequence[Arg] = (),
        signers: Sequence[str] = (),
    ) -> Dict[str, Any]:
        code = self._templates.transaction_code(name)
        return self.send_code(code, args, signers, name=name)

    def send_code(
        self,
        code: str,
        args: Sequence[Arg] = (),
        signers: Sequence[str] = (),
        *,
        name: str = "inline",
    ) -> Dict[str, Any]:
        code = replace_imports(code, self.address_map)
        signer_names = [self._accounts.name_for(s) for s in signers]
        try:
            return self._cli.send_transaction(code, encode_args(args), signer_names, name=name)
        except FlowError as e:
            log.warning("transaction %s rejected: %s", name, e)
            raise


from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class FlowError(Exception):
    message: str
    output: Optional[str] = None

    def __post_init__(self):
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.output:
            return f"{self.message} | {self.output}"
        return self.message


@dataclass
class AccessApiError(FlowError):
    status_code: int = 0

    def __str__(self) -> str:
        base = f"{self.status_code}: {self.message}"
        if self.output:
            return f"{base} | {self.output}"
        return base


class BadRequest(AccessApiError):
    """400 (script panics and invalid arguments land here)"""


class NotFound(AccessApiError):
    """404"""


class ServerError(AccessApiError):
    """5xx"""


@dataclass
class CliError(FlowError):
    returncode: int = 1


@dataclass
class TransactionReverted(FlowError):
    tx_id: Optional[str] = None


class TemplateNotFound(FlowError):
    """No .cdc file for the requested script/transaction/contract name"""


class ContractNotDeployed(FlowError):
    """Contract address requested before it was deployed in this session"""


class UnknownAccount(FlowError):
    """Signer address that was never created through the account registry"""


class EmulatorError(FlowError):
    """Emulator failed to start or stop"""

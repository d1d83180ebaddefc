from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Union

from .transport.errors import TemplateNotFound
from .types import with_prefix

AddressMap = Union[Mapping[str, str], Callable[[], Mapping[str, str]], None]

# import Foo from "../../contracts/Foo.cdc" | import Foo from 0xFoo | import Foo from 0x01
_IMPORT_RE = re.compile(
    r'^(?P<head>\s*import\s+(?P<name>\w+)\s+from\s+)(?P<location>"[^"]*"|0x\w+)',
    re.MULTILINE,
)

_KINDS = {
    "script": "scripts",
    "transaction": "transactions",
    "contract": "contracts",
}


def resolve_address_map(address_map: AddressMap) -> Dict[str, str]:
    if address_map is None:
        return {}
    if callable(address_map):
        address_map = address_map()
    return dict(address_map or {})


def replace_imports(code: str, address_map: AddressMap) -> str:
    """
    Point every import of a contract named in the map at its address.
    Imports of contracts not in the map are left alone.
    """
    addresses = resolve_address_map(address_map)
    if not addresses:
        return code

    def _sub(m: re.Match) -> str:
        name = m.group("name")
        if name not in addresses:
            return m.group(0)
        return f"{m.group('head')}{with_prefix(addresses[name])}"

    return _IMPORT_RE.sub(_sub, code)


class TemplateLoader:
    """
    Loads .cdc files from a Cadence project laid out as
    <base>/{scripts,transactions,contracts}/<name>.cdc
    """

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)

    def path_for(self, kind: str, name: str) -> Path:
        folder = _KINDS.get(kind)
        if folder is None:
            raise ValueError(f"unknown template kind: {kind}")
        name = name.strip().strip("/")
        if not name.endswith(".cdc"):
            name = f"{name}.cdc"
        return self.base_path / folder / name

    def read(self, kind: str, name: str, address_map: AddressMap = None) -> str:
        p = self.path_for(kind, name)
        if not p.is_file():
            raise TemplateNotFound(message=f"{kind} template not found: {p}")
        return replace_imports(p.read_text(encoding="utf-8"), address_map)

    def script_code(self, name: str, address_map: AddressMap = None) -> str:
        return self.read("script", name, address_map)

    def transaction_code(self, name: str, address_map: AddressMap = None) -> str:
        return self.read("transaction", name, address_map)

    def contract_code(self, name: str, address_map: AddressMap = None) -> str:
        return self.read("contract", name, address_map)


BUILTIN_DIR = Path(__file__).resolve().parent / "cadence"


def builtin_transaction(name: str, address_map: Optional[Mapping[str, str]] = None) -> str:
    p = BUILTIN_DIR / f"{name}.cdc"
    if not p.is_file():
        raise TemplateNotFound(message=f"built-in transaction not found: {name}")
    return replace_imports(p.read_text(encoding="utf-8"), address_map)

"""
Cadence argument types.

Façade functions describe each argument as a ``(value, type)`` pair, e.g.
``(creator_id, t.UInt32)`` or ``(ids, t.Array(t.UInt32))``; the type knows
how to render the value as JSON-Cadence.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class CadenceType:
    name: str

    def encode(self, value: Any) -> Dict[str, Any]:
        return {"type": self.name, "value": value}


@dataclass(frozen=True)
class _Integer(CadenceType):
    # 0 = unbounded (Int)
    bits: int = 0

    def encode(self, value: Any) -> Dict[str, Any]:
        if isinstance(value, bool) or int(value) != value:
            raise TypeError(f"{self.name} expects an integer, got {value!r}")
        if self.name.startswith("U") and int(value) < 0:
            raise ValueError(f"{self.name} cannot be negative: {value}")
        if self.bits and int(value) >= 2 ** self.bits:
            raise ValueError(f"{self.name} out of range: {value}")
        return {"type": self.name, "value": str(int(value))}


@dataclass(frozen=True)
class _String(CadenceType):
    def encode(self, value: Any) -> Dict[str, Any]:
        if not isinstance(value, str):
            raise TypeError(f"{self.name} expects str, got {type(value).__name__}")
        return {"type": self.name, "value": value}


@dataclass(frozen=True)
class _Bool(CadenceType):
    def encode(self, value: Any) -> Dict[str, Any]:
        return {"type": self.name, "value": bool(value)}


@dataclass(frozen=True)
class _Address(CadenceType):
    def encode(self, value: Any) -> Dict[str, Any]:
        return {"type": self.name, "value": with_prefix(str(value))}


@dataclass(frozen=True)
class _UFix64(CadenceType):
    def encode(self, value: Any) -> Dict[str, Any]:
        d = Decimal(str(value))
        if d < 0:
            raise ValueError(f"UFix64 cannot be negative: {value}")
        return {"type": self.name, "value": f"{d.quantize(Decimal('0.00000001')):f}"}


@dataclass(frozen=True)
class Optional(CadenceType):
    inner: CadenceType = None

    def __init__(self, inner: CadenceType):
        object.__setattr__(self, "name", "Optional")
        object.__setattr__(self, "inner", inner)

    def encode(self, value: Any) -> Dict[str, Any]:
        if value is None:
            return {"type": "Optional", "value": None}
        return {"type": "Optional", "value": self.inner.encode(value)}


@dataclass(frozen=True)
class Array(CadenceType):
    inner: CadenceType = None

    def __init__(self, inner: CadenceType):
        object.__setattr__(self, "name", "Array")
        object.__setattr__(self, "inner", inner)

    def encode(self, value: Any) -> Dict[str, Any]:
        return {"type": "Array", "value": [self.inner.encode(v) for v in value]}


@dataclass(frozen=True)
class Dictionary(CadenceType):
    key_type: CadenceType = None
    value_type: CadenceType = None

    def __init__(self, key: CadenceType, value: CadenceType):
        object.__setattr__(self, "name", "Dictionary")
        object.__setattr__(self, "key_type", key)
        object.__setattr__(self, "value_type", value)

    def encode(self, value: Any) -> Dict[str, Any]:
        return {
            "type": "Dictionary",
            "value": [
                {"key": self.key_type.encode(k), "value": self.value_type.encode(v)}
                for k, v in _pairs(value)
            ],
        }


def _pairs(value: Any):
    # accepts {k: v} or [{"key": k, "value": v}, ...]
    if isinstance(value, Mapping):
        return list(value.items())
    out = []
    for item in value:
        if isinstance(item, Mapping):
            out.append((item["key"], item["value"]))
        else:
            k, v = item
            out.append((k, v))
    return out


def with_prefix(address: str) -> str:
    address = address.strip()
    return address if address.startswith("0x") else f"0x{address}"


Address = _Address("Address")
String = _String("String")
Bool = _Bool("Bool")
Int = _Integer("Int")
UInt8 = _Integer("UInt8", 8)
UInt16 = _Integer("UInt16", 16)
UInt32 = _Integer("UInt32", 32)
UInt64 = _Integer("UInt64", 64)
UFix64 = _UFix64("UFix64")

Arg = Tuple[Any, CadenceType]

from __future__ import annotations
from typing import Any, Dict, Iterable, List

from ..types import Arg

_INT_TYPES = {
    "Int", "Int8", "Int16", "Int32", "Int64", "Int128", "Int256",
    "UInt", "UInt8", "UInt16", "UInt32", "UInt64", "UInt128", "UInt256",
    "Word8", "Word16", "Word32", "Word64",
}

_COMPOSITE_TYPES = {"Struct", "Resource", "Event", "Contract", "Enum"}


def encode_args(args: Iterable[Arg]) -> List[Dict[str, Any]]:
    return [cadence_type.encode(value) for value, cadence_type in args]


def decode_value(payload: Any) -> Any:
    """
    Turn a JSON-Cadence value into plain Python.

    Integers become int, fixed-point numbers stay strings ("10.00000000"),
    composites become a dict of their fields, dictionary keys are decoded
    too (so UInt32-keyed maps come back with int keys).
    """
    if payload is None:
        return None
    if not isinstance(payload, dict) or "type" not in payload:
        return payload

    t = payload["type"]
    v = payload.get("value")

    if t == "Void":
        return None
    if t == "Optional":
        return decode_value(v)
    if t in _INT_TYPES:
        return int(v)
    if t in ("Fix64", "UFix64", "String", "Character", "Bool"):
        return v
    if t == "Address":
        return v
    if t == "Array":
        return [decode_value(item) for item in v]
    if t == "Dictionary":
        return {_hashable(decode_value(item["key"])): decode_value(item["value"]) for item in v}
    if t in _COMPOSITE_TYPES:
        return {f["name"]: decode_value(f["value"]) for f in v.get("fields", [])}
    if t == "Path":
        return f"/{v['domain']}/{v['identifier']}"
    if t == "Type":
        return v.get("staticType") if isinstance(v, dict) else v

    # Capability, Function, future types: hand back the raw value
    return v


def _hashable(key: Any) -> Any:
    if isinstance(key, list):
        return tuple(key)
    return key

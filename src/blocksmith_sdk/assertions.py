from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .transport.errors import FlowError

_SEALED = {"SEALED", "4"}


def shall_pass(call: Callable[[], Optional[Dict[str, Any]]]) -> Dict[str, Any]:
    """Transaction must seal without an error."""
    try:
        result = call()
    except FlowError as e:
        raise AssertionError(f"expected transaction to pass, it was rejected: {e}") from e

    if not isinstance(result, dict):
        raise AssertionError(f"expected a transaction result, got {result!r}")
    if result.get("error"):
        raise AssertionError(f"transaction sealed with error: {result['error']}")
    status = result.get("status")
    if status is not None and str(status).upper() not in _SEALED:
        raise AssertionError(f"transaction not sealed, status={status}")
    return result


def shall_revert(call: Callable[[], Any]) -> FlowError:
    """Call must be rejected by the emulator (transaction revert or script panic)."""
    try:
        result = call()
    except FlowError as e:
        return e
    raise AssertionError(f"expected rejection, call resolved with {result!r}")


def shall_resolve(call: Callable[[], Any]) -> Any:
    """Call must complete; returns its value."""
    try:
        return call()
    except FlowError as e:
        raise AssertionError(f"expected call to resolve, it was rejected: {e}") from e

from __future__ import annotations

import pytest

from blocksmith_sdk.assertions import shall_pass, shall_resolve, shall_revert
from blocksmith_sdk.transport.errors import BadRequest, TransactionReverted


def _reverts():
    raise TransactionReverted(message="transaction admin/lock_set reverted", output="panic: no access")


def test_shall_pass():
    sealed = {"id": "1", "status": "SEALED", "error": ""}
    assert shall_pass(lambda: sealed) is sealed

    with pytest.raises(AssertionError, match="rejected"):
        shall_pass(_reverts)
    with pytest.raises(AssertionError, match="sealed with error"):
        shall_pass(lambda: {"status": "SEALED", "error": "panic"})
    with pytest.raises(AssertionError, match="not sealed"):
        shall_pass(lambda: {"status": "PENDING"})
    with pytest.raises(AssertionError, match="expected a transaction result"):
        shall_pass(lambda: None)


def test_shall_revert():
    err = shall_revert(_reverts)
    assert isinstance(err, TransactionReverted)

    def _script_panics():
        raise BadRequest(message="POST /v1/scripts failed", status_code=400)

    assert shall_revert(_script_panics).status_code == 400

    with pytest.raises(AssertionError, match="expected rejection"):
        shall_revert(lambda: {"status": "SEALED"})


def test_shall_resolve():
    assert shall_resolve(lambda: [1, 2]) == [1, 2]
    with pytest.raises(AssertionError, match="expected call to resolve"):
        shall_resolve(_reverts)


def test_non_flow_errors_propagate():
    def _bug():
        raise KeyError("oops")

    with pytest.raises(KeyError):
        shall_revert(_bug)

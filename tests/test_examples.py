"""Tests for the runnable scripts under examples/."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest
import requests

from yookassa_payments.core.client import YooKassaClient

from .conftest import make_response

SCRIPT = Path(__file__).resolve().parent.parent / "examples" / "create_payout.py"


@pytest.fixture
def create_payout_script(monkeypatch, config, session):
    spec = importlib.util.spec_from_file_location("create_payout_example", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "create_client", lambda **kwargs: YooKassaClient(config, session=session))
    monkeypatch.setattr(
        sys,
        "argv",
        ["create_payout.py", "--amount", "150", "--phone", "79000000000", "--bank-id", "100000000111"],
    )
    return module


def test_successful_payout(create_payout_script, session) -> None:
    session.request.return_value = make_response(
        200,
        {"id": "po-1", "status": "pending", "amount": {"value": "150.00", "currency": "RUB"}},
    )

    assert create_payout_script.main() == 0
    session.close.assert_called_once()


@pytest.mark.parametrize(
    "failure",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_transport_failure_exits_with_error(create_payout_script, session, failure) -> None:
    session.request.side_effect = failure

    assert create_payout_script.main() == 1


def test_undecodable_reply_exits_with_error(create_payout_script, session) -> None:
    session.request.return_value = make_response(200, text="<html>maintenance</html>")

    assert create_payout_script.main() == 1

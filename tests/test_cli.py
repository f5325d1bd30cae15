"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
import requests

from yookassa_payments import cli
from yookassa_payments.core.client import YooKassaClient

from .conftest import make_response


@pytest.fixture
def patched_client(monkeypatch, config, session) -> YooKassaClient:
    client = YooKassaClient(config, session=session)
    monkeypatch.setattr(cli, "create_client", lambda **kwargs: client)
    return client


def test_check_ip_trusted(capsys) -> None:
    assert cli.run_cli(["check-ip", "185.71.76.5", "2a02:5180::1"]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "185.71.76.5 trusted",
        "2a02:5180::1 trusted",
    ]


def test_check_ip_any_untrusted_fails(capsys) -> None:
    assert cli.run_cli(["check-ip", "185.71.76.5", "185.71.76.5:8080"]) == 1

    assert capsys.readouterr().out.splitlines()[-1] == "185.71.76.5:8080 untrusted"


def test_trusted_ranges(capsys) -> None:
    assert cli.run_cli(["trusted-ranges"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert lines[0] == "185.71.76.0/27"
    assert lines[-1] == "2a02:5180::/32"


def test_get_payout_prints_json(patched_client, session, capsys) -> None:
    payload = {
        "id": "po-1",
        "amount": {"value": "10.00", "currency": "RUB"},
        "status": "succeeded",
    }
    session.request.return_value = make_response(200, payload)

    assert cli.run_cli(["get-payout", "po-1"]) == 0

    assert json.loads(capsys.readouterr().out) == payload


def test_list_refunds_passes_filter(patched_client, session, capsys) -> None:
    session.request.return_value = make_response(200, {"type": "list", "items": []})

    assert cli.run_cli(["list-refunds", "--payment-id", "p-1", "--limit", "5"]) == 0

    assert session.request.call_args.kwargs["params"] == {"payment_id": "p-1", "limit": "5"}
    assert json.loads(capsys.readouterr().out) == {
        "type": "list",
        "items": [],
        "next_cursor": None,
    }


def test_api_error_exit_code(patched_client, session) -> None:
    session.request.return_value = make_response(
        404, {"type": "error", "code": "not_found", "description": "Refund not found"}
    )

    assert cli.run_cli(["get-refund", "missing"]) == 1


def test_transport_error_exit_code(patched_client, session) -> None:
    session.request.side_effect = requests.ConnectionError("connection refused")

    assert cli.run_cli(["sbp-banks"]) == 1


def test_missing_configuration(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("YOOKASSA_ACCOUNT_ID", raising=False)
    monkeypatch.delenv("YOOKASSA_SECRET_KEY", raising=False)

    assert cli.run_cli(["--env-file", str(tmp_path / "none.env"), "sbp-banks"]) == 1


def test_set_override_must_be_key_value() -> None:
    with pytest.raises(SystemExit):
        cli.run_cli(["--set", "novalue", "sbp-banks"])


def test_set_overrides_reach_client_factory(monkeypatch, config, session) -> None:
    received = {}

    def fake_create_client(**kwargs):
        received.update(kwargs)
        return YooKassaClient(config, session=session)

    monkeypatch.setattr(cli, "create_client", fake_create_client)
    session.request.return_value = make_response(200, {"type": "list", "items": []})

    assert cli.run_cli(
        ["--set", "YOOKASSA_ACCOUNT_ID=42", "--set", "YOOKASSA_TIMEOUT_SECONDS=5", "sbp-banks"]
    ) == 0

    assert received["overrides"] == {
        "YOOKASSA_ACCOUNT_ID": "42",
        "YOOKASSA_TIMEOUT_SECONDS": "5",
    }

"""Tests for the HTTP client and error decoding."""

from __future__ import annotations

import threading
import uuid

import pytest
import requests

from yookassa_payments.core.client import IDEMPOTENCY_HEADER, YooKassaClient
from yookassa_payments.core.errors import (
    ApiError,
    DecodeError,
    RequestCancelledError,
    decode_error,
)

from .conftest import make_response

ERROR_ENVELOPE = {
    "type": "error",
    "id": "ab5a11cd-13cc-4e33-af8b-75a74e18dd09",
    "code": "invalid_request",
    "description": "Idempotence key duplicated",
    "parameter": "Idempotence-Key",
}


class TestMakeRequest:
    def test_get_uses_auth_url_and_default_timeout(self, client, session) -> None:
        client.make_request("GET", "payouts/po-1")

        session.request.assert_called_once_with(
            "GET",
            "https://api.example.com/v3/payouts/po-1",
            json=None,
            params=None,
            headers={},
            auth=("123456", "test_secret"),
            timeout=15.0,
        )

    def test_timeout_override(self, client, session) -> None:
        client.make_request("GET", "refunds", timeout=2.5)

        assert session.request.call_args.kwargs["timeout"] == 2.5

    def test_query_params_are_passed_through(self, client, session) -> None:
        client.make_request("GET", "refunds", params={"payment_id": "p-1"})

        assert session.request.call_args.kwargs["params"] == {"payment_id": "p-1"}

    def test_post_without_key_gets_generated_idempotency_key(self, client, session) -> None:
        client.make_request("post", "refunds", body={"payment_id": "p-1"})

        call = session.request.call_args
        assert call.args[0] == "POST"
        assert call.kwargs["json"] == {"payment_id": "p-1"}
        generated = call.kwargs["headers"][IDEMPOTENCY_HEADER]
        assert uuid.UUID(generated).version == 4

    def test_generated_keys_differ_between_calls(self, client, session) -> None:
        client.make_request("POST", "refunds", body={})
        client.make_request("POST", "refunds", body={})

        first, second = (
            call.kwargs["headers"][IDEMPOTENCY_HEADER]
            for call in session.request.call_args_list
        )
        assert first != second

    def test_explicit_idempotency_key_is_sent(self, client, session) -> None:
        client.make_request("GET", "sbp_banks", idempotency_key="key-1")

        assert session.request.call_args.kwargs["headers"] == {IDEMPOTENCY_HEADER: "key-1"}

    def test_cancelled_request_is_never_sent(self, client, session) -> None:
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(RequestCancelledError):
            client.make_request("GET", "refunds", cancel=cancel)
        session.request.assert_not_called()

    def test_unset_cancel_event_does_not_block(self, client, session) -> None:
        client.make_request("GET", "refunds", cancel=threading.Event())

        session.request.assert_called_once()

    def test_transport_errors_propagate(self, client, session) -> None:
        session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(requests.Timeout):
            client.request_json("GET", "refunds")


class TestRequestJson:
    def test_returns_decoded_payload(self, client, session) -> None:
        session.request.return_value = make_response(200, {"type": "list", "items": []})

        assert client.request_json("GET", "refunds") == {"type": "list", "items": []}

    def test_error_envelope_becomes_api_error(self, client, session) -> None:
        session.request.return_value = make_response(400, ERROR_ENVELOPE)

        with pytest.raises(ApiError) as excinfo:
            client.request_json("POST", "refunds", body={})

        error = excinfo.value
        assert error.status_code == 400
        assert error.code == "invalid_request"
        assert error.description == "Idempotence key duplicated"
        assert error.id == ERROR_ENVELOPE["id"]
        assert error.parameter == "Idempotence-Key"
        assert error.type == "error"
        assert str(error) == "invalid_request: Idempotence key duplicated"

    def test_malformed_success_body_is_decode_error(self, client, session) -> None:
        session.request.return_value = make_response(200, text="<html>oops</html>")

        with pytest.raises(DecodeError):
            client.request_json("GET", "refunds")

    def test_non_object_success_body_is_decode_error(self, client, session) -> None:
        session.request.return_value = make_response(200, ["not", "an", "object"])

        with pytest.raises(DecodeError):
            client.request_json("GET", "refunds")

    def test_malformed_error_envelope_is_decode_error(self, client, session) -> None:
        session.request.return_value = make_response(502, text="Bad Gateway")

        with pytest.raises(DecodeError):
            client.request_json("GET", "refunds")


def test_decode_error_rejects_non_object_envelope() -> None:
    with pytest.raises(DecodeError):
        decode_error(500, "[1, 2, 3]")


def test_decode_error_tolerates_partial_envelope() -> None:
    error = decode_error(401, '{"type": "error", "code": "invalid_credentials"}')

    assert error.code == "invalid_credentials"
    assert error.description is None


def test_handlers_are_bound_to_client(client: YooKassaClient) -> None:
    assert client.payouts().client is client
    assert client.refunds().client is client


def test_context_manager_closes_session(client, session) -> None:
    with client:
        pass

    session.close.assert_called_once()

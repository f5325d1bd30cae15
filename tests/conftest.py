"""Shared fixtures: a client wired to a fake requests session."""

from __future__ import annotations

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from yookassa_payments.core.client import YooKassaClient
from yookassa_payments.core.config import ClientConfig


def make_response(
    status_code: int = 200,
    payload: Any = None,
    *,
    text: Optional[str] = None,
) -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        response.text = json.dumps(payload)
        response.json.return_value = payload
    else:
        response.text = text
        response.json.side_effect = ValueError("Expecting value")
    return response


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        account_id="123456",
        secret_key="test_secret",
        api_url="https://api.example.com/v3",
        timeout_seconds=15.0,
    )


@pytest.fixture
def session() -> MagicMock:
    fake = MagicMock(spec=requests.Session)
    fake.request.return_value = make_response(200, {})
    return fake


@pytest.fixture
def client(config: ClientConfig, session: MagicMock) -> YooKassaClient:
    return YooKassaClient(config, session=session)

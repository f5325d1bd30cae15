"""
Public, high-level helpers for building a YooKassa client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import YooKassaClient
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = [
    "create_client",
]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    account_id: Optional[str] = None,
    secret_key: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> YooKassaClient:
    """
    Construct a :class:`YooKassaClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            account_id,
            secret_key,
            api_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            account_id=account_id,
            secret_key=secret_key,
            api_url=api_url,
            timeout_seconds=timeout_seconds,
        )
    return YooKassaClient(cfg, session=session)

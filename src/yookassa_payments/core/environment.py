"""
Resolve the variables used to configure the YooKassa client.

Values are layered: the process environment (or an explicit ``base``), then a
``.env`` file that never replaces keys already present, then ``overrides``
which always win. Only ``YOOKASSA_*`` keys are kept in the result so the
resolved mapping can be logged or passed around without dragging the rest of
the environment along.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

ENV_PREFIX = "YOOKASSA_"


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logging.debug("No env file at %s", path)
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the ``YOOKASSA_*`` entries of ``path`` into ``environ``.

    Keys that are already set are left alone. Returns the entries read from
    the file.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    values = {
        key: value
        for key, value in _parse_env_file(Path(path)).items()
        if key.startswith(ENV_PREFIX)
    }
    for key, value in values.items():
        target.setdefault(key, value)
    return values


@dataclass(frozen=True)
class ClientEnvironment:
    """
    The ``YOOKASSA_*`` variables resolved from every configured source.
    """

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def redacted(self) -> Dict[str, str]:
        """Return the variables with the secret key masked, for logging."""
        return {
            key: "***" if key.endswith("SECRET_KEY") else value
            for key, value in self.variables.items()
        }


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Assemble a :class:`ClientEnvironment`.

    ``base`` defaults to :data:`os.environ`; pass ``env_file=None`` to skip
    reading a file.
    """
    source = os.environ if base is None else base
    merged: Dict[str, str] = {
        key: value for key, value in source.items() if key.startswith(ENV_PREFIX)
    }

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            if key.startswith(ENV_PREFIX):
                merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    environment = ClientEnvironment(variables=merged)
    logging.debug("Resolved client environment: %s", environment.redacted())
    return environment

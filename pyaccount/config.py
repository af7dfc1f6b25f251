"""Settings for the create-account command, read from the environment.

A ``.env`` file in the working directory is loaded first. Keys are given as
0x-prefixed hex.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .keys import SignatureScheme
from .types import as_bytes, as_chain_id

DEFAULT_NODE_URL = "https://fullnode.devnet.aptoslabs.com/v1"
DEFAULT_FAUCET_URL = "https://faucet.devnet.aptoslabs.com"
DEFAULT_LOG_LEVEL = "WARNING"

ENV_PREFIX = "PYACCOUNT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    node_url: str = DEFAULT_NODE_URL
    faucet_url: str = DEFAULT_FAUCET_URL
    chain_id: Optional[int] = None
    public_key: Optional[bytes] = None
    private_key: Optional[bytes] = None
    key_scheme: SignatureScheme = SignatureScheme.ED25519
    use_faucet: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        private_key = None if self.private_key is None else "<redacted>"
        return (
            f"Settings(node_url={self.node_url!r}, faucet_url={self.faucet_url!r}, "
            f"chain_id={self.chain_id!r}, key_scheme={self.key_scheme.name}, "
            f"use_faucet={self.use_faucet!r}, private_key={private_key})"
        )


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(ENV_PREFIX + name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_bool(name: str, value: Optional[str]) -> bool:
    normalized = (value or "").lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {value!r}")


def _parse_key(name: str, value: Optional[str]) -> Optional[bytes]:
    if value is None:
        return None
    try:
        return as_bytes(value)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name} is not valid hex") from exc


def _parse_chain_id(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return as_chain_id(int(value))
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}CHAIN_ID is invalid: {exc}") from exc


def load_settings(
    env: Optional[Mapping[str, str]] = None, dotenv: bool = True
) -> Settings:
    """
    Build Settings from ``env`` (``os.environ`` by default).

    Raises:
        ConfigurationError: If a value is present but malformed
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    scheme_name = _get(env, "KEY_SCHEME")
    try:
        key_scheme = (
            SignatureScheme.ED25519
            if scheme_name is None
            else SignatureScheme.from_name(scheme_name)
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    log_level = (_get(env, "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"{ENV_PREFIX}LOG_LEVEL is not a log level: {log_level!r}")

    return Settings(
        node_url=_get(env, "NODE_URL") or DEFAULT_NODE_URL,
        faucet_url=_get(env, "FAUCET_URL") or DEFAULT_FAUCET_URL,
        chain_id=_parse_chain_id(_get(env, "CHAIN_ID")),
        public_key=_parse_key("PUBLIC_KEY", _get(env, "PUBLIC_KEY")),
        private_key=_parse_key("PRIVATE_KEY", _get(env, "PRIVATE_KEY")),
        key_scheme=key_scheme,
        use_faucet=_parse_bool("USE_FAUCET", _get(env, "USE_FAUCET")),
        log_level=log_level,
    )

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable

from dotenv import load_dotenv

ENV_PREFIX = "CHURCH_ADMIN_"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 10.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    default_page_size: int = 10
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


@dataclass(frozen=True)
class _Setting:
    field: str
    default: str
    parse: Callable[[str], Any]
    accepts: Callable[[Any], bool]
    expected: str

    @property
    def variable(self) -> str:
        return f"{ENV_PREFIX}{self.field.upper()}"


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


_SETTINGS = (
    _Setting("timeout_seconds", "10", float, lambda value: value > 0, "> 0"),
    _Setting("retries", "2", int, lambda value: value >= 0, ">= 0"),
    _Setting("retry_backoff_seconds", "0.3", float, lambda value: value >= 0, ">= 0"),
    _Setting("default_page_size", "10", int, lambda value: value > 0, "> 0"),
    _Setting("verify_ssl", "true", _parse_bool, lambda value: True, "a boolean"),
)


def _read(setting: _Setting) -> Any:
    raw = (os.getenv(setting.variable) or "").strip() or setting.default
    try:
        value = setting.parse(raw)
    except ValueError as exc:
        kind = "an integer" if setting.parse is int else "a number"
        raise ConfigError(f"Invalid {setting.variable}: expected {kind}, got {raw!r}") from exc
    if not setting.accepts(value):
        raise ConfigError(f"Invalid {setting.variable}: expected {setting.expected}, got {value}")
    return value


def _base_url(env_name: str) -> str:
    for variable in (f"{ENV_PREFIX}API_BASE_URL_{env_name.upper()}", f"{ENV_PREFIX}API_BASE_URL"):
        value = (os.getenv(variable) or "").strip()
        if value:
            return value.rstrip("/")
    raise ConfigError(f"Missing required config values: {ENV_PREFIX}API_BASE_URL")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from ``CHURCH_ADMIN_*`` variables.

    Values from ``env_file`` (or a ``.env`` found by python-dotenv) never
    override variables already present in the environment. A base URL
    suffixed with the active environment name, e.g.
    ``CHURCH_ADMIN_API_BASE_URL_STAGING``, wins over the plain one.
    """
    load_dotenv(env_file)

    env_name = (os.getenv(f"{ENV_PREFIX}ENV") or "dev").strip()
    values = {setting.field: _read(setting) for setting in _SETTINGS}
    return ClientConfig(env_name=env_name, api_base_url=_base_url(env_name), **values)

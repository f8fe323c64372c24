"""
Configuration objects and helpers for the Razorpay client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "Credentials",
    "DEFAULT_API_VERSION",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "load_client_config",
]

DEFAULT_BASE_URL = "https://api.razorpay.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_USER_AGENT = "razorpay-payments-python/0.1.0"

_PARAMETER_TO_ENV_KEY = {
    "key_id": "RAZORPAY_KEY_ID",
    "key_secret": "RAZORPAY_KEY_SECRET",
    "base_url": "RAZORPAY_BASE_URL",
    "api_version": "RAZORPAY_API_VERSION",
    "user_agent": "RAZORPAY_USER_AGENT",
    "timeout_seconds": "RAZORPAY_TIMEOUT_SECONDS",
    "webhook_secret": "RAZORPAY_WEBHOOK_SECRET",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Credentials:
    """API key pair sent as HTTP basic auth on every request."""

    key_id: str
    key_secret: str = field(repr=False)

    def as_auth(self) -> tuple[str, str]:
        return (self.key_id, self.key_secret)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.
    """

    key_id: Optional[str] = None
    key_secret: Optional[str] = field(default=None, repr=False)
    base_url: Optional[str] = None
    api_version: Optional[str] = None
    user_agent: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None
    webhook_secret: Optional[str] = field(default=None, repr=False)

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None:
        raise ConfigError(f"{key} must be provided")
    value = raw.strip()
    if not value:
        raise ConfigError(f"{key} must not be empty")
    return value


def _normalize_base_url(raw_url: str) -> str:
    url = raw_url.strip().rstrip("/")
    if not url.startswith(("https://", "http://")):
        raise ConfigError(f"RAZORPAY_BASE_URL must be an http(s) URL, got '{raw_url}'")
    return url


def _normalize_version(raw_version: str) -> str:
    version = raw_version.strip().strip("/")
    if not version:
        raise ConfigError("RAZORPAY_API_VERSION must not be empty")
    return version


def _parse_timeout(raw_timeout: Optional[str]) -> Optional[float]:
    if raw_timeout is None or not raw_timeout.strip():
        return None
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(
            f"RAZORPAY_TIMEOUT_SECONDS must be a number, got '{raw_timeout}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("RAZORPAY_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    credentials: Credentials
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: Optional[float] = None
    webhook_secret: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        credentials = Credentials(
            key_id=_require(values, "RAZORPAY_KEY_ID"),
            key_secret=_require(values, "RAZORPAY_KEY_SECRET"),
        )
        base_url = _normalize_base_url(values.get("RAZORPAY_BASE_URL", DEFAULT_BASE_URL))
        api_version = _normalize_version(
            values.get("RAZORPAY_API_VERSION", DEFAULT_API_VERSION)
        )
        user_agent = values.get("RAZORPAY_USER_AGENT", DEFAULT_USER_AGENT).strip()
        if not user_agent:
            raise ConfigError("RAZORPAY_USER_AGENT must not be empty")

        webhook_secret = values.get("RAZORPAY_WEBHOOK_SECRET") or None

        return cls(
            credentials=credentials,
            base_url=base_url,
            api_version=api_version,
            user_agent=user_agent,
            timeout_seconds=_parse_timeout(values.get("RAZORPAY_TIMEOUT_SECONDS")),
            webhook_secret=webhook_secret,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        webhook_secret: Optional[str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "key_id": key_id,
                "key_secret": key_secret,
                "base_url": base_url,
                "api_version": api_version,
                "user_agent": user_agent,
                "timeout_seconds": timeout_seconds,
                "webhook_secret": webhook_secret,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    key_id: Optional[str] = None,
    key_secret: Optional[str] = None,
    base_url: Optional[str] = None,
    api_version: Optional[str] = None,
    user_agent: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    webhook_secret: Optional[str] = None,
) -> ClientConfig:
    """
    Shortcut for :meth:`ClientConfig.from_env`. Keyword arguments take
    precedence over ``overrides``, which take precedence over the environment.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        key_id=key_id,
        key_secret=key_secret,
        base_url=base_url,
        api_version=api_version,
        user_agent=user_agent,
        timeout_seconds=timeout_seconds,
        webhook_secret=webhook_secret,
    )

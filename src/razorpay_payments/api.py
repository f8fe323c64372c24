"""
Public, high-level helpers for building a :class:`RazorpayClient`.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import requests

from .client import RazorpayClient
from .core.config import ClientConfig, ClientParameters, load_client_config
from .core.environment import build_environment
from .core.errors import ConfigError
from .resources.webhooks import WebhookEvent, construct_event

__all__ = ["construct_webhook_event", "create_client"]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
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
) -> RazorpayClient:
    """
    Construct a :class:`RazorpayClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from the environment, a ``.env`` file and keyword
    arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            key_id,
            key_secret,
            base_url,
            api_version,
            user_agent,
            timeout_seconds,
            webhook_secret,
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
            key_id=key_id,
            key_secret=key_secret,
            base_url=base_url,
            api_version=api_version,
            user_agent=user_agent,
            timeout_seconds=timeout_seconds,
            webhook_secret=webhook_secret,
        )
    return RazorpayClient(cfg, session=session)


def construct_webhook_event(
    body: Union[bytes, str],
    signature: str,
    *,
    secret: Optional[str] = None,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
) -> WebhookEvent:
    """
    Verify and parse a webhook delivery.

    Without an explicit ``secret`` the value of ``RAZORPAY_WEBHOOK_SECRET`` is
    read from the environment or ``.env`` file. API keys are not needed.
    """
    if secret is None:
        environment = build_environment(env_file=env_file, base=base)
        secret = environment.get("RAZORPAY_WEBHOOK_SECRET")
        if not secret:
            raise ConfigError("RAZORPAY_WEBHOOK_SECRET is required to verify webhooks")
    return construct_event(body, signature, secret)

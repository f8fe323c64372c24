"""
Core primitives shared by every resource: configuration, transport,
envelope decoding, identifiers and webhook signatures.
"""

from .client import ApiClient, RequestDescriptor
from .config import (
    ClientConfig,
    ClientParameters,
    Credentials,
    load_client_config,
)
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ApiError,
    ConfigError,
    InvalidIdError,
    RazorpayError,
    SerializationError,
    TransportError,
    WebhookError,
    WebhookParseError,
    WebhookSignatureError,
)
from .payloads import encode_body, encode_query
from .signature import sign, verify_signature

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "Credentials",
    "InvalidIdError",
    "RazorpayError",
    "RequestDescriptor",
    "SerializationError",
    "TransportError",
    "WebhookError",
    "WebhookParseError",
    "WebhookSignatureError",
    "build_environment",
    "encode_body",
    "encode_query",
    "load_client_config",
    "load_env_file",
    "sign",
    "verify_signature",
]

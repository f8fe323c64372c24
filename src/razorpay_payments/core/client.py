"""
HTTP transport for the Razorpay API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, TypeVar

import requests

from .config import ClientConfig
from .envelope import Decoder, decode_envelope, extract_api_error
from .errors import ApiError, SerializationError, TransportError
from .payloads import Payload, encode_body, encode_query

__all__ = ["ApiClient", "RequestDescriptor"]

T = TypeVar("T")


@dataclass(frozen=True)
class RequestDescriptor:
    """
    One outbound call: the resource ``path`` (starting with ``/``), an
    optional API ``version`` overriding the client default and an optional
    ``payload``.
    """

    path: str
    version: Optional[str] = None
    payload: Optional[Payload] = None


def _api_error_from_failure(response: requests.Response) -> Optional[ApiError]:
    try:
        return extract_api_error(response.json())
    except (ValueError, SerializationError):
        return None


class ApiClient:
    """
    Sends :class:`RequestDescriptor` objects and decodes the envelope.

    Holds only the immutable configuration and a pooled
    :class:`requests.Session`; each call performs exactly one request and
    never retries.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def entity_url(self, request: RequestDescriptor) -> str:
        version = request.version or self.config.api_version
        return f"{self.config.base_url}/{version}{request.path}"

    def get(self, request: RequestDescriptor, decoder: Decoder[T]) -> T:
        return self._send("GET", request, decoder, params=encode_query(request.payload))

    def delete(self, request: RequestDescriptor, decoder: Decoder[T]) -> T:
        return self._send(
            "DELETE", request, decoder, params=encode_query(request.payload)
        )

    def post(self, request: RequestDescriptor, decoder: Decoder[T]) -> T:
        return self._send("POST", request, decoder, json=encode_body(request.payload))

    def put(self, request: RequestDescriptor, decoder: Decoder[T]) -> T:
        return self._send("PUT", request, decoder, json=encode_body(request.payload))

    def patch(self, request: RequestDescriptor, decoder: Decoder[T]) -> T:
        return self._send("PATCH", request, decoder, json=encode_body(request.payload))

    def post_form(self, request: RequestDescriptor, decoder: Decoder[T]) -> T:
        return self._send("POST", request, decoder, data=encode_query(request.payload))

    def _send(
        self,
        method: str,
        request: RequestDescriptor,
        decoder: Decoder[T],
        *,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        data: Optional[List[Tuple[str, str]]] = None,
    ) -> T:
        url = self.entity_url(request)
        logging.debug("Sending %s request to %s", method, url)

        try:
            response = self.session.request(
                method,
                url,
                params=params or None,
                json=json,
                data=data or None,
                auth=self.config.credentials.as_auth(),
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"{method} {url} failed: {exc}",
                cause=exc,
            ) from exc

        if not 200 <= response.status_code < 300:
            logging.debug(
                "%s %s responded with %s", method, url, response.status_code
            )
            message = f"Razorpay responded with {response.status_code} for {method} {url}"
            cause = requests.HTTPError(message, response=response)
            raise TransportError(
                message,
                cause=cause,
                status_code=response.status_code,
                body=response.text,
                api_error=_api_error_from_failure(response),
            ) from cause

        try:
            body = response.json()
        except ValueError as exc:
            raise SerializationError(
                f"Failed to parse JSON from {url}: {response.text}"
            ) from exc

        return decode_envelope(body, decoder)

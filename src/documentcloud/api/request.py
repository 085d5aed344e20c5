"""
Request execution and response normalization.

Every API operation is reduced to a RequestDescriptor and handed to
ApiRequester.execute, which performs exactly one HTTP round trip and returns
a NormalizedResponse. Non-2xx statuses are returned, not raised; only
transport failures become exceptions.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from ..config import DEFAULT_TIMEOUT
from ..errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class PayloadKind(str, Enum):
    """Where a descriptor's payload goes on the wire."""

    NONE = "none"
    QUERY = "query"  # query string
    JSON = "json"  # JSON request body
    FORM = "form"  # application/x-www-form-urlencoded
    MULTIPART = "multipart"  # multipart/form-data with file parts


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully specified HTTP request, built fresh for each call."""

    uri: str
    method: HttpMethod
    payload_kind: PayloadKind = PayloadKind.NONE
    payload: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class NormalizedResponse:
    """Status code plus parsed body; response is None when the body was empty."""

    status_code: int
    response: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status_code": self.status_code}
        if self.response is not None:
            result["response"] = self.response
        return result

    @classmethod
    def from_response(cls, response: requests.Response) -> "NormalizedResponse":
        """Create from a requests Response, parsing JSON when the body allows it."""
        if not response.content:
            return cls(status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = response.text

        return cls(status_code=response.status_code, response=body)


def redact_uri(uri: str) -> str:
    """Mask the password in a URI's user-info for logging."""
    parts = urlsplit(uri)
    if parts.password is None:
        return uri
    userinfo, _, host = parts.netloc.rpartition("@")
    username = userinfo.split(":", 1)[0]
    return urlunsplit((parts.scheme, f"{username}:***@{host}", parts.path, parts.query, parts.fragment))


def _encode_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def encode_fields(payload: Optional[Mapping[str, Any]], prefix: str = "") -> list[tuple[str, Any]]:
    """Flatten a payload into (key, value) pairs for query strings and forms.

    - None values are dropped
    - booleans become "true"/"false"
    - nested mappings become key[subkey] fields
    - lists and tuples become repeated key[] fields
    """
    fields: list[tuple[str, Any]] = []
    if not payload:
        return fields

    for key, value in payload.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            fields.extend(encode_fields(value, prefix=name))
        elif isinstance(value, (list, tuple)):
            fields.extend((f"{name}[]", _encode_value(v)) for v in value if v is not None)
        else:
            fields.append((name, _encode_value(value)))

    return fields


def _is_binary(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray)) or hasattr(value, "read")


def _is_file_part(value: Any) -> bool:
    if isinstance(value, tuple):
        return len(value) >= 2 and _is_binary(value[1])
    return _is_binary(value)


def split_multipart(payload: Mapping[str, Any]) -> tuple[list[tuple[str, Any]], dict[str, Any]]:
    """Separate binary parts from plain form fields.

    Bytes, readable streams and (filename, content) tuples become file parts;
    everything else is encoded like a regular form.
    """
    files = {key: value for key, value in payload.items() if _is_file_part(value)}
    fields = {key: value for key, value in payload.items() if key not in files}
    return encode_fields(fields), files


class ApiRequester:
    """
    Executes RequestDescriptors against the DocumentCloud API.

    One requests.Session is kept per requester. There is no retry policy:
    a failed attempt is reported to the caller as is.
    A caller-supplied session is used as is; headers are set per request.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()

    def _build_kwargs(self, descriptor: RequestDescriptor) -> dict[str, Any]:
        kind = descriptor.payload_kind
        payload = descriptor.payload

        if kind is PayloadKind.NONE:
            return {}
        if kind is PayloadKind.QUERY:
            return {"params": encode_fields(payload)}
        if kind is PayloadKind.JSON:
            return {"json": dict(payload or {})}
        if kind is PayloadKind.FORM:
            return {"data": encode_fields(payload)}
        if kind is PayloadKind.MULTIPART:
            data, files = split_multipart(payload or {})
            return {"data": data, "files": files}
        raise ValueError(f"Unsupported payload kind: {kind}")

    def execute(self, descriptor: RequestDescriptor) -> NormalizedResponse:
        """Issue one HTTP request and normalize the response.

        Raises:
            TransportError: The request could not be completed
        """
        kwargs = self._build_kwargs(descriptor)
        safe_uri = redact_uri(descriptor.uri)

        try:
            response = self.session.request(
                method=descriptor.method.value,
                url=descriptor.uri,
                timeout=self.timeout,
                headers=DEFAULT_HEADERS,
                **kwargs,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request to {safe_uri} timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Failed to connect to DocumentCloud at {safe_uri}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {type(e).__name__}") from e

        logger.debug("%s %s -> %s", descriptor.method.value, safe_uri, response.status_code)

        return NormalizedResponse.from_response(response)

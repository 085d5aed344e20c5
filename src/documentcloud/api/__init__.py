"""
DocumentCloud API client.

Provides:
- Document search, upload, get, update, delete and entities
- Project create, list, update and delete
- One request per call, responses normalized to (status_code, response)

Non-2xx replies are returned as normal responses; only missing credentials
and transport failures raise.
"""

from ..errors import DocumentCloudError, TransportError, Unauthenticated
from .client import DocumentCloudClient
from .documents import (
    DocumentClient,
    InMemoryBytes,
    LocalPath,
    RemoteUrl,
    UploadSource,
    resolve_upload_source,
)
from .projects import ProjectClient
from .request import (
    ApiRequester,
    HttpMethod,
    NormalizedResponse,
    PayloadKind,
    RequestDescriptor,
)

__all__ = [
    "ApiRequester",
    "DocumentClient",
    "DocumentCloudClient",
    "DocumentCloudError",
    "HttpMethod",
    "InMemoryBytes",
    "LocalPath",
    "NormalizedResponse",
    "PayloadKind",
    "ProjectClient",
    "RemoteUrl",
    "RequestDescriptor",
    "TransportError",
    "Unauthenticated",
    "UploadSource",
    "resolve_upload_source",
]

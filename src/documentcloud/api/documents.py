"""
Document endpoints: search, upload, get, update, delete, entities.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union
from urllib.parse import urlsplit

from .request import HttpMethod, NormalizedResponse, PayloadKind, RequestDescriptor

if TYPE_CHECKING:
    from ..config import ClientConfig
    from .request import ApiRequester

logger = logging.getLogger(__name__)

# Schemes accepted as "the service fetches this file itself"
URL_SCHEMES = ("http", "https", "ftp")

DEFAULT_UPLOAD_FILENAME = "document"


@dataclass(frozen=True)
class LocalPath:
    """A file on disk, streamed to the service as a multipart part."""

    path: Path


@dataclass(frozen=True)
class InMemoryBytes:
    """Raw document bytes, sent as a multipart part."""

    data: bytes
    filename: str = DEFAULT_UPLOAD_FILENAME


@dataclass(frozen=True)
class RemoteUrl:
    """A public URL the service downloads on its own; sent as a plain form."""

    url: str


UploadSource = Union[LocalPath, InMemoryBytes, RemoteUrl]


def is_url(value: str) -> bool:
    """True for fully-qualified URLs (scheme and host required)."""
    parts = urlsplit(value)
    return parts.scheme.lower() in URL_SCHEMES and bool(parts.netloc)


def resolve_upload_source(file: Any) -> UploadSource:
    """Classify an upload argument once, at the call boundary.

    Accepts an UploadSource, bytes/bytearray, an os.PathLike, or a string
    that is either a URL (scheme present) or a filesystem path.
    """
    if isinstance(file, (LocalPath, InMemoryBytes, RemoteUrl)):
        return file
    if isinstance(file, (bytes, bytearray)):
        return InMemoryBytes(bytes(file))
    if isinstance(file, os.PathLike):
        return LocalPath(Path(file))
    if isinstance(file, str):
        if is_url(file):
            return RemoteUrl(file)
        return LocalPath(Path(file))
    raise TypeError(
        f"file must be a path, bytes, URL or UploadSource, got {type(file).__name__}"
    )


def _merge(options: Mapping[str, Any] | None, fields: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(options or {})
    merged.update(fields)
    return merged


class DocumentClient:
    """
    Document operations.

    Not created directly; available as DocumentCloudClient.documents.
    Methods that change state (upload, update, delete) require credentials
    and raise Unauthenticated before any request is sent.
    """

    def __init__(self, config: "ClientConfig", requester: "ApiRequester"):
        self.config = config
        self.requester = requester

    def search(
        self, query: str, options: Mapping[str, Any] | None = None, **params: Any
    ) -> NormalizedResponse:
        """
        Search for documents.

        Args:
            query: The search query
            options: Additional search parameters, also accepted as keywords:
                page (default 1), per_page (default 10, max 1000),
                sections, annotations, data (booleans), mentions (max 10),
                order (created_at, score, title, page_count, source)
        """
        payload = {"q": query}
        payload.update(_merge(options, params))

        return self.requester.execute(
            RequestDescriptor(
                uri=self.config.build_uri("search.json"),
                method=HttpMethod.GET,
                payload_kind=PayloadKind.QUERY,
                payload=payload,
            )
        )

    def upload(
        self,
        file: Any,
        title: str,
        options: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> NormalizedResponse:
        """
        Upload a document.

        Args:
            file: Path to a file, raw bytes, a public URL, or an UploadSource
            title: Title of the uploaded document
            options: Extra upload fields, also accepted as keywords:
                source, description, language (OCR language, default "eng"),
                related_article, published_url,
                access ("private", "public" or "organization"),
                project (numeric project id), data (dict of key/value pairs),
                secure (skip entity extraction), force_ocr
        """
        self.config.require_credentials()

        source = resolve_upload_source(file)
        uri = self.config.build_uri("upload.json")
        extra = _merge(options, fields)

        if isinstance(source, RemoteUrl):
            payload = {"file": source.url, "title": title, **extra}
            return self.requester.execute(
                RequestDescriptor(uri, HttpMethod.POST, PayloadKind.FORM, payload)
            )

        if isinstance(source, InMemoryBytes):
            payload = {"file": (source.filename, source.data), "title": title, **extra}
            return self.requester.execute(
                RequestDescriptor(uri, HttpMethod.POST, PayloadKind.MULTIPART, payload)
            )

        logger.debug("Uploading %s as '%s'", source.path, title)
        with open(source.path, "rb") as f:
            payload = {"file": (source.path.name, f), "title": title, **extra}
            return self.requester.execute(
                RequestDescriptor(uri, HttpMethod.POST, PayloadKind.MULTIPART, payload)
            )

    def get(self, doc_id: str) -> NormalizedResponse:
        """Get a document's metadata."""
        return self.requester.execute(
            RequestDescriptor(self.config.build_uri(f"documents/{doc_id}.json"), HttpMethod.GET)
        )

    def update(
        self, doc_id: str, options: Mapping[str, Any] | None = None, **fields: Any
    ) -> NormalizedResponse:
        """
        Update a document.

        Only the given values change: title, source, description,
        related_article, published_url, access, data.
        """
        self.config.require_credentials()

        return self.requester.execute(
            RequestDescriptor(
                uri=self.config.build_uri(f"documents/{doc_id}.json"),
                method=HttpMethod.PUT,
                payload_kind=PayloadKind.JSON,
                payload=_merge(options, fields),
            )
        )

    def delete(self, doc_id: str) -> NormalizedResponse:
        """Delete a document."""
        self.config.require_credentials()

        return self.requester.execute(
            RequestDescriptor(self.config.build_uri(f"documents/{doc_id}.json"), HttpMethod.DELETE)
        )

    def entities(self, doc_id: str) -> NormalizedResponse:
        """List the entities extracted from a document."""
        return self.requester.execute(
            RequestDescriptor(
                self.config.build_uri(f"documents/{doc_id}/entities.json"), HttpMethod.GET
            )
        )

"""
DocumentCloud API client.

A thin, stateless wrapper around the DocumentCloud REST API: search, upload,
fetch, update and delete documents, and manage projects.
"""

from .api import (
    DocumentCloudClient,
    DocumentCloudError,
    NormalizedResponse,
    TransportError,
    Unauthenticated,
)
from .config import ClientConfig

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "DocumentCloudClient",
    "DocumentCloudError",
    "NormalizedResponse",
    "TransportError",
    "Unauthenticated",
]

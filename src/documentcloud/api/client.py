"""
DocumentCloud client root.
"""

import logging
from typing import Optional

import requests

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT, ClientConfig
from .documents import DocumentClient
from .projects import ProjectClient
from .request import ApiRequester

logger = logging.getLogger(__name__)


class DocumentCloudClient:
    """
    Client for the DocumentCloud API.

    A username and password are optional, but upload, document update/delete
    and every project method are unavailable without them. The base API URL
    can be overridden.

    Example:
        client = DocumentCloudClient("email@example.com", "example_pw")
        result = client.documents.get("1659580-economic-analysis")
        print(result.status_code, result.response)
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initialize DocumentCloud client.

        Args:
            username: DocumentCloud account email
            password: DocumentCloud account password
            api_url: Override for the base API URL (must end with '/')
            timeout: Request timeout in seconds, None to wait indefinitely
            session: Pre-configured requests session to send requests with
            config: Ready-made ClientConfig; when given, the other settings
                arguments are ignored and this instance is shared as is
        """
        if config is None:
            config = ClientConfig(
                username=username or None,
                password=password or None,
                api_url=api_url or DEFAULT_API_URL,
                timeout=timeout,
            )
        self.config = config
        self.requester = ApiRequester(session=session, timeout=config.timeout)
        self.documents = DocumentClient(config, self.requester)
        self.projects = ProjectClient(config, self.requester)
        logger.debug(
            "DocumentCloud client for %s (%s)",
            config.api_url,
            "authenticated" if config.has_credentials else "anonymous",
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, session: Optional[requests.Session] = None
    ) -> "DocumentCloudClient":
        """Create a client from a ClientConfig, e.g. one returned by load_config."""
        return cls(session=session, config=config)

    def build_uri(self, suffix: str) -> str:
        """Build the URI for an API path suffix, embedding credentials if set."""
        return self.config.build_uri(suffix)

    def requires_credentials(self) -> None:
        """Raise Unauthenticated unless credentials are configured."""
        self.config.require_credentials()

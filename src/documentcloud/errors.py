"""
Exceptions raised by the DocumentCloud client.
"""


class DocumentCloudError(Exception):
    """Base exception for DocumentCloud client errors."""

    pass


class Unauthenticated(DocumentCloudError):
    """Operation requires a username and password, and none are configured."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "This API method requires a username and password when "
            "interacting with the DocumentCloud client."
        )


class TransportError(DocumentCloudError):
    """The HTTP request could not be completed (DNS, connection, timeout)."""

    pass

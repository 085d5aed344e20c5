"""
Project endpoints: create, list, update, delete.

All project operations require credentials.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .request import HttpMethod, NormalizedResponse, PayloadKind, RequestDescriptor

if TYPE_CHECKING:
    from ..config import ClientConfig
    from .request import ApiRequester


class ProjectClient:
    """
    Project operations.

    Not created directly; available as DocumentCloudClient.projects.
    """

    def __init__(self, config: "ClientConfig", requester: "ApiRequester"):
        self.config = config
        self.requester = requester

    def create(
        self, title: str, options: Mapping[str, Any] | None = None, **fields: Any
    ) -> NormalizedResponse:
        """
        Create a project.

        Args:
            title: Title of the project
            options: Extra fields, also accepted as keywords:
                description, document_ids (list of document identifiers)
        """
        self.config.require_credentials()

        body = {"title": title}
        body.update(options or {})
        body.update(fields)

        return self.requester.execute(
            RequestDescriptor(
                uri=self.config.build_uri("projects.json"),
                method=HttpMethod.POST,
                payload_kind=PayloadKind.JSON,
                payload=body,
            )
        )

    def list(self) -> NormalizedResponse:
        """List all projects of the account."""
        self.config.require_credentials()

        return self.requester.execute(
            RequestDescriptor(self.config.build_uri("projects.json"), HttpMethod.GET)
        )

    def update(
        self, project_id: int, options: Mapping[str, Any] | None = None, **fields: Any
    ) -> NormalizedResponse:
        """
        Replace a project's data.

        This *replaces* every field, whether provided or not: leaving out
        document_ids empties the project, leaving out description clears it.

        Args:
            project_id: The project identifier
            options: title, description, document_ids (also accepted as keywords)
        """
        self.config.require_credentials()

        body = dict(options or {})
        body.update(fields)

        return self.requester.execute(
            RequestDescriptor(
                uri=self.config.build_uri(f"projects/{project_id}.json"),
                method=HttpMethod.PUT,
                payload_kind=PayloadKind.JSON,
                payload=body,
            )
        )

    def delete(self, project_id: int) -> NormalizedResponse:
        """Delete a project. Its documents are left untouched."""
        self.config.require_credentials()

        return self.requester.execute(
            RequestDescriptor(self.config.build_uri(f"projects/{project_id}.json"), HttpMethod.DELETE)
        )

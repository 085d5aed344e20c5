"""
CLI main entry point.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from ..api import DocumentCloudClient, NormalizedResponse
from ..config import ClientConfig, create_default_config, load_config
from ..errors import DocumentCloudError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_assignments(pairs: list[str] | None) -> dict[str, Any]:
    """Parse KEY=VALUE pairs; values are read as YAML scalars (numbers, booleans)."""
    result: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        try:
            value = yaml.safe_load(raw) if raw else ""
        except yaml.YAMLError:
            value = raw
        if not isinstance(value, (str, int, float, bool)):
            value = raw
        result[key] = value
    return result


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="documentcloud",
        description="Search, upload and manage documents and projects on DocumentCloud",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # search command
    search_parser = subparsers.add_parser("search", help="Search for documents")
    search_parser.add_argument("query", type=str, help="Search query")
    search_parser.add_argument("--page", type=int, help="Result page (default: 1)")
    search_parser.add_argument(
        "--per-page", type=int, help="Documents per page (default: 10, max: 1000)"
    )
    search_parser.add_argument(
        "--order",
        choices=["score", "created_at", "title", "page_count", "source"],
        help="Sort order (default: created_at)",
    )
    search_parser.add_argument("--mentions", type=int, help="Highlighted mentions (max: 10)")
    search_parser.add_argument(
        "--sections", action="store_true", default=None, help="Include document sections"
    )
    search_parser.add_argument(
        "--annotations", action="store_true", default=None, help="Include annotations"
    )
    search_parser.add_argument(
        "--data", action="store_true", default=None, help="Include key/value data"
    )

    # get / entities commands
    get_parser = subparsers.add_parser("get", help="Show a document's metadata")
    get_parser.add_argument("doc_id", type=str, help="Document identifier")

    entities_parser = subparsers.add_parser("entities", help="List a document's entities")
    entities_parser.add_argument("doc_id", type=str, help="Document identifier")

    # upload command
    upload_parser = subparsers.add_parser("upload", help="Upload a file or public URL")
    upload_parser.add_argument("file", type=str, help="Path to a file, or a public URL")
    upload_parser.add_argument("title", type=str, help="Document title")
    upload_parser.add_argument("--source", type=str, help="Source of the document")
    upload_parser.add_argument("--description", type=str, help="Description of the document")
    upload_parser.add_argument("--language", type=str, help="OCR language (default: eng)")
    upload_parser.add_argument("--related-article", type=str, help="URL of a related article")
    upload_parser.add_argument(
        "--published-url", type=str, help="URL of the page embedding the document"
    )
    upload_parser.add_argument(
        "--access",
        choices=["private", "public", "organization"],
        help="Access level (default: private)",
    )
    upload_parser.add_argument("--project", type=int, help="Project ID to add the document to")
    upload_parser.add_argument(
        "--data",
        action="append",
        metavar="KEY=VALUE",
        help="Key/value data to attach (repeatable)",
    )
    upload_parser.add_argument(
        "--secure", action="store_true", default=None, help="Skip entity extraction"
    )
    upload_parser.add_argument(
        "--force-ocr", action="store_true", default=None, help="OCR even if text is present"
    )

    # update command
    update_parser = subparsers.add_parser("update", help="Update a document")
    update_parser.add_argument("doc_id", type=str, help="Document identifier")
    update_parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        required=True,
        metavar="KEY=VALUE",
        help="Field to update (repeatable)",
    )

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a document")
    delete_parser.add_argument("doc_id", type=str, help="Document identifier")

    # projects command
    projects_parser = subparsers.add_parser("projects", help="Manage projects")
    project_commands = projects_parser.add_subparsers(
        dest="project_command", help="Project command to run"
    )

    project_commands.add_parser("list", help="List projects")

    create_parser = project_commands.add_parser("create", help="Create a project")
    create_parser.add_argument("title", type=str, help="Project title")
    create_parser.add_argument("--description", type=str, help="Project description")
    create_parser.add_argument(
        "--document-id",
        dest="document_ids",
        action="append",
        help="Document to include (repeatable)",
    )

    project_update_parser = project_commands.add_parser(
        "update", help="Replace a project's title, description and documents"
    )
    project_update_parser.add_argument("project_id", type=int, help="Project ID")
    project_update_parser.add_argument("--title", type=str, help="Project title")
    project_update_parser.add_argument("--description", type=str, help="Project description")
    project_update_parser.add_argument(
        "--document-id",
        dest="document_ids",
        action="append",
        help="Document to include (repeatable, omitted documents are removed)",
    )

    project_delete_parser = project_commands.add_parser("delete", help="Delete a project")
    project_delete_parser.add_argument("project_id", type=int, help="Project ID")

    # init-config command
    subparsers.add_parser("init-config", help="Write a template config file")

    return parser


def _drop_none(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def print_result(result: NormalizedResponse) -> int:
    """Print a normalized response as JSON; exit code 0 only for 2xx."""
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.ok else 1


def run_command(client: DocumentCloudClient, parsed: argparse.Namespace) -> NormalizedResponse:
    """Dispatch a parsed command to the matching client operation."""
    command = parsed.command

    if command == "search":
        return client.documents.search(
            parsed.query,
            _drop_none(
                page=parsed.page,
                per_page=parsed.per_page,
                order=parsed.order,
                mentions=parsed.mentions,
                sections=parsed.sections,
                annotations=parsed.annotations,
                data=parsed.data,
            ),
        )
    elif command == "get":
        return client.documents.get(parsed.doc_id)
    elif command == "entities":
        return client.documents.entities(parsed.doc_id)
    elif command == "upload":
        return client.documents.upload(
            parsed.file,
            parsed.title,
            _drop_none(
                source=parsed.source,
                description=parsed.description,
                language=parsed.language,
                related_article=parsed.related_article,
                published_url=parsed.published_url,
                access=parsed.access,
                project=parsed.project,
                data=parse_assignments(parsed.data) or None,
                secure=parsed.secure,
                force_ocr=parsed.force_ocr,
            ),
        )
    elif command == "update":
        return client.documents.update(parsed.doc_id, parse_assignments(parsed.assignments))
    elif command == "delete":
        return client.documents.delete(parsed.doc_id)
    elif command == "projects":
        project_command = parsed.project_command
        if project_command == "list":
            return client.projects.list()
        elif project_command == "create":
            return client.projects.create(
                parsed.title,
                _drop_none(description=parsed.description, document_ids=parsed.document_ids),
            )
        elif project_command == "update":
            return client.projects.update(
                parsed.project_id,
                _drop_none(
                    title=parsed.title,
                    description=parsed.description,
                    document_ids=parsed.document_ids,
                ),
            )
        elif project_command == "delete":
            return client.projects.delete(parsed.project_id)

    raise ValueError(f"Unknown command: {command} {getattr(parsed, 'project_command', '')}")


def cmd_init_config(config_path: Path) -> int:
    """Write a template config file unless one exists."""
    if config_path.exists():
        print(f"❌ Config file already exists: {config_path}")
        return 1
    create_default_config(config_path)
    print(f"✓ Wrote {config_path}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init-config":
        return cmd_init_config(parsed.config)

    if parsed.command == "projects" and not parsed.project_command:
        print("❌ Missing project command: list, create, update or delete")
        return 1

    # Load config
    try:
        config: ClientConfig = load_config(parsed.config)
    except Exception as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    client = DocumentCloudClient.from_config(config)

    try:
        result = run_command(client, parsed)
    except (ValueError, OSError, DocumentCloudError) as e:
        print(f"❌ {e}")
        return 1

    return print_result(result)


if __name__ == "__main__":
    sys.exit(main())

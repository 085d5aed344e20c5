"""
Configuration management.

ClientConfig is the single, immutable configuration value shared by the
client root and its document/project facades. It also owns the two pieces of
logic that depend only on configuration:

- build_uri: endpoint + suffix, with basic-auth credentials embedded as
  URL user-info when both username and password are set
- require_credentials: fast client-side check before mutating operations

Credentials are either both present or treated as absent; a half-configured
pair never reaches the wire.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, urlsplit, urlunsplit

import yaml

from .errors import Unauthenticated

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.documentcloud.org/api/"
DEFAULT_TIMEOUT = 30.0


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass(frozen=True)
class ClientConfig:
    """DocumentCloud connection settings.

    - username/password: HTTP basic auth pair (optional, both or neither)
    - api_url: base API endpoint, suffixes are appended verbatim
    - timeout: seconds handed to the HTTP transport (None waits forever)
    """

    username: str | None = None
    password: str | None = None
    api_url: str = DEFAULT_API_URL
    timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if bool(self.username) != bool(self.password):
            logger.warning(
                "Only one of username/password is configured; "
                "requests will be sent without credentials"
            )

    @property
    def has_credentials(self) -> bool:
        """True when both username and password are set."""
        return bool(self.username) and bool(self.password)

    def build_uri(self, suffix: str) -> str:
        """Build the full URI for an API path suffix.

        Args:
            suffix: Path relative to api_url (e.g. "documents/123.json")

        Returns:
            The URI, with credentials embedded as user-info when configured
        """
        uri = self.api_url + suffix
        if not self.has_credentials:
            return uri

        parts = urlsplit(uri)
        host = parts.netloc.rpartition("@")[2]
        userinfo = f"{quote(self.username, safe='')}:{quote(self.password, safe='')}"
        return urlunsplit(
            (parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment)
        )

    def require_credentials(self) -> None:
        """Raise Unauthenticated unless a username and password are configured."""
        if not self.has_credentials:
            raise Unauthenticated()

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not isinstance(self.api_url, str):
            errors.append(f"api_url must be a string, got {type(self.api_url).__name__}")
        else:
            parts = urlsplit(self.api_url)
            if not parts.scheme or not parts.netloc:
                errors.append(f"api_url must be an absolute URL, got {self.api_url!r}")
            elif not self.api_url.endswith("/"):
                errors.append("api_url must end with '/'")

        if self.timeout is not None and (
            isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float))
        ):
            errors.append(f"timeout must be a number, got {self.timeout!r}")
        elif self.timeout is not None and self.timeout <= 0:
            errors.append("timeout must be a positive number of seconds")

        return errors


def _as_str(value) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _parse_timeout(value) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigValidationError(f"timeout must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigValidationError(f"timeout must be a number, got {value!r}")


def load_config(config_path: Path) -> ClientConfig:
    """
    Load configuration from YAML file.

    Environment variables override config values:
    - DOCUMENTCLOUD_USERNAME
    - DOCUMENTCLOUD_PASSWORD
    - DOCUMENTCLOUD_API_URL
    - DOCUMENTCLOUD_TIMEOUT (seconds, empty string disables the timeout)
    """
    if config_path.exists():
        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError(f"{config_path}: invalid YAML: {e}") from e
    else:
        logger.debug("Config file %s not found, using defaults", config_path)
        data = {}

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"{config_path}: expected a mapping at the top level, got {type(data).__name__}"
        )

    dc_data = data.get("documentcloud") or {}
    if not isinstance(dc_data, dict):
        raise ConfigValidationError(
            f"{config_path}: 'documentcloud' must be a mapping, got {type(dc_data).__name__}"
        )

    timeout_raw = os.environ.get("DOCUMENTCLOUD_TIMEOUT", dc_data.get("timeout", DEFAULT_TIMEOUT))

    config = ClientConfig(
        username=_as_str(os.environ.get("DOCUMENTCLOUD_USERNAME", dc_data.get("username"))),
        password=_as_str(os.environ.get("DOCUMENTCLOUD_PASSWORD", dc_data.get("password"))),
        api_url=os.environ.get("DOCUMENTCLOUD_API_URL", dc_data.get("api_url", DEFAULT_API_URL)),
        timeout=_parse_timeout(timeout_raw),
    )

    errors = config.validate()
    if errors:
        raise ConfigValidationError("; ".join(errors))

    return config


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# DocumentCloud client configuration
#
# Credentials are optional. Without them only search, document get and
# document entities are available.
# Environment variables DOCUMENTCLOUD_USERNAME, DOCUMENTCLOUD_PASSWORD,
# DOCUMENTCLOUD_API_URL and DOCUMENTCLOUD_TIMEOUT override these values.

documentcloud:
  username: null                                # Account email
  password: null                                # Account password
  api_url: "https://www.documentcloud.org/api/" # Must end with '/'
  timeout: 30                                   # Seconds, null to disable
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)

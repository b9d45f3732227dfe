"""Loading credentials from JSON documents and files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from ossclient.schemas.domain import Credentials
from ossclient.storage.contracts import ConfigError

logger = logging.getLogger(__name__)


def expand_home(path: str | os.PathLike[str]) -> Path:
    """Resolve a leading ``~/`` against ``$HOME``.

    Only the ``~/`` form is supported; ``~user`` paths are left alone.
    """
    raw = os.fspath(path)
    if not raw.startswith("~/"):
        return Path(raw)
    home = os.environ.get("HOME")
    if not home:
        raise ConfigError(f"HOME is not set, cannot expand {raw}")
    return Path(home) / raw[2:]


def credentials_from_json(document: str | bytes) -> Credentials:
    """Parse ``{"endpoint", "accessKeyId", "accessKeySecret"}``.

    Raises:
        ConfigError: If the document is not a JSON object or a field is
            missing or empty.
    """
    try:
        return Credentials.model_validate_json(document)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors()})
        raise ConfigError(f"Invalid credentials JSON, problem with: {', '.join(fields)}") from exc


def credentials_from_file(path: str | os.PathLike[str]) -> Credentials:
    resolved = expand_home(path)
    try:
        document = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read credentials file {resolved}: {exc}") from exc
    logger.debug("Loaded credentials from %s", resolved)
    return credentials_from_json(document)


def credentials_from_fields(endpoint: str, access_key_id: str, access_key_secret: str) -> Credentials:
    try:
        return Credentials(
            endpoint=endpoint,
            access_key_id=access_key_id,
            access_key_secret=access_key_secret,
        )
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ConfigError(f"Invalid credentials, problem with: {', '.join(fields)}") from exc


__all__ = ["expand_home", "credentials_from_json", "credentials_from_file", "credentials_from_fields"]

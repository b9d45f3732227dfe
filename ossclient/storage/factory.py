"""Factory for building clients from environment configuration."""

from __future__ import annotations

import logging

from ossclient.core.config import Settings, get_settings
from ossclient.schemas.domain import Credentials
from ossclient.storage.client import AsyncStorageClient, StorageClient
from ossclient.storage.credentials import credentials_from_fields, credentials_from_file

logger = logging.getLogger(__name__)


def load_credentials(settings: Settings | None = None) -> Credentials:
    """Resolve credentials from settings.

    Environment variables:
        OSS_ENDPOINT, OSS_ACCESS_KEY_ID, OSS_ACCESS_KEY_SECRET: Inline
            credentials, used when all three are set.
        OSS_CONFIG_FILE: JSON credentials file otherwise
            (default: ~/.oss/credentials.json).
    """
    settings = settings or get_settings()
    if settings.has_inline_credentials():
        logger.debug("Using inline credentials for endpoint %s", settings.OSS_ENDPOINT)
        return credentials_from_fields(
            settings.OSS_ENDPOINT,
            settings.OSS_ACCESS_KEY_ID,
            settings.OSS_ACCESS_KEY_SECRET,
        )
    return credentials_from_file(settings.OSS_CONFIG_FILE)


def build_client(settings: Settings | None = None) -> StorageClient:
    settings = settings or get_settings()
    return StorageClient(
        load_credentials(settings),
        default_expire_seconds=settings.OSS_DEFAULT_EXPIRE_SECONDS,
        use_https=settings.OSS_USE_HTTPS,
    )


def build_async_client(settings: Settings | None = None) -> AsyncStorageClient:
    settings = settings or get_settings()
    return AsyncStorageClient(
        load_credentials(settings),
        default_expire_seconds=settings.OSS_DEFAULT_EXPIRE_SECONDS,
        use_https=settings.OSS_USE_HTTPS,
    )


__all__ = ["load_credentials", "build_client", "build_async_client"]

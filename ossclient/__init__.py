"""Pre-signed URL client for OSS-compatible object storage."""

from ossclient.schemas.domain import Credentials, Found, NotFound, SignRequest, Verb
from ossclient.storage import (
    AsyncStorageClient,
    ConfigError,
    StorageClient,
    StorageError,
    TransportError,
    UrlSigner,
)

__all__ = [
    "AsyncStorageClient",
    "ConfigError",
    "Credentials",
    "Found",
    "NotFound",
    "SignRequest",
    "StorageClient",
    "StorageError",
    "TransportError",
    "UrlSigner",
    "Verb",
]

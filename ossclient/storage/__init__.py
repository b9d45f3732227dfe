"""Storage package: URL signing and object clients."""

from ossclient.storage.client import AsyncStorageClient, StorageClient
from ossclient.storage.contracts import ConfigError, ObjectStorage, Presigner, StorageError, TransportError
from ossclient.storage.signer import UrlSigner

__all__ = [
    "AsyncStorageClient",
    "ConfigError",
    "ObjectStorage",
    "Presigner",
    "StorageClient",
    "StorageError",
    "TransportError",
    "UrlSigner",
]

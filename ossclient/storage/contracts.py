"""Storage interfaces and error types."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ossclient.schemas.domain import Found, NotFound, Verb


class ConfigError(Exception):
    """Credentials could not be loaded or are incomplete."""


class StorageError(Exception):
    """Wraps underlying storage failures with operation context."""

    def __init__(self, op: str, bucket: str | None, key: str | None, message: str):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}: {self.message}"


class TransportError(StorageError):
    """Unexpected HTTP status, connection failure or body-read failure.

    ``status_code`` is None when no response was received.
    """

    def __init__(
        self,
        op: str,
        bucket: str | None,
        key: str | None,
        message: str,
        *,
        status_code: int | None = None,
        response: str | None = None,
    ):
        self.status_code = status_code
        self.response = response
        super().__init__(op, bucket, key, message)


@runtime_checkable
class Presigner(Protocol):
    """Produces time-limited signed URLs."""

    def generate_signed_url(
        self,
        verb: Verb | str,
        bucket: str,
        key: str,
        expire_in_seconds: int,
        use_https: bool | None = None,
    ) -> str:
        ...


@runtime_checkable
class ObjectStorage(Protocol):
    """Contract for blocking object storage clients."""

    def put_object(self, bucket: str, key: str, data: bytes, expire_in_seconds: int | None = None):
        ...

    def delete_object(self, bucket: str, key: str):
        ...

    def get_object_content(self, bucket: str, key: str) -> Found | NotFound:
        ...


__all__ = ["ConfigError", "StorageError", "TransportError", "ObjectStorage", "Presigner"]

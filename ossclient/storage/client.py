"""Blocking and asyncio object clients that talk to signed URLs over httpx."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx

from ossclient.core.config import get_settings
from ossclient.schemas.domain import Credentials, Found, NotFound, Verb
from ossclient.storage.contracts import ObjectStorage, Presigner, TransportError
from ossclient.storage.credentials import credentials_from_file, credentials_from_json
from ossclient.storage.signer import Clock, UrlSigner

logger = logging.getLogger(__name__)


def _wrap_error(op: str, bucket: str, key: str, exc: Exception) -> TransportError:
    return TransportError(op=op, bucket=bucket, key=key, message=str(exc) or type(exc).__name__)


def _as_body(data) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"object body must be bytes-like, got {type(data).__name__}")
    return bytes(data)


def _status_error(op: str, bucket: str, key: str, response: httpx.Response) -> TransportError:
    # The request URL carries the signature, so only status and reason are kept
    text = repr(response)
    return TransportError(
        op=op,
        bucket=bucket,
        key=key,
        message=f"Error in {op}: {bucket}/{key}, returns: {text}",
        status_code=response.status_code,
        response=text,
    )


class _SignedUrlClient(Presigner):
    """Signing and response classification shared by both client flavours."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        default_expire_seconds: int | None = None,
        use_https: bool | None = None,
        clock: Clock | None = None,
    ):
        settings = get_settings()
        self._signer = UrlSigner(credentials, clock=clock)
        self._default_expire = (
            default_expire_seconds
            if default_expire_seconds is not None
            else settings.OSS_DEFAULT_EXPIRE_SECONDS
        )
        self._use_https = settings.OSS_USE_HTTPS if use_https is None else use_https

    @classmethod
    def from_json(cls, document: str | bytes, **kwargs):
        """Build a client from an inline credentials JSON document."""
        return cls(credentials_from_json(document), **kwargs)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str], **kwargs):
        """Build a client from a credentials JSON file; ``~/`` is expanded."""
        return cls(credentials_from_file(path), **kwargs)

    @property
    def signer(self) -> UrlSigner:
        return self._signer

    @property
    def credentials(self) -> Credentials:
        return self._signer.credentials

    def generate_signed_url(
        self,
        verb: Verb | str,
        bucket: str,
        key: str,
        expire_in_seconds: int,
        use_https: bool | None = None,
    ) -> str:
        """Sign a URL; the scheme follows the client setting unless given."""
        if use_https is None:
            use_https = self._use_https
        return self._signer.generate_signed_url(verb, bucket, key, expire_in_seconds, use_https)

    def _url(self, verb: Verb, bucket: str, key: str, expire_in_seconds: int | None) -> str:
        expire = self._default_expire if expire_in_seconds is None else expire_in_seconds
        return self._signer.generate_signed_url(verb, bucket, key, expire, self._use_https)

    @staticmethod
    def _check_write(op: str, bucket: str, key: str, response: httpx.Response) -> httpx.Response:
        if not response.is_success:
            logger.warning("%s %s/%s returned %s", op, bucket, key, response.status_code)
            raise _status_error(op, bucket, key, response)
        return response

    @staticmethod
    def _classify_read(bucket: str, key: str, response: httpx.Response) -> Found | NotFound:
        if response.status_code == 404:
            return NotFound(bucket=bucket, key=key)
        if response.status_code == 200:
            return Found(bucket=bucket, key=key, content=response.content, encoding=response.encoding)
        logger.warning("get %s/%s returned %s", bucket, key, response.status_code)
        raise _status_error("get", bucket, key, response)


class StorageClient(_SignedUrlClient, ObjectStorage):
    """Blocking client.

    Example:
        ```python
        client = StorageClient.from_file("~/.oss/credentials.json")
        client.put_object_text("my-bucket", "notes/hello.txt", "hello", expire_in_seconds=60)
        client.get_object_text("my-bucket", "notes/hello.txt")  # "hello"
        client.get_object_text("my-bucket", "notes/missing.txt")  # None
        ```
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        http_client: httpx.Client | None = None,
        default_expire_seconds: int | None = None,
        use_https: bool | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(
            credentials,
            default_expire_seconds=default_expire_seconds,
            use_https=use_https,
            clock=clock,
        )
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "StorageClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(self, verb: Verb, bucket: str, key: str, url: str, content: bytes | None = None) -> httpx.Response:
        logger.debug("%s %s/%s", verb.value, bucket, key)
        try:
            return self._http.request(verb.value, url, content=content)
        except httpx.HTTPError as exc:
            raise _wrap_error(verb.value.lower(), bucket, key, exc) from exc

    # ------------
    # Write path
    # ------------
    def put_object(
        self, bucket: str, key: str, data: bytes, expire_in_seconds: int | None = None
    ) -> httpx.Response:
        """Upload ``data`` as the whole object body in a single request.

        Raises:
            TransportError: On a non-2xx response or a connection failure.
        """
        url = self._url(Verb.PUT, bucket, key, expire_in_seconds)
        response = self._send(Verb.PUT, bucket, key, url, content=_as_body(data))
        return self._check_write("put", bucket, key, response)

    def put_object_text(
        self, bucket: str, key: str, text: str, expire_in_seconds: int | None = None
    ) -> httpx.Response:
        return self.put_object(bucket, key, text.encode("utf-8"), expire_in_seconds)

    def put_file(
        self, bucket: str, key: str, path: str | os.PathLike[str], expire_in_seconds: int | None = None
    ) -> httpx.Response:
        """Read the local file fully into memory, then ``put_object`` it."""
        return self.put_object(bucket, key, Path(path).read_bytes(), expire_in_seconds)

    def delete_object(self, bucket: str, key: str) -> httpx.Response:
        url = self._url(Verb.DELETE, bucket, key, None)
        response = self._send(Verb.DELETE, bucket, key, url)
        return self._check_write("delete", bucket, key, response)

    # ------------
    # Read path
    # ------------
    def get_object_content(self, bucket: str, key: str) -> Found | NotFound:
        """Fetch an object.

        Returns ``NotFound`` for 404 and ``Found`` for 200.

        Raises:
            TransportError: On any other status or a transport failure.
        """
        url = self._url(Verb.GET, bucket, key, None)
        response = self._send(Verb.GET, bucket, key, url)
        return self._classify_read(bucket, key, response)

    def get_object_bytes(self, bucket: str, key: str) -> bytes | None:
        result = self.get_object_content(bucket, key)
        return result.content if isinstance(result, Found) else None

    def get_object_text(self, bucket: str, key: str) -> str | None:
        result = self.get_object_content(bucket, key)
        return result.text if isinstance(result, Found) else None


class AsyncStorageClient(_SignedUrlClient):
    """asyncio client; only the network exchange is awaited."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        default_expire_seconds: int | None = None,
        use_https: bool | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(
            credentials,
            default_expire_seconds=default_expire_seconds,
            use_https=use_https,
            clock=clock,
        )
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "AsyncStorageClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _send(
        self, verb: Verb, bucket: str, key: str, url: str, content: bytes | None = None
    ) -> httpx.Response:
        logger.debug("%s %s/%s", verb.value, bucket, key)
        try:
            return await self._http.request(verb.value, url, content=content)
        except httpx.HTTPError as exc:
            raise _wrap_error(verb.value.lower(), bucket, key, exc) from exc

    async def put_object(
        self, bucket: str, key: str, data: bytes, expire_in_seconds: int | None = None
    ) -> httpx.Response:
        url = self._url(Verb.PUT, bucket, key, expire_in_seconds)
        response = await self._send(Verb.PUT, bucket, key, url, content=_as_body(data))
        return self._check_write("put", bucket, key, response)

    async def put_object_text(
        self, bucket: str, key: str, text: str, expire_in_seconds: int | None = None
    ) -> httpx.Response:
        return await self.put_object(bucket, key, text.encode("utf-8"), expire_in_seconds)

    async def put_file(
        self, bucket: str, key: str, path: str | os.PathLike[str], expire_in_seconds: int | None = None
    ) -> httpx.Response:
        return await self.put_object(bucket, key, Path(path).read_bytes(), expire_in_seconds)

    async def delete_object(self, bucket: str, key: str) -> httpx.Response:
        url = self._url(Verb.DELETE, bucket, key, None)
        response = await self._send(Verb.DELETE, bucket, key, url)
        return self._check_write("delete", bucket, key, response)

    async def get_object_content(self, bucket: str, key: str) -> Found | NotFound:
        url = self._url(Verb.GET, bucket, key, None)
        response = await self._send(Verb.GET, bucket, key, url)
        return self._classify_read(bucket, key, response)

    async def get_object_bytes(self, bucket: str, key: str) -> bytes | None:
        result = await self.get_object_content(bucket, key)
        return result.content if isinstance(result, Found) else None

    async def get_object_text(self, bucket: str, key: str) -> str | None:
        result = await self.get_object_content(bucket, key)
        return result.text if isinstance(result, Found) else None


__all__ = ["StorageClient", "AsyncStorageClient"]

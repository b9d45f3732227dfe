"""Query-string URL signing (OSS signature version 1).

The string to sign is::

    <VERB>\\n<Content-MD5>\\n<Content-Type>\\n<Expires>\\n/<bucket>/<key>

Content-MD5 and Content-Type are always empty, so requests sent to a signed
URL must not carry those headers either.

Reference: https://help.aliyun.com/document_detail/31952.html
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import time
from typing import Callable
from urllib.parse import quote

from ossclient.schemas.domain import Credentials, SignRequest, Verb

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def canonical_string(verb: Verb | str, expires_at: int, bucket: str, key: str) -> str:
    verb = Verb(verb.upper()).value
    return f"{verb}\n\n\n{expires_at}\n/{bucket}/{key}"


def compute_signature(secret: str, message: str) -> str:
    """Base64 of HMAC-SHA1 over ``message``.

    SHA1 is what the service verifies against; do not swap the digest.
    """
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


class UrlSigner:
    """Builds signed URLs for one set of credentials."""

    def __init__(self, credentials: Credentials, clock: Clock | None = None):
        self._credentials = credentials
        self._clock = clock or time.time

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def now(self) -> int:
        return int(self._clock())

    def sign(self, request: SignRequest) -> str:
        creds = self._credentials
        scheme = "https" if request.use_https else "http"
        to_sign = canonical_string(
            request.verb, request.expires_at, request.bucket_name, request.object_key
        )
        signature = compute_signature(creds.access_key_secret.get_secret_value(), to_sign)

        logger.debug(
            "Signed %s url for %s/%s expiring at %d",
            request.verb.value,
            request.bucket_name,
            request.object_key,
            request.expires_at,
        )
        return (
            f"{scheme}://{request.bucket_name}.{creds.endpoint}/{request.object_key}"
            f"?Expires={request.expires_at}"
            f"&OSSAccessKeyId={quote(creds.access_key_id, safe='')}"
            f"&Signature={quote(signature, safe='')}"
        )

    def generate_signed_url(
        self,
        verb: Verb | str,
        bucket: str,
        key: str,
        expire_in_seconds: int,
        use_https: bool = True,
    ) -> str:
        request = SignRequest(
            verb=Verb(verb.upper()),
            bucket_name=bucket,
            object_key=key,
            expires_at=self.now() + expire_in_seconds,
            use_https=use_https,
        )
        return self.sign(request)

    def generate_signed_get_url(self, bucket: str, key: str, expire_in_seconds: int) -> str:
        return self.generate_signed_url(Verb.GET, bucket, key, expire_in_seconds)

    def generate_signed_put_url(self, bucket: str, key: str, expire_in_seconds: int) -> str:
        return self.generate_signed_url(Verb.PUT, bucket, key, expire_in_seconds)

    def generate_signed_delete_url(self, bucket: str, key: str, expire_in_seconds: int) -> str:
        return self.generate_signed_url(Verb.DELETE, bucket, key, expire_in_seconds)


__all__ = ["UrlSigner", "canonical_string", "compute_signature"]

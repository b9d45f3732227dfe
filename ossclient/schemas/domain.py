"""Domain models for signed-URL object operations."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Verb(str, enum.Enum):
    """HTTP verbs a signed URL can authorize."""

    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"


class Credentials(BaseModel):
    """Endpoint plus access key pair.

    Accepts either the JSON names (``accessKeyId``) or the Python names
    (``access_key_id``). The secret is a ``SecretStr`` and is masked in repr.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, hide_input_in_errors=True)

    endpoint: str
    access_key_id: str = Field(alias="accessKeyId")
    access_key_secret: SecretStr = Field(alias="accessKeySecret")

    @field_validator("endpoint", "access_key_id", "access_key_secret")
    @classmethod
    def _not_empty(cls, value, info):
        raw = value.get_secret_value() if isinstance(value, SecretStr) else value
        if not raw:
            raise ValueError(f"{info.field_name} cannot be empty")
        return value


class SignRequest(BaseModel):
    """One operation to sign. ``expires_at`` is absolute epoch seconds."""

    model_config = ConfigDict(frozen=True)

    verb: Verb
    bucket_name: str
    object_key: str
    expires_at: int = Field(ge=0, le=2**64 - 1)
    use_https: bool = True


class NotFound(BaseModel):
    """The object does not exist (HTTP 404)."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    key: str


class Found(BaseModel):
    """The object body as returned by a 200 response."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    key: str
    content: bytes
    encoding: Optional[str] = None

    @property
    def text(self) -> str:
        """Lossy decode; undecodable bytes become U+FFFD."""
        try:
            return self.content.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

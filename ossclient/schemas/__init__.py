"""Domain schemas for signed-URL object operations."""

from ossclient.schemas.domain import Credentials, Found, NotFound, SignRequest, Verb

__all__ = ["Credentials", "Found", "NotFound", "SignRequest", "Verb"]

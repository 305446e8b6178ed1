"""Signed message data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


# Signed bytes are name, date and key location joined by FIELD_SEPARATOR,
# UTF-8 encoded, without the signature line and without a trailing separator.
CANONICAL_FORM_VERSION = 1
FIELD_SEPARATOR = "\n"

URL_PREFIX = "http"
PROFILE_PREFIX = "FB:"


class KeyType(str, Enum):
    """Where the claimed public key is published."""
    URL = "url"
    NAMED_PROFILE = "named_profile"


class Message(BaseModel):
    """The human-readable claim carried by a QR code."""

    model_config = ConfigDict(frozen=True)

    name: str
    date: str
    key_type: KeyType
    key_location: str

    @property
    def profile_id(self) -> str | None:
        """Profile identifier for named profile locations, None for URLs."""
        if self.key_type != KeyType.NAMED_PROFILE:
            return None
        return self.key_location[len(PROFILE_PREFIX):]

    def canonical_form(self) -> str:
        """Text over which the signature is computed."""
        return FIELD_SEPARATOR.join([self.name, self.date, self.key_location])

    def signing_payload(self) -> bytes:
        return self.canonical_form().encode("utf-8")


class SignedMessage(BaseModel):
    """A message together with its base64 Ed25519 signature."""

    model_config = ConfigDict(frozen=True)

    message: Message
    signature: str

    def to_payload(self) -> str:
        """Rebuild the four-line QR text."""
        return FIELD_SEPARATOR.join([self.message.canonical_form(), self.signature])

"""Parser for the four-line signed message scanned from a QR code."""

import re

from qrsign.exceptions import MalformedMessageError
from qrsign.logging import get_logger
from qrsign.models.message import (
    FIELD_SEPARATOR,
    PROFILE_PREFIX,
    URL_PREFIX,
    KeyType,
    Message,
    SignedMessage,
)


FIELD_COUNT = 4
SIGNATURE_LENGTH = 88  # base64 of a 64-byte Ed25519 signature

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

_log = get_logger("parser")


def classify_key_location(key_location: str) -> KeyType:
    """
    Determine the key type from the key location prefix.

    Raises:
        MalformedMessageError: If the prefix is not recognised
    """
    if key_location.startswith(URL_PREFIX):
        return KeyType.URL
    if key_location.startswith(PROFILE_PREFIX):
        return KeyType.NAMED_PROFILE
    raise MalformedMessageError("Key type invalid.")


def parse_message(content: str) -> SignedMessage:
    """
    Parse raw scanned text into a SignedMessage.

    Fields are kept exactly as scanned, since they are the bytes that
    were signed.

    Args:
        content: Raw QR text, ``name\\ndate\\nkey_location\\nsignature``

    Returns:
        SignedMessage built from the four fields

    Raises:
        MalformedMessageError: If the text breaks the message format
    """
    items = content.split(FIELD_SEPARATOR)
    if len(items) != FIELD_COUNT:
        _log.debug("parse_failed", reason="field_count", field_count=len(items))
        raise MalformedMessageError(
            f"Signed message must have {FIELD_COUNT} lines, got {len(items)}."
        )

    name, date, key_location, signature = items

    if not DATE_PATTERN.fullmatch(date):
        _log.debug("parse_failed", reason="date_format")
        raise MalformedMessageError("Date format must be YYYY-MM-DD.")

    key_type = classify_key_location(key_location)

    if len(signature) != SIGNATURE_LENGTH:
        _log.debug("parse_failed", reason="signature_length", length=len(signature))
        raise MalformedMessageError(f"Signature must be length of {SIGNATURE_LENGTH}.")

    return SignedMessage(
        message=Message(
            name=name,
            date=date,
            key_type=key_type,
            key_location=key_location,
        ),
        signature=signature,
    )

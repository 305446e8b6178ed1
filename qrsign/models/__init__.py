"""Pydantic models for qrsign."""

from qrsign.models.message import KeyType, Message, SignedMessage
from qrsign.models.result import (
    VerificationStatus,
    ScrapeResult,
    ValidationResult,
    VerificationReport,
)

__all__ = [
    "KeyType",
    "Message",
    "SignedMessage",
    "VerificationStatus",
    "ScrapeResult",
    "ValidationResult",
    "VerificationReport",
]

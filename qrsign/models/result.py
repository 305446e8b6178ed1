"""Scrape and validation result models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from qrsign.models.message import SignedMessage


class VerificationStatus(str, Enum):
    """Tri-state external verification signal."""
    VERIFIED = "verified"
    UNVERIFIED = "unverified"
    UNKNOWN = "unknown"

    @classmethod
    def from_flag(cls, flag: bool | None) -> "VerificationStatus":
        if flag is None:
            return cls.UNKNOWN
        return cls.VERIFIED if flag else cls.UNVERIFIED


class ScrapeResult(BaseModel):
    """Public key extracted from a key location."""

    model_config = ConfigDict(frozen=True)

    key: str
    page_content: str
    is_verified: VerificationStatus = VerificationStatus.UNKNOWN


class ValidationResult(BaseModel):
    """Outcome of checking a signature against a public key."""

    model_config = ConfigDict(frozen=True)

    is_well_signed: bool
    is_verified: VerificationStatus


class VerificationReport(BaseModel):
    """Wrapper for a complete parse, scrape and verify run."""

    model_config = ConfigDict(frozen=True)

    signed_message: SignedMessage
    scrape: ScrapeResult
    validation: ValidationResult
    checked_at: datetime
    duration_ms: float

    @property
    def success(self) -> bool:
        return self.validation.is_well_signed

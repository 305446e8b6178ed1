"""Validator - coordinates parsing, key scraping and signature checks."""

from datetime import datetime

from qrsign.config import ValidatorConfig
from qrsign.core.crypto import check_key_pair, verify_message
from qrsign.core.extractor import scrape_public_key
from qrsign.core.fetcher import BrowserPageReader, PageReader
from qrsign.core.parser import parse_message
from qrsign.logging import get_logger
from qrsign.models.message import SignedMessage
from qrsign.models.result import (
    ScrapeResult,
    ValidationResult,
    VerificationReport,
    VerificationStatus,
)


class Validator:
    """
    High-level interface for checking a scanned QR claim.

    Example:
        validator = Validator()
        report = validator.verify(qr_text)
        print(report.validation.is_well_signed, report.validation.is_verified)
    """

    def __init__(
        self,
        reader: PageReader | None = None,
        config: ValidatorConfig | None = None,
    ):
        """
        Initialize validator.

        Args:
            reader: Page reader for key locations, a browser reader if None
            config: ValidatorConfig instance, uses defaults if None
        """
        self.config = config or ValidatorConfig()
        self.reader = reader or BrowserPageReader(
            headless=self.config.headless,
            timeout_ms=self.config.page_timeout_ms,
            user_agent=self.config.user_agent,
            render=self.config.render_pages,
        )
        self._log = get_logger("validator")

    def get_message(self, content: str) -> SignedMessage:
        """Parse raw QR text. Raises MalformedMessageError."""
        return parse_message(content)

    def validate_key_pair(self, public_key: str, private_key: str) -> bool:
        return check_key_pair(public_key, private_key)

    def validate_message(
        self,
        signed_message: SignedMessage,
        public_key: str,
        is_verified: VerificationStatus | bool | None = VerificationStatus.UNKNOWN,
    ) -> ValidationResult:
        return verify_message(signed_message, public_key, is_verified)

    def scrape_public_key(self, signed_message: SignedMessage) -> ScrapeResult:
        """Fetch the claimed key. Raises KeyNotFoundError."""
        return scrape_public_key(
            signed_message,
            self.reader,
            self.config.profile_about_url,
        )

    def verify(self, content: str) -> VerificationReport:
        """
        Run the full check on raw QR text.

        Args:
            content: Raw four-line QR text

        Returns:
            VerificationReport; a bad signature is reported, not raised

        Raises:
            MalformedMessageError: If the text can't be parsed
            KeyNotFoundError: If the claimed key can't be found
        """
        start = datetime.now()

        signed_message = self.get_message(content)
        self._log.info(
            "verify_start",
            name=signed_message.message.name,
            key_type=signed_message.message.key_type.value,
            key_location=signed_message.message.key_location,
        )

        scrape = self.scrape_public_key(signed_message)
        validation = self.validate_message(signed_message, scrape.key, scrape.is_verified)
        duration_ms = (datetime.now() - start).total_seconds() * 1000

        self._log.info(
            "verify_complete",
            key_location=signed_message.message.key_location,
            is_well_signed=validation.is_well_signed,
            is_verified=validation.is_verified.value,
            duration_ms=duration_ms,
        )

        return VerificationReport(
            signed_message=signed_message,
            scrape=scrape,
            validation=validation,
            checked_at=datetime.now(),
            duration_ms=duration_ms,
        )

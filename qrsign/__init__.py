"""qrsign - signed QR claim verifier."""

from qrsign.models.message import KeyType, Message, SignedMessage
from qrsign.models.result import (
    VerificationStatus,
    ScrapeResult,
    ValidationResult,
    VerificationReport,
)
from qrsign.config import ValidatorConfig
from qrsign.core.validator import Validator
from qrsign.core.parser import parse_message
from qrsign.core.crypto import check_key_pair, sign_message, verify_message
from qrsign.core.extractor import scrape_key_location, scrape_public_key
from qrsign.core.fetcher import PageReader, BrowserPageReader, StaticPageReader
from qrsign.core.exporter import to_json, to_dict, save_json, load_json

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "Validator",
    "ValidatorConfig",
    "parse_message",
    "check_key_pair",
    "sign_message",
    "verify_message",
    "scrape_key_location",
    "scrape_public_key",
    # Page readers
    "PageReader",
    "BrowserPageReader",
    "StaticPageReader",
    # Models
    "KeyType",
    "Message",
    "SignedMessage",
    "VerificationStatus",
    "ScrapeResult",
    "ValidationResult",
    "VerificationReport",
    # Export utilities
    "to_json",
    "to_dict",
    "save_json",
    "load_json",
    "__version__",
]

"""Custom exception hierarchy for qrsign."""


class QRSignError(Exception):
    """Base exception for all qrsign errors."""


class MalformedMessageError(QRSignError):
    """Scanned text does not follow the signed message format."""


class KeyNotFoundError(QRSignError):
    """No public key could be extracted from the declared key location."""


class FetchError(QRSignError):
    """Failed to fetch page."""


class PageBlockedError(FetchError):
    """Detected bot blocking or rate limit."""


class PageNotFoundError(FetchError):
    """Page does not exist."""


class ConfigError(QRSignError):
    """Invalid configuration."""

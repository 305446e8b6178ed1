"""Public key extraction from the content published at a key location."""

import re
from collections.abc import Callable

from bs4 import BeautifulSoup

from qrsign.config import DEFAULT_PROFILE_ABOUT_URL
from qrsign.core.fetcher import PageReader
from qrsign.exceptions import KeyNotFoundError
from qrsign.logging import get_logger
from qrsign.models.message import KeyType, Message, SignedMessage
from qrsign.models.result import ScrapeResult, VerificationStatus


# Base64 of a 32-byte key is always 44 characters; the angle brackets are
# HTML-escaped in the served page.
PUBLIC_KEY_PATTERN = re.compile(r"QRSign&lt;([^&;\s]{44})&gt;")

# Badge text as it appears inside the JSON embedded in a verified profile page
VERIFIED_BADGE_MARKER = (
    r"\u003Cspan>A blue verification badge confirms that this is an authentic "
    r"Page for this public figure, media company or brand.\u003C/span>"
    "\n"
)

META_SELECTOR = 'meta[name="qr-sign"]'

_log = get_logger("extractor")


def find_marked_key(content: str) -> str | None:
    """Return the first ``QRSign&lt;...&gt;`` key in content, if any."""
    match = PUBLIC_KEY_PATTERN.search(content)
    return match.group(1) if match else None


def find_meta_key(html: str) -> str | None:
    """Return the content of the first qr-sign meta tag in the document head."""
    soup = BeautifulSoup(html, "lxml")
    if soup.head is None:
        return None
    meta = soup.head.select_one(META_SELECTOR)
    if meta is None:
        return None
    return meta.get("content")


def _read(reader: PageReader, url: str) -> str:
    try:
        return reader.read_page(url)
    except Exception as e:
        _log.warning("fetch_failed", url=url, error=str(e))
        raise KeyNotFoundError(f"Could not fetch {url}") from e


def scrape_profile_about(
    profile_id: str,
    reader: PageReader,
    profile_about_url: str = DEFAULT_PROFILE_ABOUT_URL,
) -> ScrapeResult:
    """
    Extract a public key from a named profile's about page.

    Args:
        profile_id: Profile identifier without its prefix
        reader: Page reader used to fetch the about page
        profile_about_url: URL template with a ``{profile_id}`` placeholder

    Returns:
        ScrapeResult with the key and the badge signal

    Raises:
        KeyNotFoundError: If the page can't be fetched or has no key marker
    """
    url = profile_about_url.format(profile_id=profile_id)
    content = _read(reader, url)

    key = find_marked_key(content)
    if key is None:
        _log.warning("key_marker_missing", url=url, content_length=len(content))
        raise KeyNotFoundError(f"No QRSign marker found at {url}")

    return ScrapeResult(
        key=key,
        page_content=content,
        is_verified=VerificationStatus.from_flag(VERIFIED_BADGE_MARKER in content),
    )


def scrape_page(url: str, reader: PageReader) -> ScrapeResult:
    """
    Extract a public key from the qr-sign meta tag of a web page.

    Args:
        url: Page URL exactly as declared in the message
        reader: Page reader used to fetch the page

    Returns:
        ScrapeResult with the key; verification stays unknown

    Raises:
        KeyNotFoundError: If the page can't be fetched or has no usable meta tag
    """
    content = _read(reader, url)

    key = find_meta_key(content)
    if key is None:
        _log.warning("meta_tag_missing", url=url, content_length=len(content))
        raise KeyNotFoundError(f"No qr-sign meta tag found at {url}")

    return ScrapeResult(key=key, page_content=content)


_STRATEGIES: dict[KeyType, Callable[[Message, PageReader, str], ScrapeResult]] = {
    KeyType.NAMED_PROFILE: lambda message, reader, about_url: scrape_profile_about(
        message.profile_id, reader, about_url
    ),
    KeyType.URL: lambda message, reader, about_url: scrape_page(
        message.key_location, reader
    ),
}


def scrape_key_location(
    message: Message,
    reader: PageReader,
    profile_about_url: str = DEFAULT_PROFILE_ABOUT_URL,
) -> ScrapeResult:
    """Fetch the public key at a message's key location, picking the strategy by key type."""
    strategy = _STRATEGIES[message.key_type]
    result = strategy(message, reader, profile_about_url)
    _log.info(
        "key_scraped",
        key_type=message.key_type.value,
        key_location=message.key_location,
        is_verified=result.is_verified.value,
        content_length=len(result.page_content),
    )
    return result


def scrape_public_key(
    signed_message: SignedMessage,
    reader: PageReader,
    profile_about_url: str = DEFAULT_PROFILE_ABOUT_URL,
) -> ScrapeResult:
    """
    Fetch the public key declared by a signed message.

    Args:
        signed_message: Parsed message naming the key location
        reader: Page reader used for the fetch
        profile_about_url: About page template for named profiles

    Returns:
        ScrapeResult with the key and the raw page content

    Raises:
        KeyNotFoundError: If no key can be extracted
    """
    return scrape_key_location(signed_message.message, reader, profile_about_url)

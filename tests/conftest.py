"""Shared fixtures - deterministic keys and fixture pages, no internet."""

import base64
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from qrsign.core.crypto import sign_message
from qrsign.models.message import KeyType, Message


FIXTURES_DIR = Path(__file__).parent / "fixtures"

PROFILE_ABOUT_URL = "https://www.facebook.com/examplecorp/about"


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def make_key_pair(seed: bytes) -> tuple[str, str]:
    """Return (public_key, private_key) as base64 for a 32-byte seed."""
    private = Ed25519PrivateKey.from_private_bytes(seed)
    public_raw = private.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return b64(public_raw), b64(seed)


def load_page(name: str, public_key: str = "") -> str:
    """Load an HTML fixture with its key placeholder filled in."""
    html = (FIXTURES_DIR / name).read_text(encoding="utf-8")
    return html.replace("__PUBLIC_KEY__", public_key)


@pytest.fixture
def key_pair() -> tuple[str, str]:
    return make_key_pair(bytes(range(32)))


@pytest.fixture
def other_key_pair() -> tuple[str, str]:
    return make_key_pair(bytes(range(100, 132)))


@pytest.fixture
def profile_message() -> Message:
    return Message(
        name="Example Corp",
        date="2024-03-15",
        key_type=KeyType.NAMED_PROFILE,
        key_location="FB:examplecorp",
    )


@pytest.fixture
def url_message() -> Message:
    return Message(
        name="Example Corp",
        date="2024-03-15",
        key_type=KeyType.URL,
        key_location="https://example.com/",
    )


@pytest.fixture
def profile_payload(profile_message, key_pair) -> str:
    """Four-line QR text for a named profile claim, signed with key_pair."""
    return sign_message(profile_message, key_pair[1]).to_payload()


@pytest.fixture
def url_payload(url_message, key_pair) -> str:
    """Four-line QR text for a URL claim, signed with key_pair."""
    return sign_message(url_message, key_pair[1]).to_payload()

"""Ed25519 signing and verification over signed messages."""

import base64

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from qrsign.logging import get_logger
from qrsign.models.message import Message, SignedMessage
from qrsign.models.result import ValidationResult, VerificationStatus


_log = get_logger("crypto")


def decode_key(value: str) -> bytes:
    """Decode standard base64, rejecting characters outside the alphabet."""
    return base64.b64decode(value, validate=True)


def encode_key(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def check_key_pair(public_key: str, private_key: str) -> bool:
    """
    Check that a base64 public key matches a base64 private key seed.

    Signs an empty message with the private key and verifies it with the
    public key. Never raises.

    Args:
        public_key: Base64 of the 32-byte public key
        private_key: Base64 of the 32-byte private seed

    Returns:
        True if the pair signs and verifies
    """
    try:
        signer = Ed25519PrivateKey.from_private_bytes(decode_key(private_key))
        signature = signer.sign(b"")
        Ed25519PublicKey.from_public_bytes(decode_key(public_key)).verify(signature, b"")
    except (InvalidSignature, ValueError, TypeError):
        return False
    return True


def sign_message(message: Message, private_key: str) -> SignedMessage:
    """
    Sign a message's canonical form with a base64 private key seed.

    Raises:
        ValueError: If the private key is not valid base64 of 32 bytes
    """
    signer = Ed25519PrivateKey.from_private_bytes(decode_key(private_key))
    signature = signer.sign(message.signing_payload())
    return SignedMessage(message=message, signature=encode_key(signature))


def verify_message(
    signed_message: SignedMessage,
    public_key: str,
    is_verified: VerificationStatus | bool | None = VerificationStatus.UNKNOWN,
) -> ValidationResult:
    """
    Verify a signed message against a base64 public key.

    A bad signature or undecodable key/signature gives a negative result
    and overrides any external verification signal.

    Args:
        signed_message: Parsed message and signature
        public_key: Base64 of the claimed 32-byte public key
        is_verified: External verification signal, passed through on success

    Returns:
        ValidationResult
    """
    if not isinstance(is_verified, VerificationStatus):
        is_verified = VerificationStatus.from_flag(is_verified)

    try:
        verifier = Ed25519PublicKey.from_public_bytes(decode_key(public_key))
        verifier.verify(
            decode_key(signed_message.signature),
            signed_message.message.signing_payload(),
        )
    except (InvalidSignature, ValueError, TypeError) as e:
        _log.info(
            "signature_invalid",
            key_location=signed_message.message.key_location,
            error_type=type(e).__name__,
        )
        return ValidationResult(
            is_well_signed=False,
            is_verified=VerificationStatus.UNVERIFIED,
        )

    return ValidationResult(is_well_signed=True, is_verified=is_verified)

"""Unit tests for key pair checks, signing and signature verification."""

import base64

import pytest

from qrsign.core.crypto import check_key_pair, sign_message, verify_message
from qrsign.models.message import Message, SignedMessage
from qrsign.models.result import ValidationResult, VerificationStatus


class TestCheckKeyPair:
    """Key pair self-test."""

    def test_matching_pair(self, key_pair):
        public_key, private_key = key_pair
        assert check_key_pair(public_key, private_key) is True

    def test_unrelated_public_key(self, key_pair, other_key_pair):
        assert check_key_pair(other_key_pair[0], key_pair[1]) is False

    def test_swapped_keys(self, key_pair):
        public_key, private_key = key_pair
        assert check_key_pair(private_key, public_key) is False

    @pytest.mark.parametrize("bad_key", [
        "",
        "not base64!",
        base64.b64encode(b"short").decode(),
        base64.b64encode(bytes(64)).decode(),
    ])
    def test_malformed_public_key(self, key_pair, bad_key):
        assert check_key_pair(bad_key, key_pair[1]) is False

    @pytest.mark.parametrize("bad_key", ["", "@@@@", base64.b64encode(bytes(31)).decode()])
    def test_malformed_private_key(self, key_pair, bad_key):
        assert check_key_pair(key_pair[0], bad_key) is False

    def test_non_ascii_key(self, key_pair):
        assert check_key_pair("ключ", key_pair[1]) is False


class TestCanonicalForm:
    """Signed bytes are name, date and location joined by newlines."""

    def test_canonical_form(self, profile_message):
        assert profile_message.canonical_form() == "Example Corp\n2024-03-15\nFB:examplecorp"

    def test_signing_payload_is_utf8(self):
        message = Message(name="Café", date="2024-01-01", key_type="url", key_location="https://café.fr")
        assert message.signing_payload() == "Café\n2024-01-01\nhttps://café.fr".encode("utf-8")


class TestSignMessage:
    """Signing produces a parseable 88-character signature."""

    def test_signature_length(self, profile_message, key_pair):
        signed = sign_message(profile_message, key_pair[1])
        assert len(signed.signature) == 88

    def test_deterministic(self, profile_message, key_pair):
        first = sign_message(profile_message, key_pair[1])
        second = sign_message(profile_message, key_pair[1])
        assert first.signature == second.signature

    def test_bad_private_key(self, profile_message):
        with pytest.raises(ValueError):
            sign_message(profile_message, "not a key")


class TestVerifyMessage:
    """Signature verification and the external signal override."""

    def test_valid_signature(self, profile_message, key_pair):
        signed = sign_message(profile_message, key_pair[1])
        result = verify_message(signed, key_pair[0])
        assert result == ValidationResult(
            is_well_signed=True,
            is_verified=VerificationStatus.UNKNOWN,
        )

    @pytest.mark.parametrize("signal", list(VerificationStatus))
    def test_signal_passes_through_on_success(self, profile_message, key_pair, signal):
        signed = sign_message(profile_message, key_pair[1])
        result = verify_message(signed, key_pair[0], signal)
        assert result.is_well_signed is True
        assert result.is_verified == signal

    @pytest.mark.parametrize("flag, expected", [
        (True, VerificationStatus.VERIFIED),
        (False, VerificationStatus.UNVERIFIED),
        (None, VerificationStatus.UNKNOWN),
    ])
    def test_bool_signal_is_mapped(self, profile_message, key_pair, flag, expected):
        signed = sign_message(profile_message, key_pair[1])
        assert verify_message(signed, key_pair[0], flag).is_verified == expected

    def test_wrong_key(self, profile_message, key_pair, other_key_pair):
        signed = sign_message(profile_message, key_pair[1])
        result = verify_message(signed, other_key_pair[0], VerificationStatus.VERIFIED)
        assert result.is_well_signed is False
        assert result.is_verified == VerificationStatus.UNVERIFIED

    @pytest.mark.parametrize("public_key", [None, 123, b"\x00" * 32])
    def test_public_key_of_wrong_type(self, profile_message, key_pair, public_key):
        signed = sign_message(profile_message, key_pair[1])
        result = verify_message(signed, public_key, VerificationStatus.VERIFIED)
        assert result.is_well_signed is False
        assert result.is_verified == VerificationStatus.UNVERIFIED

    @pytest.mark.parametrize("field, value", [
        ("name", "Example Corq"),
        ("date", "2024-03-16"),
        ("key_location", "FB:examplecorq"),
    ])
    def test_tampered_field(self, profile_message, key_pair, field, value):
        signed = sign_message(profile_message, key_pair[1])
        tampered = SignedMessage(
            message=profile_message.model_copy(update={field: value}),
            signature=signed.signature,
        )
        result = verify_message(tampered, key_pair[0], True)
        assert result.is_well_signed is False
        assert result.is_verified == VerificationStatus.UNVERIFIED

    def test_tampered_signature(self, profile_message, key_pair):
        signed = sign_message(profile_message, key_pair[1])
        raw = bytearray(base64.b64decode(signed.signature))
        raw[0] ^= 0x01
        tampered = signed.model_copy(update={"signature": base64.b64encode(bytes(raw)).decode()})
        assert verify_message(tampered, key_pair[0]).is_well_signed is False

    @pytest.mark.parametrize("public_key", [
        "",
        "QRSign",
        "ABCD" * 11 + "!",
        base64.b64encode(bytes(16)).decode(),
    ])
    def test_malformed_public_key(self, profile_message, key_pair, public_key):
        signed = sign_message(profile_message, key_pair[1])
        result = verify_message(signed, public_key, VerificationStatus.VERIFIED)
        assert result.is_well_signed is False
        assert result.is_verified == VerificationStatus.UNVERIFIED

    def test_malformed_signature(self, profile_message, key_pair):
        signed = SignedMessage(message=profile_message, signature="!" * 88)
        assert verify_message(signed, key_pair[0]).is_well_signed is False

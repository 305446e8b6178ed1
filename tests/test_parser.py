"""Unit tests for signed message parsing."""

import pytest

from qrsign.core.parser import parse_message, classify_key_location, SIGNATURE_LENGTH
from qrsign.exceptions import MalformedMessageError
from qrsign.models.message import KeyType


SIGNATURE = "A" * 86 + "=="


def payload(name="Example Corp", date="2024-03-15", location="FB:examplecorp", signature=SIGNATURE) -> str:
    return "\n".join([name, date, location, signature])


class TestParseValidMessages:
    """Well-formed payloads parse and keep every field verbatim."""

    def test_named_profile_message(self):
        signed = parse_message(payload())
        assert signed.message.name == "Example Corp"
        assert signed.message.date == "2024-03-15"
        assert signed.message.key_type == KeyType.NAMED_PROFILE
        assert signed.message.key_location == "FB:examplecorp"
        assert signed.signature == SIGNATURE

    def test_url_message(self):
        signed = parse_message(payload(location="https://example.com/keys"))
        assert signed.message.key_type == KeyType.URL
        assert signed.message.key_location == "https://example.com/keys"

    def test_plain_http_prefix_is_url(self):
        signed = parse_message(payload(location="http://example.com"))
        assert signed.message.key_type == KeyType.URL

    def test_fields_are_not_trimmed(self):
        signed = parse_message(payload(name="  Example Corp  ", location="FB: examplecorp "))
        assert signed.message.name == "  Example Corp  "
        assert signed.message.key_location == "FB: examplecorp "

    def test_empty_name_is_accepted(self):
        signed = parse_message(payload(name=""))
        assert signed.message.name == ""

    def test_date_is_shape_checked_only(self):
        signed = parse_message(payload(date="2024-13-99"))
        assert signed.message.date == "2024-13-99"

    def test_signature_content_is_not_checked(self):
        odd_signature = "!" * SIGNATURE_LENGTH
        signed = parse_message(payload(signature=odd_signature))
        assert signed.signature == odd_signature

    def test_profile_id_strips_prefix(self):
        signed = parse_message(payload(location="FB:examplecorp"))
        assert signed.message.profile_id == "examplecorp"

    def test_url_has_no_profile_id(self):
        signed = parse_message(payload(location="https://example.com"))
        assert signed.message.profile_id is None

    def test_to_payload_reproduces_input(self):
        raw = payload(name=" spaced ", location="https://example.com/a?b=c")
        assert parse_message(raw).to_payload() == raw


class TestParseFieldCount:
    """Payloads must have exactly four lines."""

    def test_three_fields(self):
        with pytest.raises(MalformedMessageError):
            parse_message("Example Corp\n2024-03-15\nFB:examplecorp")

    def test_five_fields(self):
        with pytest.raises(MalformedMessageError):
            parse_message(payload() + "\nextra")

    def test_trailing_newline_adds_a_field(self):
        with pytest.raises(MalformedMessageError):
            parse_message(payload() + "\n")

    def test_empty_text(self):
        with pytest.raises(MalformedMessageError):
            parse_message("")


class TestParseDate:
    """Date must look like YYYY-MM-DD."""

    @pytest.mark.parametrize("date", [
        "2024-3-15",
        "24-03-15",
        "2024/03/15",
        "2024-03-15 ",
        "2024-03-15\r",
        "15-03-2024",
        "",
        "２０２４-03-15",
    ])
    def test_bad_dates(self, date: str):
        with pytest.raises(MalformedMessageError, match="Date format"):
            parse_message(payload(date=date))

    def test_crlf_payload_fails_on_date(self):
        raw = "\r\n".join(["Example Corp", "2024-03-15", "FB:examplecorp", SIGNATURE])
        # the \r stays at the end of each field
        with pytest.raises(MalformedMessageError):
            parse_message(raw)


class TestParseKeyLocation:
    """Key location prefix decides the key type."""

    @pytest.mark.parametrize("location", [
        "ftp://example.com",
        "fb:examplecorp",
        "FB-examplecorp",
        "HTTP://example.com",
        " https://example.com",
        "",
    ])
    def test_unknown_prefix(self, location: str):
        with pytest.raises(MalformedMessageError, match="Key type"):
            parse_message(payload(location=location))

    def test_classify(self):
        assert classify_key_location("https://example.com") == KeyType.URL
        assert classify_key_location("FB:page") == KeyType.NAMED_PROFILE


class TestParseSignature:
    """Signature must be exactly 88 characters."""

    @pytest.mark.parametrize("length", [0, 44, 87, 89, 128])
    def test_wrong_length(self, length: int):
        with pytest.raises(MalformedMessageError, match="Signature"):
            parse_message(payload(signature="A" * length))

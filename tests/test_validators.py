"""
Tests for input validation functions.

Tests cover:
- parse_body() - valid JSON, invalid JSON, None, base64, non-object JSON
- validate_text() - missing, blank, non-string, max length, unicode
- resolve_option() - defaults for absent values, pass-through otherwise
"""
import base64
import json

import pytest

from speech_lambda.services.validators import (
    ValidationError,
    parse_body,
    resolve_option,
    text_length,
    validate_text,
)


class TestParseBody:
    """Tests for parse_body() function."""

    def test_valid_object(self):
        assert parse_body('{"text": "Hi"}') == {"text": "Hi"}

    def test_bytes_body(self):
        assert parse_body(b'{"text": "Hi"}') == {"text": "Hi"}

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_body("{text: Hi}")
        assert exc_info.value.code == "INVALID_JSON"
        assert exc_info.value.message == "Invalid JSON in request body"

    def test_none_body(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_body(None)
        assert exc_info.value.code == "INVALID_JSON"

    def test_empty_body(self):
        with pytest.raises(ValidationError):
            parse_body("")

    def test_base64_body(self):
        encoded = base64.b64encode(json.dumps({"text": "Merhaba"}).encode()).decode()
        assert parse_body(encoded, is_base64=True) == {"text": "Merhaba"}

    def test_bad_base64_is_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_body("not base64!!", is_base64=True)
        assert exc_info.value.code == "INVALID_JSON"

    @pytest.mark.parametrize("body", ["42", '"text"', "[1, 2]", "true"])
    def test_non_object_json_yields_empty_payload(self, body):
        assert parse_body(body) == {}

    def test_null_json_is_unreadable(self):
        with pytest.raises(TypeError):
            parse_body("null")


class TestValidateText:
    """Tests for validate_text() function."""

    def test_valid_text(self):
        assert validate_text("Hello, world!") == "Hello, world!"

    def test_text_returned_untrimmed(self):
        assert validate_text("  Hello  ") == "  Hello  "

    def test_unicode_text(self):
        text = "Grüße aus München, ça va? こんにちは"
        assert validate_text(text) == text

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t", 0, 0.0, False])
    def test_text_required(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_text(value)
        assert exc_info.value.code == "TEXT_REQUIRED"
        assert exc_info.value.message == "Text is required"

    @pytest.mark.parametrize("value", [42, ["a"], {"a": 1}, [], True])
    def test_non_string_text_is_type_error(self, value):
        with pytest.raises(TypeError, match="text must be a string"):
            validate_text(value)

    def test_text_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_text("a" * 3001)
        assert exc_info.value.code == "TEXT_TOO_LONG"
        assert exc_info.value.message == "Text is too long. Maximum 3000 characters allowed."

    def test_text_at_max_length(self):
        assert len(validate_text("a" * 3000)) == 3000

    def test_astral_characters_count_twice(self):
        assert text_length("\U0001F600") == 2
        assert len(validate_text("\U0001F600" * 1500)) == 1500
        with pytest.raises(ValidationError) as exc_info:
            validate_text("\U0001F600" * 1501)
        assert exc_info.value.code == "TEXT_TOO_LONG"

    def test_padding_counts_toward_length(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_text("a" * 2999 + "  ")
        assert exc_info.value.code == "TEXT_TOO_LONG"

    def test_custom_max_length(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_text("hello", max_length=3)
        assert "Maximum 3 characters" in exc_info.value.message

    def test_blank_check_precedes_length_check(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_text(" " * 5000)
        assert exc_info.value.code == "TEXT_REQUIRED"


class TestResolveOption:
    """Tests for resolve_option() function."""

    def test_value_kept(self):
        assert resolve_option("Matthew", "Joanna") == "Matthew"

    @pytest.mark.parametrize("value", [None, "", 0, False])
    def test_default_used(self, value):
        assert resolve_option(value, "Joanna") == "Joanna"

    @pytest.mark.parametrize("value", [12, ["de-DE"], {"id": "Vicki"}])
    def test_present_value_passed_through(self, value):
        assert resolve_option(value, "Joanna") == value

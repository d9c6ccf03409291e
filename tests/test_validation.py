"""Tests for validation.py module."""

import pytest

from kubeseal_api.exceptions import SecretValidationError
from kubeseal_api.models import SealRequest
from kubeseal_api.validation import (
    ERR_DATA_KEY,
    ERR_NAME,
    ERR_NAMESPACE,
    is_rfc1123_label,
    is_valid_data_key,
    validate_data_keys,
    validate_seal_request,
)


class TestRfc1123Label:
    """Tests for RFC 1123 label matching."""

    @pytest.mark.parametrize("value", ["abc", "123", "abc123", "abc-123", "a", "a-b-c", "a" * 63])
    def test_valid_labels(self, value):
        """Test lowercase alphanumerics and inner hyphens are accepted."""
        assert is_rfc1123_label(value) is True

    def test_empty_label(self):
        """Test empty string is rejected."""
        assert is_rfc1123_label("") is False

    def test_label_too_long(self):
        """Test labels longer than 63 characters are rejected."""
        assert is_rfc1123_label("a" * 64) is False
        assert is_rfc1123_label("very-loooooooooooooooooooooooooooooooooooooooooooooooooooooooong-name") is False

    def test_uppercase(self):
        """Test uppercase letters are rejected."""
        assert is_rfc1123_label("Name") is False
        assert is_rfc1123_label("UPPERCASE") is False

    def test_underscore(self):
        """Test underscores are rejected."""
        assert is_rfc1123_label("name_with_underscores") is False

    def test_leading_and_trailing_hyphen(self):
        """Test a hyphen at either end is rejected."""
        assert is_rfc1123_label("-abc") is False
        assert is_rfc1123_label("abc-") is False
        assert is_rfc1123_label("-") is False

    def test_path_and_dot(self):
        """Test slashes and dots are rejected."""
        assert is_rfc1123_label("/abc") is False
        assert is_rfc1123_label("my.secret") is False

    def test_trailing_newline(self):
        """Test a trailing newline does not slip past the end anchor."""
        assert is_rfc1123_label("abc\n") is False


class TestDataKey:
    """Tests for secret data key matching."""

    @pytest.mark.parametrize("key", ["testfile.txt", ".secret-file", "UPPERCASE_NAME", "a", "..", "tls.crt"])
    def test_valid_keys(self, key):
        """Test letters, digits, dots, underscores and hyphens are accepted."""
        assert is_valid_data_key(key) is True

    def test_empty_key(self):
        """Test empty key is rejected."""
        assert is_valid_data_key("") is False

    def test_key_with_path(self):
        """Test keys containing slashes are rejected."""
        assert is_valid_data_key("file/with/path.txt") is False

    def test_key_with_space(self):
        """Test keys containing whitespace are rejected."""
        assert is_valid_data_key("my key") is False
        assert is_valid_data_key("key\n") is False


class TestValidateSealRequest:
    """Tests for whole-request validation."""

    def _request(self, **overrides):
        fields = {"name": "my-secret", "namespace": "default", "certificate": "cert", "data": {"password": "x"}}
        fields.update(overrides)
        return SealRequest(**fields)

    def test_valid_request(self):
        """Test a compliant request passes."""
        validate_seal_request(self._request())

    def test_empty_data_is_valid(self):
        """Test a request without data passes."""
        validate_seal_request(self._request(data={}))

    def test_invalid_name(self):
        """Test non-compliant name raises with the name message."""
        with pytest.raises(SecretValidationError) as exc_info:
            validate_seal_request(self._request(name="My_Secret"))

        assert exc_info.value.message == ERR_NAME
        assert exc_info.value.status_code == 400

    def test_invalid_namespace(self):
        """Test non-compliant namespace raises with the namespace message."""
        with pytest.raises(SecretValidationError) as exc_info:
            validate_seal_request(self._request(namespace="Default"))

        assert exc_info.value.message == ERR_NAMESPACE

    def test_invalid_data_key(self):
        """Test non-compliant data key raises with the data key message."""
        with pytest.raises(SecretValidationError) as exc_info:
            validate_seal_request(self._request(data={"good": "x", "bad/key": "x"}))

        assert exc_info.value.message == ERR_DATA_KEY

    def test_name_checked_before_namespace_and_keys(self):
        """Test the name is reported when every field is invalid."""
        with pytest.raises(SecretValidationError) as exc_info:
            validate_seal_request(self._request(name="-", namespace="-", data={"": "x"}))

        assert exc_info.value.message == ERR_NAME

    def test_namespace_checked_before_keys(self):
        """Test the namespace is reported before data keys."""
        with pytest.raises(SecretValidationError) as exc_info:
            validate_seal_request(self._request(namespace="NS", data={"bad key": "x"}))

        assert exc_info.value.message == ERR_NAMESPACE

    def test_validate_data_keys_accepts_any_iterable(self):
        """Test data keys can be validated from a plain list."""
        validate_data_keys(["a", "b.c"])
        with pytest.raises(SecretValidationError):
            validate_data_keys(["a", "b c"])

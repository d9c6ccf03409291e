"""Identifier validation for seal requests.

The patterns are compiled once at import time and only ever read, so a
single copy is shared by every request handled by the server.
"""

import re
from collections.abc import Iterable

from kubeseal_api.exceptions import SecretValidationError
from kubeseal_api.models import SealRequest

# RFC 1123 label: 1-63 lowercase alphanumerics or '-', alphanumeric at both ends
RFC1123_LABEL_PATTERN = re.compile(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?")
# Keys of a Secret's data map end up as file names when the secret is mounted
SECRET_DATA_KEY_PATTERN = re.compile(r"[a-zA-Z0-9._-]+")

ERR_NAME = "Secret name is not RFC1123 compliant."
ERR_NAMESPACE = "Secret namespace is not RFC1123 compliant."
ERR_DATA_KEY = "Secret data keys must consist of alphanumeric characters, '-', '_' or '.'."


def is_rfc1123_label(value: str) -> bool:
    """Check whether a value is a valid RFC 1123 label.

    Args:
        value: The string to check.

    Returns:
        True if the value is 1-63 characters of lowercase alphanumerics
        and hyphens that neither starts nor ends with a hyphen.

    """
    return RFC1123_LABEL_PATTERN.fullmatch(value) is not None


def is_valid_data_key(key: str) -> bool:
    """Check whether a value may be used as a key of the secret data map."""
    return SECRET_DATA_KEY_PATTERN.fullmatch(key) is not None


def validate_name(name: str) -> None:
    """Validate the secret name.

    Raises:
        SecretValidationError: If the name is not an RFC 1123 label.

    """
    if not is_rfc1123_label(name):
        raise SecretValidationError(ERR_NAME)


def validate_namespace(namespace: str) -> None:
    """Validate the secret namespace.

    Raises:
        SecretValidationError: If the namespace is not an RFC 1123 label.

    """
    if not is_rfc1123_label(namespace):
        raise SecretValidationError(ERR_NAMESPACE)


def validate_data_keys(keys: Iterable[str]) -> None:
    """Validate every key of the secret data map.

    Stops at the first offending key.

    Raises:
        SecretValidationError: If any key contains a disallowed character or is empty.

    """
    for key in keys:
        if not is_valid_data_key(key):
            raise SecretValidationError(ERR_DATA_KEY)


def validate_seal_request(request: SealRequest) -> None:
    """Validate a seal request: name, then namespace, then data keys.

    Args:
        request: The incoming seal request.

    Raises:
        SecretValidationError: On the first rule the request violates.

    """
    validate_name(request.name)
    validate_namespace(request.namespace)
    validate_data_keys(request.data.keys())

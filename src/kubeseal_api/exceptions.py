"""Custom exceptions for kubeseal-api.

This module defines the exception hierarchy used by the sealing pipeline.
Every exception carries the HTTP status code it is rendered with, so the
web layer can translate any of them with a single handler.
"""


class KubesealApiError(Exception):
    """Base exception for all kubeseal-api errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all pipeline errors with a single
    except clause if desired.

    Attributes:
        status_code: HTTP status code used when the error reaches a client.

    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """Initialize the error with the message returned to the client.

        Args:
            message: Human-readable description, logged and returned verbatim.

        """
        super().__init__(message)
        self.message = message


class SecretValidationError(KubesealApiError):
    """Raised when a seal request carries a non-compliant identifier.

    This can occur when:
    - The secret name is not an RFC 1123 label
    - The namespace is not an RFC 1123 label
    - A data key contains characters outside [A-Za-z0-9._-]
    """

    status_code = 400


class StagingError(KubesealApiError):
    """Raised when a temporary artifact cannot be created or written.

    Typical causes are permission problems, a full disk or a path
    that exceeds the filesystem limits.
    """


class InvocationLaunchError(KubesealApiError):
    """Raised when the kubeseal process cannot be started at all.

    This can occur when:
    - The binary is not installed
    - The binary is not in the system PATH
    - The binary is not executable
    """


class SealingFailedError(KubesealApiError):
    """Raised when kubeseal ran but reported a failure.

    The message is the diagnostic text the tool wrote to stderr.
    """

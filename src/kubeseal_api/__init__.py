"""kubeseal-api: HTTP service for sealing Kubernetes secrets with kubeseal.

This package accepts plaintext secrets over HTTP, renders them as
Kubernetes Secret manifests and seals them with the kubeseal binary,
using a certificate supplied with each request.

Example usage:
    from kubeseal_api import SealRequest, SealRequestHandler, SubprocessInvoker

    handler = SealRequestHandler(SubprocessInvoker())
    sealed = handler.seal(
        SealRequest(name="my-secret", namespace="default", certificate=pem, data={"password": "hunter2"})
    )
"""

__version__ = "0.1.0"

from kubeseal_api.app import create_app
from kubeseal_api.config import Settings
from kubeseal_api.exceptions import (
    InvocationLaunchError,
    KubesealApiError,
    SealingFailedError,
    SecretValidationError,
    StagingError,
)
from kubeseal_api.handler import SealRequestHandler
from kubeseal_api.invoker import SealingInvoker, SubprocessInvoker
from kubeseal_api.manifest import build_secret_manifest
from kubeseal_api.models import SealRequest

__all__ = [
    # Version
    "__version__",
    # Application
    "create_app",
    "Settings",
    # Pipeline
    "SealRequest",
    "SealRequestHandler",
    "SealingInvoker",
    "SubprocessInvoker",
    "build_secret_manifest",
    # Exceptions
    "KubesealApiError",
    "SecretValidationError",
    "StagingError",
    "InvocationLaunchError",
    "SealingFailedError",
]

"""Seal request handling.

This module provides the SealRequestHandler class, which turns a
plaintext request into a sealed document by coordinating the
validation, manifest, staging and invocation modules.
"""

from pathlib import Path

from kubeseal_api import console
from kubeseal_api.exceptions import KubesealApiError
from kubeseal_api.invoker import SealingInvoker, build_seal_command, interpret_result
from kubeseal_api.manifest import build_secret_manifest
from kubeseal_api.models import SealRequest
from kubeseal_api.staging import staged_artifacts
from kubeseal_api.validation import validate_seal_request


class SealRequestHandler:
    """Seals secrets with kubeseal, one request at a time.

    The handler holds no per-request state, so a single instance is
    shared by all concurrently running requests.

    Attributes:
        invoker: Runs the kubeseal command.
        binary: Path to the kubeseal binary.
        staging_dir: Parent directory for staged artifacts, or None for the system default.
        output_format: Optional kubeseal output format.

    """

    def __init__(
        self,
        invoker: SealingInvoker,
        *,
        binary: str = "kubeseal",
        staging_dir: Path | None = None,
        output_format: str | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            invoker: Runs the kubeseal command.
            binary: Path to the kubeseal binary.
            staging_dir: Parent directory for staged artifacts.
            output_format: Optional kubeseal output format.

        """
        self.invoker = invoker
        self.binary = binary
        self.staging_dir = staging_dir
        self.output_format = output_format

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"SealRequestHandler(binary={self.binary!r}, invoker={self.invoker!r})"

    def seal(self, request: SealRequest) -> str:
        """Seal a plaintext secret.

        Args:
            request: The secret to seal.

        Returns:
            The sealed document printed by kubeseal.

        Raises:
            SecretValidationError: If the name, namespace or a data key is not compliant.
            StagingError: If the temporary artifacts cannot be written.
            InvocationLaunchError: If kubeseal cannot be started.
            SealingFailedError: If kubeseal reports a failure.

        """
        try:
            validate_seal_request(request)
            return self._seal_validated(request)
        except KubesealApiError as err:
            console.error(f"{err.status_code} - {console.literal(err.message)}")
            raise

    def _seal_validated(self, request: SealRequest) -> str:
        target = f"{request.namespace}/{request.name}"
        console.action(f"Sealing {console.highlight(target)}")

        manifest = build_secret_manifest(request.name, request.namespace, request.data)

        with staged_artifacts(
            request.namespace,
            request.name,
            manifest,
            request.certificate,
            base_dir=self.staging_dir,
        ) as artifacts:
            cmd = build_seal_command(self.binary, artifacts.certificate_path, self.output_format)
            result = self.invoker.invoke(cmd, artifacts.manifest)

        sealed = interpret_result(result)
        console.success(f"Secret {console.highlight(target)} sealed successfully")
        return sealed

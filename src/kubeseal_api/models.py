"""Data models for kubeseal-api.

This module provides the request model accepted by the HTTP surface and
the small value types passed between the pipeline stages.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import IO, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class SealRequest(BaseModel):
    """A plaintext secret to be sealed.

    Attributes:
        name: The name of the secret object.
        namespace: The Kubernetes namespace for the secret.
        certificate: PEM-encoded public certificate to seal with.
        data: Plaintext secret contents, key to literal value.

    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    namespace: str
    certificate: str
    data: dict[str, str] = Field(default_factory=dict)


class InvocationResult(NamedTuple):
    """Outcome of a completed kubeseal process.

    Attributes:
        returncode: The process exit status.
        stdout: Raw bytes written to standard output.
        stderr: Raw bytes written to standard error.

    """

    returncode: int
    stdout: bytes
    stderr: bytes


@dataclass(frozen=True, slots=True)
class StagedArtifacts:
    """Temporary files staged for a single kubeseal invocation.

    Attributes:
        directory: Request-scoped directory holding both artifacts.
        manifest_path: Path of the rendered Secret manifest.
        certificate_path: Path of the raw certificate.
        manifest: Open read handle on the manifest, fed to kubeseal's stdin.

    """

    directory: Path
    manifest_path: Path
    certificate_path: Path
    manifest: IO[bytes]

"""Temporary artifact staging for kubeseal invocations.

kubeseal reads the certificate from a path and the manifest from stdin,
so both have to exist on disk for the duration of a single invocation.
Each request gets its own directory, which is removed once the
invocation is over.
"""

import contextlib
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import IO

from icecream import ic

from kubeseal_api import console
from kubeseal_api.exceptions import StagingError
from kubeseal_api.models import StagedArtifacts

_STAGING_PREFIX = "kubeseal-api-"

# Error message constants
_ERR_CREATE_DIR = "failed to create staging directory: {reason}"
_ERR_OPEN_MANIFEST = "failed to open secret manifest file: {reason}"
_ERR_WRITE_MANIFEST = "failed to write secret manifest: {reason}"
_ERR_WRITE_CERTIFICATE = "failed to write certificate file: {reason}"


def manifest_filename(namespace: str, name: str) -> str:
    """Return the file name of the staged manifest."""
    return f"{namespace}-{name}.yaml"


def certificate_filename(namespace: str, name: str) -> str:
    """Return the file name of the staged certificate."""
    return f"{namespace}-{name}-cert.pem"


def _write_text(path: Path, content: str, error_template: str) -> None:
    """Write text to a path, replacing any previous content.

    Args:
        path: Destination file.
        content: Text to write.
        error_template: Message template used if the write fails.

    Raises:
        StagingError: If the file cannot be opened or written.

    """
    try:
        with path.open("w", encoding="utf-8") as f:
            f.write(content)
    except OSError as err:
        raise StagingError(error_template.format(reason=err)) from err


def stage_manifest(directory: Path, namespace: str, name: str, manifest: str) -> tuple[Path, IO[bytes]]:
    """Write the manifest and reopen it for reading.

    Args:
        directory: Directory to stage the manifest in.
        namespace: The Kubernetes namespace for the secret.
        name: The name of the secret.
        manifest: Rendered manifest text.

    Returns:
        The manifest path and an open binary read handle on it.

    Raises:
        StagingError: If the manifest cannot be written or reopened.

    """
    path = directory / manifest_filename(namespace, name)
    _write_text(path, manifest, _ERR_WRITE_MANIFEST)
    try:
        handle = path.open("rb")
    except OSError as err:
        raise StagingError(_ERR_OPEN_MANIFEST.format(reason=err)) from err
    return path, handle


def stage_certificate(directory: Path, namespace: str, name: str, certificate: str) -> Path:
    """Write the raw certificate next to the manifest.

    Args:
        directory: Directory to stage the certificate in.
        namespace: The Kubernetes namespace for the secret.
        name: The name of the secret.
        certificate: PEM-encoded certificate text.

    Returns:
        The certificate path.

    Raises:
        StagingError: If the certificate cannot be written.

    """
    path = directory / certificate_filename(namespace, name)
    _write_text(path, certificate, _ERR_WRITE_CERTIFICATE)
    return path


@contextlib.contextmanager
def staged_artifacts(
    namespace: str,
    name: str,
    manifest: str,
    certificate: str,
    base_dir: Path | None = None,
) -> Generator[StagedArtifacts, None, None]:
    """Stage the manifest and certificate for the lifetime of the context.

    A fresh directory is created for every call so concurrent requests for
    the same secret never share files. The directory and everything in it
    is removed on exit, whether or not staging or sealing succeeded.

    Args:
        namespace: The Kubernetes namespace for the secret.
        name: The name of the secret.
        manifest: Rendered manifest text.
        certificate: PEM-encoded certificate text.
        base_dir: Parent directory for the staging directory; the system
            temporary directory when None.

    Yields:
        The staged artifacts.

    Raises:
        StagingError: If the directory or either artifact cannot be created.

    """
    try:
        directory = Path(tempfile.mkdtemp(prefix=_STAGING_PREFIX, dir=base_dir))
    except OSError as err:
        raise StagingError(_ERR_CREATE_DIR.format(reason=err)) from err
    ic(directory)

    handle: IO[bytes] | None = None
    try:
        manifest_path, handle = stage_manifest(directory, namespace, name, manifest)
        certificate_path = stage_certificate(directory, namespace, name, certificate)
        yield StagedArtifacts(
            directory=directory,
            manifest_path=manifest_path,
            certificate_path=certificate_path,
            manifest=handle,
        )
    finally:
        if handle is not None:
            handle.close()
        try:
            shutil.rmtree(directory)
        except OSError as err:
            # Suppress removal errors to not mask the original exception
            console.warning(
                f"Failed to remove staging directory {console.literal(str(directory))}: {console.literal(str(err))}"
            )

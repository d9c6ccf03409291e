"""kubeseal process invocation.

The pipeline only talks to kubeseal through the ``SealingInvoker``
protocol, so tests and alternative backends can replace the subprocess
without touching the request handling.
"""

import shutil
import subprocess
from pathlib import Path
from typing import IO, Protocol

from icecream import ic

from kubeseal_api.exceptions import InvocationLaunchError, SealingFailedError
from kubeseal_api.models import InvocationResult

# CLI flag constants for kubeseal commands
_CERT_FLAG = "--cert"
_ALLOW_EMPTY_DATA = "--allow-empty-data"

_UNKNOWN_ERROR = "unknown error"

# Error message constants
_ERR_LAUNCH = "failed to run kubeseal command: {reason}"
_ERR_TIMEOUT = "kubeseal did not finish within {timeout} seconds"


class SealingInvoker(Protocol):
    """Runs a sealing command against a manifest stream."""

    def invoke(self, args: list[str], stdin: IO[bytes]) -> InvocationResult:
        """Run the command and capture its output.

        Args:
            args: The full command line, executable first.
            stdin: Readable stream passed to the process as standard input.

        Returns:
            The exit status and captured output of the finished process.

        Raises:
            InvocationLaunchError: If the process cannot be started.

        """
        ...


class SubprocessInvoker:
    """Runs kubeseal as a child process.

    Attributes:
        timeout: Seconds to wait for the process, or None to wait forever.

    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the invoker.

        Args:
            timeout: Seconds to wait for the process, or None to wait forever.

        """
        self.timeout = timeout

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"SubprocessInvoker(timeout={self.timeout!r})"

    def invoke(self, args: list[str], stdin: IO[bytes]) -> InvocationResult:
        """Run the command, feeding ``stdin`` and capturing stdout and stderr.

        Raises:
            InvocationLaunchError: If the executable is missing or cannot be spawned.
            SealingFailedError: If the process exceeds the configured timeout.

        """
        ic(args)
        try:
            completed = subprocess.run(
                args,
                stdin=stdin,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as err:
            raise SealingFailedError(_ERR_TIMEOUT.format(timeout=self.timeout)) from err
        except OSError as err:
            raise InvocationLaunchError(_ERR_LAUNCH.format(reason=err)) from err

        return InvocationResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


def resolve_binary(binary: str) -> str:
    """Resolve the kubeseal executable against PATH.

    Args:
        binary: Executable name or path.

    Returns:
        The absolute path if the executable was found, otherwise the
        name unchanged so a missing binary surfaces as a launch error.

    """
    return shutil.which(binary) or binary


def build_seal_command(binary: str, certificate_path: Path, output_format: str | None = None) -> list[str]:
    """Build the kubeseal command line for sealing a manifest read from stdin.

    Args:
        binary: Path to the kubeseal binary.
        certificate_path: Path to the staged certificate.
        output_format: Optional value for kubeseal's ``--format`` flag.

    Returns:
        List of command arguments ready for subprocess execution.

    """
    cmd: list[str] = [binary, _CERT_FLAG, str(certificate_path), _ALLOW_EMPTY_DATA]
    if output_format:
        cmd.append(f"--format={output_format}")
    return cmd


def interpret_result(result: InvocationResult) -> str:
    """Translate a finished kubeseal run into the sealed document.

    kubeseal is trusted to print valid UTF-8 on success; if it does not,
    the ``UnicodeDecodeError`` is left to propagate as an internal fault.

    Args:
        result: The captured process outcome.

    Returns:
        The sealed document printed by kubeseal.

    Raises:
        SealingFailedError: If kubeseal exited with a non-zero status.
        UnicodeDecodeError: If a successful run printed invalid UTF-8.

    """
    if result.returncode == 0:
        return result.stdout.decode("utf-8")

    try:
        message = result.stderr.decode("utf-8")
    except UnicodeDecodeError:
        message = _UNKNOWN_ERROR
    raise SealingFailedError(message)

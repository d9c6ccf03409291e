"""Shared test fixtures for kubeseal-api tests."""

from pathlib import Path
from typing import IO
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from kubeseal_api.app import create_app
from kubeseal_api.config import Settings
from kubeseal_api.handler import SealRequestHandler
from kubeseal_api.models import InvocationResult

SEALED_SECRET_JSON = """{
  "kind": "SealedSecret",
  "apiVersion": "bitnami.com/v1alpha1",
  "metadata": {
    "name": "my-secret",
    "namespace": "default"
  },
  "spec": {
    "encryptedData": {
      "password": "AgBy8hCi..."
    }
  }
}
"""


class FakeInvoker:
    """SealingInvoker test double that records what kubeseal would have received.

    Staged files are removed once the invocation returns, so their contents
    are captured at call time.
    """

    def __init__(self, result: InvocationResult | None = None, error: Exception | None = None) -> None:
        self.result = result or InvocationResult(returncode=0, stdout=SEALED_SECRET_JSON.encode(), stderr=b"")
        self.error = error
        self.calls: list[list[str]] = []
        self.manifests: list[str] = []
        self.certificates: list[str] = []

    def invoke(self, args: list[str], stdin: IO[bytes]) -> InvocationResult:
        self.calls.append(args)
        self.manifests.append(stdin.read().decode())
        self.certificates.append(Path(args[args.index("--cert") + 1]).read_text())
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_invoker():
    """Invoker that succeeds with a canned SealedSecret."""
    return FakeInvoker()


@pytest.fixture
def staging_dir(tmp_path):
    """Empty parent directory for staged artifacts."""
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def settings(staging_dir):
    """Settings pointing at a binary that is never on PATH."""
    return Settings(
        log_level="debug",
        kubeseal_binary="kubeseal-not-installed",
        staging_dir=staging_dir,
    )


@pytest.fixture
def seal_handler(fake_invoker, staging_dir):
    """SealRequestHandler wired to the fake invoker."""
    return SealRequestHandler(fake_invoker, binary="kubeseal", staging_dir=staging_dir)


@pytest.fixture
def client(settings, fake_invoker):
    """Test client for an application using the fake invoker."""
    return TestClient(create_app(settings, invoker=fake_invoker))


@pytest.fixture
def sample_certificate():
    """Sample PEM certificate text."""
    return """-----BEGIN CERTIFICATE-----
MIIErTCCApWgAwIBAgIQBekz48i8NbrzIpIrLMIULTANBgkqhkiG9w0BAQsFADAA
MB4XDTI0MDEwMTAwMDAwMFoXDTM0MDEwMTAwMDAwMFowADCCAiIwDQYJKoZIhvcN
-----END CERTIFICATE-----
"""


@pytest.fixture
def seal_payload(sample_certificate):
    """Valid JSON body for POST /secrets/seal."""
    return {
        "name": "my-secret",
        "namespace": "default",
        "certificate": sample_certificate,
        "data": {"password": "hunter2"},
    }


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for command execution."""
    with patch("subprocess.run") as mock:
        mock.return_value = MagicMock(returncode=0, stdout=b"", stderr=b"")
        yield mock

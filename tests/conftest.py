import logging
import threading
from types import SimpleNamespace

import pytest
from botocore.credentials import Credentials
from botocore.hooks import HierarchicalEmitter

# ─────────────────────────────────────────────────────────────
# 1. Isolate every test from the caller's AWS / awscreds environment
# ─────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for var in (
        "AWSCREDS_CONFIG",
        "AWSCREDS_REFRESH_PERIOD_SECONDS",
        "AWSCREDS_STS_REGIONAL_ENDPOINTS",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "AWS_PROFILE",
        "AWS_SESSION_TOKEN",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAENVIRONMENT")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "environment-secret")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws_credentials"))
    # Keep .env files of the working directory out of Settings.
    monkeypatch.chdir(tmp_path)

# ─────────────────────────────────────────────────────────────
# 2. Credentials and diagnostics
# ─────────────────────────────────────────────────────────────


@pytest.fixture
def make_credentials():
    """Build static botocore credentials."""
    def _make(access_key="AKIATEST", secret_key="test-secret", token=None):
        return Credentials(access_key, secret_key, token)
    return _make


@pytest.fixture
def credentials_factory(make_credentials):
    """A factory returning a new key pair on every call: AKIA1, AKIA2, ..."""
    class Factory:
        def __init__(self):
            self.calls = 0

        def __call__(self):
            self.calls += 1
            return make_credentials(f"AKIA{self.calls}", f"secret-{self.calls}")

    return Factory()


@pytest.fixture
def diagnostics(caplog):
    """Logger used as the diagnostics sink, with its records captured."""
    caplog.set_level(logging.DEBUG, logger="awscreds.tests")
    return logging.getLogger("awscreds.tests")


@pytest.fixture
def stop_event():
    return threading.Event()

# ─────────────────────────────────────────────────────────────
# 3. Clients and request signers
# ─────────────────────────────────────────────────────────────


@pytest.fixture
def fake_client():
    """Build objects shaped like a botocore client, with a real event emitter."""
    def _make():
        return SimpleNamespace(meta=SimpleNamespace(events=HierarchicalEmitter()))
    return _make


@pytest.fixture
def fake_signer(make_credentials):
    """Build objects shaped like botocore's RequestSigner."""
    def _make():
        return SimpleNamespace(_credentials=make_credentials("AKIADEFAULT", "default-secret"))
    return _make


@pytest.fixture
def sign_request():
    """Fire the pre-signing event the way botocore's RequestSigner does."""
    def _sign(client, signer, operation="dynamodb.ListTables"):
        client.meta.events.emit(f"before-sign.{operation}", request_signer=signer)
        return signer
    return _sign

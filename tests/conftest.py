"""Pytest fixtures for the Daraja client tests."""

import datetime
import json

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from mpesa_client.integrations.contracts.interfaces import Credentials


class FakeDaraja:
    """httpx transport standing in for the Daraja API."""

    def __init__(self, token_status: int = 200, post_status: int = 200, post_body=None, post_error=None):
        self.token_status = token_status
        self.post_status = post_status
        self.post_body = post_body
        self.post_error = post_error
        self.requests = []

    @property
    def token_requests(self):
        return [r for r in self.requests if r.url.path == "/oauth/v1/generate"]

    @property
    def posts(self):
        return [r for r in self.requests if r.method == "POST"]

    def last_payload(self):
        return json.loads(self.posts[-1].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/oauth/v1/generate":
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status,
                    json={"errorCode": "401.002.01", "errorMessage": "Error Occurred - Invalid Access Token"},
                )
            return httpx.Response(200, json={"access_token": "test-token", "expires_in": "3599"})

        if self.post_error is not None:
            raise self.post_error(f"{self.post_error.__name__} on {request.url.path}", request=request)

        if self.post_status != 200:
            return httpx.Response(self.post_status, json=self.post_body or {})

        # Echo the payload back inside a provider-like envelope.
        body = {
            "ResponseCode": "0",
            "ResponseDescription": "Accept the service request successfully.",
            "CheckoutRequestID": "ws_CO_191220191020363925",
            "echo": json.loads(request.content),
        }
        return httpx.Response(200, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_daraja():
    return FakeDaraja()


@pytest.fixture
def sandbox_credentials():
    return Credentials(key="consumer-key", secret="consumer-secret", security_credential="initiator-pass")


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def certificate_path(tmp_path, rsa_private_key):
    """Self-signed PEM certificate wrapping the test public key."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "apicrypt.safaricom.co.ke")])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(rsa_private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(rsa_private_key, hashes.SHA256())
    )
    path = tmp_path / "ProductionCertificate.cer"
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


@pytest.fixture
def production_credentials(certificate_path):
    return Credentials(
        key="consumer-key",
        secret="consumer-secret",
        security_credential="initiator-pass",
        certificate_path=str(certificate_path),
    )


@pytest.fixture
def make_fake_daraja():
    return FakeDaraja

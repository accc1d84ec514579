"""
Security credential derivation.

B2C, B2B, balance, status and reversal requests carry a SecurityCredential:
the initiator password encrypted with the M-Pesa public certificate.

- production: RSA PKCS#1 v1.5 encryption of the initiator password with the
  certificate at ``certificate_path``, base64 encoded. The padding is
  randomized, so two derivations of the same password differ byte for byte.
- sandbox: the fixed sandbox credential, whatever was passed in.

Derivation starts as soon as the store is created inside a running event loop
(otherwise on the first ``await store.ready()``) and never raises from the
constructor. Failures are logged and surface as ``CredentialError`` from
``current()``.
"""
from __future__ import annotations

import asyncio
import base64
import logging
from pathlib import Path
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding

from mpesa_client.error_handler import CredentialError
from mpesa_client.integrations.contracts.interfaces import Credentials, Environment
from mpesa_client.utils.config_loader import DarajaConfig

logger = logging.getLogger(__name__)


def _load_public_key(pem_data: bytes):
    try:
        return x509.load_pem_x509_certificate(pem_data).public_key()
    except ValueError:
        return serialization.load_pem_public_key(pem_data)


def encrypt_security_credential(raw_credential: Optional[str], certificate_path: Optional[str]) -> str:
    if not raw_credential:
        raise CredentialError("A security credential is required in production.")
    if not certificate_path:
        raise CredentialError("certificate_path is required in production.")

    path = Path(certificate_path)
    if not path.exists():
        raise CredentialError(f"Certificate file not found: {path}")

    try:
        public_key = _load_public_key(path.read_bytes())
    except ValueError as exc:
        raise CredentialError(f"Could not load a public key from {path}: {exc}") from exc

    encrypted = public_key.encrypt(raw_credential.encode("utf-8"), padding.PKCS1v15())
    return base64.b64encode(encrypted).decode("utf-8")


class SecurityCredentialStore:
    def __init__(
        self,
        credentials: Credentials,
        environment: Environment,
        config: Optional[DarajaConfig] = None,
    ) -> None:
        self.environment = Environment(environment)
        self._config = config or DarajaConfig()
        self._raw = credentials.security_credential
        self._certificate_path = credentials.certificate_path

        # Stale until derivation completes; read through current().
        self.value: Optional[str] = self._raw
        self.error: Optional[BaseException] = None
        self._task: Optional[asyncio.Task] = None

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("[DARAJA] No running loop, credential derivation deferred to first use")
        else:
            self._start()

    def _start(self) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        task = self._task
        # A task cancelled by its loop shutting down, or still pending on a loop
        # that is no longer running this code, can never finish: start over.
        if task is None or task.cancelled() or (not task.done() and task.get_loop() is not loop):
            self._task = loop.create_task(self._derive())
        return self._task

    async def _derive(self) -> bool:
        try:
            if self.environment is Environment.SANDBOX:
                value = self._config.sandbox_security_credential
            else:
                value = await asyncio.to_thread(
                    encrypt_security_credential, self._raw, self._certificate_path
                )
        except Exception as exc:
            # Reported through ready()/current(); construction must not fail.
            self.error = exc
            logger.exception("[DARAJA] Failed to derive security credential (%s)", self.environment.value)
            return False

        self.value = value
        logger.info("[DARAJA] Security credential ready (%s)", self.environment.value)
        return True

    @property
    def is_ready(self) -> bool:
        return (
            self._task is not None
            and self._task.done()
            and not self._task.cancelled()
            and self.error is None
        )

    async def ready(self) -> bool:
        """Wait for derivation to finish. True when the credential is usable."""
        return await asyncio.shield(self._start())

    async def current(self) -> str:
        if not await self.ready():
            raise CredentialError(
                f"Security credential is unavailable: {self.error}",
                payload={"error": str(self.error)},
            ) from self.error
        return self.value

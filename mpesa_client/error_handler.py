"""Error types and handling helpers for Daraja API calls."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class MpesaError(Exception):
    """Base error for every failure surfaced by the client."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload if payload is not None else {}


class AuthError(MpesaError):
    """The OAuth client-credentials exchange failed."""


class RequestError(MpesaError):
    """A business-operation POST failed or was rejected by the provider."""


class CredentialError(MpesaError):
    """The security credential could not be derived."""


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        if isinstance(exc, MpesaError):
            logger.error("[DARAJA] %s: %s", type(exc).__name__, exc)
            return {
                "success": False,
                "error": str(exc),
                "error_type": type(exc).__name__,
                "status_code": exc.status_code,
                "payload": exc.payload,
                "context": context or {},
            }

        logger.error("Unhandled exception in Daraja client: %s", exc, exc_info=True)
        return {
            "success": False,
            "error": "An internal error occurred while calling M-Pesa. Please try again later.",
            "error_type": type(exc).__name__,
            "status_code": None,
            "payload": {"error": str(exc)},
            "context": context or {},
        }

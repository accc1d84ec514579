"""
M-Pesa Daraja API client.

    client = MpesaClient(credentials, "sandbox")
    await client.ready()
    response = await client.stk_push(...)
"""
from .error_handler import AuthError, CredentialError, ErrorHandler, MpesaError, RequestError
from .integrations.clients.real_http.daraja import MpesaClient
from .integrations.contracts.interfaces import (
    CommandID,
    Credentials,
    Environment,
    IdentifierType,
    ResponseType,
)
from .utils.config_loader import DarajaConfig, load_daraja_config

__all__ = [
    "AuthError",
    "CommandID",
    "CredentialError",
    "Credentials",
    "DarajaConfig",
    "Environment",
    "ErrorHandler",
    "IdentifierType",
    "MpesaClient",
    "MpesaError",
    "RequestError",
    "ResponseType",
    "load_daraja_config",
]

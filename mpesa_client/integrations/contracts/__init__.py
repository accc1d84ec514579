from .interfaces import CommandID, Credentials, Environment, IdentifierType, ResponseType
from .payments import (
    AccountBalanceRequest,
    B2BRequest,
    B2CRequest,
    C2BRegisterRequest,
    C2BSimulateRequest,
    DarajaRequest,
    ReversalRequest,
    STKPushQueryRequest,
    STKPushRequest,
    TransactionStatusRequest,
)

__all__ = [
    "AccountBalanceRequest",
    "B2BRequest",
    "B2CRequest",
    "C2BRegisterRequest",
    "C2BSimulateRequest",
    "CommandID",
    "Credentials",
    "DarajaRequest",
    "Environment",
    "IdentifierType",
    "ResponseType",
    "ReversalRequest",
    "STKPushQueryRequest",
    "STKPushRequest",
    "TransactionStatusRequest",
]

"""
Payload contracts.

One request model per Daraja operation. Field names are the provider's wire
names, including its ``RecieverIdentifierType`` spelling. Values are passed
through as given: no phone number, short code or amount validation happens
here, M-Pesa is the authority on those.

``to_payload()`` always emits every field; optional fields that were not
supplied are sent as explicit ``null``.
"""
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

from .interfaces import CommandID, IdentifierType, ResponseType

AmountValue = Union[int, float, str]
CommandCode = Union[CommandID, str]
IdentifierCode = Union[IdentifierType, int, str]
ResponseCode = Union[ResponseType, str]
PartyValue = Union[str, int]


class DarajaRequest(BaseModel):
    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


# ---------------------------------------------------------------------------
# Business to customer / business to business
# ---------------------------------------------------------------------------

class B2CRequest(DarajaRequest):
    InitiatorName: str
    SecurityCredential: Optional[str]
    CommandID: CommandCode = CommandID.BUSINESS_PAYMENT
    Amount: AmountValue
    PartyA: PartyValue
    PartyB: PartyValue
    Remarks: str = "Business To Customer Request"
    QueueTimeOutURL: str
    ResultURL: str
    Occasion: Optional[str] = "Business To Customer Request"


class B2BRequest(DarajaRequest):
    InitiatorName: str
    SecurityCredential: Optional[str]
    CommandID: CommandCode = CommandID.MERCHANT_TO_MERCHANT_TRANSFER
    SenderIdentifierType: IdentifierCode = IdentifierType.SHORT_CODE
    RecieverIdentifierType: IdentifierCode = IdentifierType.SHORT_CODE
    Amount: AmountValue
    PartyA: PartyValue
    PartyB: PartyValue
    AccountReference: Optional[PartyValue]
    Remarks: str = "Business To Business Request"
    QueueTimeOutURL: str
    ResultURL: str


# ---------------------------------------------------------------------------
# Customer to business
# ---------------------------------------------------------------------------

class C2BRegisterRequest(DarajaRequest):
    ShortCode: PartyValue
    ResponseType: ResponseCode = ResponseType.COMPLETED
    ConfirmationURL: str
    ValidationURL: str


class C2BSimulateRequest(DarajaRequest):
    ShortCode: PartyValue
    CommandID: CommandCode = CommandID.CUSTOMER_PAY_BILL_ONLINE
    Amount: AmountValue
    Msisdn: PartyValue
    BillRefNumber: Optional[PartyValue] = None


# ---------------------------------------------------------------------------
# Queries and reversal
# ---------------------------------------------------------------------------

class AccountBalanceRequest(DarajaRequest):
    Initiator: str
    SecurityCredential: Optional[str]
    CommandID: CommandCode = CommandID.ACCOUNT_BALANCE
    PartyA: PartyValue
    IdentifierType: IdentifierCode
    Remarks: str = "Check Account Balance"
    QueueTimeOutURL: str
    ResultURL: str


class TransactionStatusRequest(DarajaRequest):
    Initiator: str
    SecurityCredential: Optional[str]
    CommandID: CommandCode = CommandID.TRANSACTION_STATUS_QUERY
    TransactionID: str
    PartyA: PartyValue
    IdentifierType: IdentifierCode
    ResultURL: str
    QueueTimeOutURL: str
    Remarks: str = "Transaction Status Query"
    Occasion: Optional[str] = "TransactionStatusQuery"


class ReversalRequest(DarajaRequest):
    Initiator: str
    SecurityCredential: Optional[str]
    CommandID: CommandCode = CommandID.TRANSACTION_REVERSAL
    TransactionID: str
    Amount: AmountValue
    ReceiverParty: PartyValue
    RecieverIdentifierType: IdentifierCode = IdentifierType.REVERSAL_ORGANIZATION
    ResultURL: str
    QueueTimeOutURL: str
    Remarks: str = "Remarks"
    Occasion: Optional[str] = "Reversal"


# ---------------------------------------------------------------------------
# Lipa na M-Pesa Online (STK push)
# ---------------------------------------------------------------------------

class STKPushRequest(DarajaRequest):
    BusinessShortCode: PartyValue
    Password: str
    Timestamp: str
    TransactionType: CommandCode = CommandID.CUSTOMER_PAY_BILL_ONLINE
    Amount: AmountValue
    PartyA: PartyValue
    PartyB: PartyValue
    PhoneNumber: PartyValue
    CallBackURL: str
    AccountReference: PartyValue
    TransactionDesc: str = "Lipa Na Mpesa Online"


class STKPushQueryRequest(DarajaRequest):
    BusinessShortCode: PartyValue
    Password: str
    Timestamp: str
    CheckoutRequestID: str

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Environment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class CommandID(str, Enum):
    # B2C
    BUSINESS_PAYMENT = "BusinessPayment"
    SALARY_PAYMENT = "SalaryPayment"
    PROMOTION_PAYMENT = "PromotionPayment"
    # B2B
    BUSINESS_PAY_BILL = "BusinessPayBill"
    BUSINESS_BUY_GOODS = "BusinessBuyGoods"
    MERCHANT_TO_MERCHANT_TRANSFER = "MerchantToMerchantTransfer"
    MERCHANT_TRANSFER_FROM_MERCHANT_TO_WORKING = "MerchantTransferFromMerchantToWorking"
    MERCHANT_SERVICES_MMF_ACCOUNT_TRANSFER = "MerchantServicesMMFAccountTransfer"
    AGENCY_FLOAT_ADVANCE = "AgencyFloatAdvance"
    # C2B / STK push
    CUSTOMER_PAY_BILL_ONLINE = "CustomerPayBillOnline"
    CUSTOMER_BUY_GOODS_ONLINE = "CustomerBuyGoodsOnline"
    # Queries
    ACCOUNT_BALANCE = "AccountBalance"
    TRANSACTION_STATUS_QUERY = "TransactionStatusQuery"
    TRANSACTION_REVERSAL = "TransactionReversal"


class IdentifierType(IntEnum):
    """Kind of party named in PartyA / ReceiverParty."""

    MSISDN = 1                           # customer phone number
    TILL_NUMBER = 2                      # buy goods till
    SHORT_CODE = 4                       # paybill / organisation short code
    REVERSAL_ORGANIZATION = 11           # organisation receiving a reversal


class ResponseType(str, Enum):
    """What M-Pesa does when the validation URL is unreachable."""

    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class Credentials:
    key: str
    secret: str
    security_credential: Optional[str] = None
    certificate_path: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Credentials":
        """Accept snake_case keys as well as ``securitycredential`` / ``certificatepath``."""
        return cls(
            key=data["key"],
            secret=data["secret"],
            security_credential=data.get("security_credential", data.get("securitycredential")),
            certificate_path=data.get("certificate_path", data.get("certificatepath")),
        )

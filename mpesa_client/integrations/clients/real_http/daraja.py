"""
Real Daraja (M-Pesa) HTTP Client.

Purpose:
- Builds one fixed-shape JSON payload per M-Pesa operation
- Exchanges key/secret for a bearer token, then POSTs the payload once
- Returns the provider's httpx.Response untouched

Error policy:
- Token exchange failures raise AuthError before anything is posted
- Non-2xx or transport failures on the POST raise RequestError carrying the
  provider's body unchanged in ``payload``
- Nothing is retried

Operations that send a SecurityCredential wait for the credential store to
finish deriving it. Call ``await client.ready()`` after construction to find
out early whether that derivation succeeded.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from mpesa_client.error_handler import RequestError
from mpesa_client.integrations.clients.real_http.oauth import (
    create_authenticated_client,
    fetch_access_token,
)
from mpesa_client.integrations.contracts.interfaces import (
    CommandID,
    Credentials,
    Environment,
    IdentifierType,
    ResponseType,
)
from mpesa_client.integrations.contracts.payments import (
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
from mpesa_client.integrations.policy.passwords import password_and_timestamp
from mpesa_client.integrations.policy.response_wrappers import error_message, response_payload
from mpesa_client.integrations.policy.security_credential import SecurityCredentialStore
from mpesa_client.utils.config_loader import DarajaConfig

logger = logging.getLogger(__name__)


class MpesaClient:
    def __init__(
        self,
        credentials: Union[Credentials, Mapping[str, Any]],
        environment: Union[Environment, str],
        *,
        config: Optional[DarajaConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not isinstance(credentials, Credentials):
            credentials = Credentials.from_mapping(credentials)

        self.credentials = credentials
        self.environment = Environment(environment)
        self.config = config or DarajaConfig()
        self._transport = transport
        self.security = SecurityCredentialStore(credentials, self.environment, self.config)

        logger.info("[DARAJA] Client initialised (environment=%s)", self.environment.value)

    # ------------------------------------------------------------------
    # Session plumbing
    # ------------------------------------------------------------------

    async def ready(self) -> bool:
        """True once the security credential has been derived successfully."""
        return await self.security.ready()

    async def _authenticated_client(self) -> httpx.AsyncClient:
        token = await fetch_access_token(
            self.credentials.key,
            self.credentials.secret,
            self.environment,
            config=self.config,
            transport=self._transport,
        )
        return create_authenticated_client(
            token, self.environment, config=self.config, transport=self._transport
        )

    async def _post(self, operation: str, path: str, request: DarajaRequest) -> httpx.Response:
        payload = request.to_payload()
        client = await self._authenticated_client()

        logger.info("[DARAJA] POST %s (%s)", path, operation)
        try:
            async with client:
                response = await client.post(path, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = response_payload(exc.response)
            logger.error("[DARAJA] %s rejected status=%s", operation, exc.response.status_code)
            raise RequestError(
                error_message(body, f"{operation} failed with status {exc.response.status_code}"),
                status_code=exc.response.status_code,
                payload=body,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("[DARAJA] %s failed: %s", operation, exc)
            raise RequestError(f"{operation} failed: {exc}") from exc

        return response

    # ------------------------------------------------------------------
    # Business to customer / business to business
    # ------------------------------------------------------------------

    async def b2c(
        self,
        initiator_name: str,
        amount: Union[int, float, str],
        party_a: str,
        party_b: str,
        queue_timeout_url: str,
        result_url: str,
        command_id: Union[CommandID, str] = CommandID.BUSINESS_PAYMENT,
        occasion: Optional[str] = "Business To Customer Request",
        remarks: str = "Business To Customer Request",
    ) -> httpx.Response:
        """Pay a customer from a B2C short code (salary, promotion, business payment)."""
        request = B2CRequest(
            InitiatorName=initiator_name,
            SecurityCredential=await self.security.current(),
            CommandID=command_id,
            Amount=amount,
            PartyA=party_a,
            PartyB=party_b,
            Remarks=remarks,
            QueueTimeOutURL=queue_timeout_url,
            ResultURL=result_url,
            Occasion=occasion,
        )
        return await self._post("b2c", self.config.paths.b2c, request)

    async def b2b(
        self,
        initiator_name: str,
        amount: Union[int, float, str],
        party_a: str,
        party_b: str,
        account_reference: Optional[Union[str, int]],
        queue_timeout_url: str,
        result_url: str,
        command_id: Union[CommandID, str] = CommandID.MERCHANT_TO_MERCHANT_TRANSFER,
        sender_identifier_type: Union[IdentifierType, int] = IdentifierType.SHORT_CODE,
        receiver_identifier_type: Union[IdentifierType, int] = IdentifierType.SHORT_CODE,
        remarks: str = "Business To Business Request",
    ) -> httpx.Response:
        """Move funds between two short codes. ``account_reference`` is mandatory for BusinessPayBill."""
        request = B2BRequest(
            InitiatorName=initiator_name,
            SecurityCredential=await self.security.current(),
            CommandID=command_id,
            SenderIdentifierType=sender_identifier_type,
            RecieverIdentifierType=receiver_identifier_type,
            Amount=amount,
            PartyA=party_a,
            PartyB=party_b,
            AccountReference=account_reference,
            Remarks=remarks,
            QueueTimeOutURL=queue_timeout_url,
            ResultURL=result_url,
        )
        return await self._post("b2b", self.config.paths.b2b, request)

    # ------------------------------------------------------------------
    # Customer to business
    # ------------------------------------------------------------------

    async def c2b_register(
        self,
        short_code: str,
        confirmation_url: str,
        validation_url: str,
        response_type: Union[ResponseType, str] = ResponseType.COMPLETED,
    ) -> httpx.Response:
        """Register the confirmation and validation URLs for a short code."""
        request = C2BRegisterRequest(
            ShortCode=short_code,
            ResponseType=response_type,
            ConfirmationURL=confirmation_url,
            ValidationURL=validation_url,
        )
        return await self._post("c2b_register", self.config.paths.c2b_register, request)

    async def c2b_simulate(
        self,
        short_code: str,
        amount: Union[int, float, str],
        msisdn: str,
        command_id: Union[CommandID, str] = CommandID.CUSTOMER_PAY_BILL_ONLINE,
        bill_ref_number: Optional[str] = None,
    ) -> httpx.Response:
        """Simulate a customer payment to a short code (sandbox)."""
        request = C2BSimulateRequest(
            ShortCode=short_code,
            CommandID=command_id,
            Amount=amount,
            Msisdn=msisdn,
            BillRefNumber=bill_ref_number,
        )
        return await self._post("c2b_simulate", self.config.paths.c2b_simulate, request)

    # ------------------------------------------------------------------
    # Queries and reversal
    # ------------------------------------------------------------------

    async def account_balance(
        self,
        initiator: str,
        party_a: str,
        identifier_type: Union[IdentifierType, int],
        queue_timeout_url: str,
        result_url: str,
        command_id: Union[CommandID, str] = CommandID.ACCOUNT_BALANCE,
        remarks: str = "Check Account Balance",
    ) -> httpx.Response:
        request = AccountBalanceRequest(
            Initiator=initiator,
            SecurityCredential=await self.security.current(),
            CommandID=command_id,
            PartyA=party_a,
            IdentifierType=identifier_type,
            Remarks=remarks,
            QueueTimeOutURL=queue_timeout_url,
            ResultURL=result_url,
        )
        return await self._post("account_balance", self.config.paths.account_balance, request)

    async def transaction_status(
        self,
        initiator: str,
        transaction_id: str,
        party_a: str,
        identifier_type: Union[IdentifierType, int],
        result_url: str,
        queue_timeout_url: str,
        command_id: Union[CommandID, str] = CommandID.TRANSACTION_STATUS_QUERY,
        remarks: str = "Transaction Status Query",
        occasion: Optional[str] = "TransactionStatusQuery",
    ) -> httpx.Response:
        request = TransactionStatusRequest(
            Initiator=initiator,
            SecurityCredential=await self.security.current(),
            CommandID=command_id,
            TransactionID=transaction_id,
            PartyA=party_a,
            IdentifierType=identifier_type,
            ResultURL=result_url,
            QueueTimeOutURL=queue_timeout_url,
            Remarks=remarks,
            Occasion=occasion,
        )
        return await self._post("transaction_status", self.config.paths.transaction_status, request)

    async def reversal(
        self,
        initiator: str,
        transaction_id: str,
        amount: Union[int, float, str],
        receiver_party: str,
        result_url: str,
        queue_timeout_url: str,
        receiver_identifier_type: Union[IdentifierType, int] = IdentifierType.REVERSAL_ORGANIZATION,
        remarks: str = "Remarks",
        occasion: Optional[str] = "Reversal",
    ) -> httpx.Response:
        """Reverse a completed transaction. The CommandID is always TransactionReversal."""
        request = ReversalRequest(
            Initiator=initiator,
            SecurityCredential=await self.security.current(),
            CommandID=CommandID.TRANSACTION_REVERSAL,
            TransactionID=transaction_id,
            Amount=amount,
            ReceiverParty=receiver_party,
            RecieverIdentifierType=receiver_identifier_type,
            ResultURL=result_url,
            QueueTimeOutURL=queue_timeout_url,
            Remarks=remarks,
            Occasion=occasion,
        )
        return await self._post("reversal", self.config.paths.reversal, request)

    # ------------------------------------------------------------------
    # Lipa na M-Pesa Online (STK push)
    # ------------------------------------------------------------------

    async def stk_push(
        self,
        business_short_code: str,
        amount: Union[int, float, str],
        party_a: str,
        phone_number: str,
        callback_url: str,
        account_reference: Union[str, int],
        pass_key: str,
        transaction_type: Union[CommandID, str] = CommandID.CUSTOMER_PAY_BILL_ONLINE,
        transaction_desc: str = "Lipa Na Mpesa Online",
    ) -> httpx.Response:
        """Prompt ``phone_number`` to authorise a payment to ``business_short_code``."""
        password, timestamp = password_and_timestamp(business_short_code, pass_key)
        request = STKPushRequest(
            BusinessShortCode=business_short_code,
            Password=password,
            Timestamp=timestamp,
            TransactionType=transaction_type,
            Amount=amount,
            PartyA=party_a,
            PartyB=business_short_code,
            PhoneNumber=phone_number,
            CallBackURL=callback_url,
            AccountReference=account_reference,
            TransactionDesc=transaction_desc,
        )
        return await self._post("stk_push", self.config.paths.stk_push, request)

    async def stk_push_query(
        self,
        business_short_code: str,
        checkout_request_id: str,
        pass_key: str,
    ) -> httpx.Response:
        password, timestamp = password_and_timestamp(business_short_code, pass_key)
        request = STKPushQueryRequest(
            BusinessShortCode=business_short_code,
            Password=password,
            Timestamp=timestamp,
            CheckoutRequestID=checkout_request_id,
        )
        return await self._post("stk_push_query", self.config.paths.stk_query, request)

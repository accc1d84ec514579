import pytest
from pydantic import ValidationError

from mpesa_client.integrations.contracts import (
    C2BSimulateRequest,
    CommandID,
    Credentials,
    Environment,
    IdentifierType,
    ReversalRequest,
)


def test_environment_is_case_sensitive():
    assert Environment("sandbox") is Environment.SANDBOX
    with pytest.raises(ValueError):
        Environment("Sandbox")


def test_identifier_codes():
    assert IdentifierType.SHORT_CODE == 4
    assert IdentifierType.REVERSAL_ORGANIZATION == 11


def test_credentials_from_lowercase_mapping():
    creds = Credentials.from_mapping(
        {"key": "k", "secret": "s", "securitycredential": "pw", "certificatepath": "/tmp/cert.cer"}
    )
    assert creds == Credentials(key="k", secret="s", security_credential="pw", certificate_path="/tmp/cert.cer")


def test_payload_keeps_custom_command_strings():
    req = C2BSimulateRequest(ShortCode=600000, CommandID="CustomerBuyGoodsOnline", Amount="10", Msisdn=254708374149)

    assert req.to_payload() == {
        "ShortCode": 600000,
        "CommandID": "CustomerBuyGoodsOnline",
        "Amount": "10",
        "Msisdn": 254708374149,
        "BillRefNumber": None,
    }


def test_reversal_defaults():
    req = ReversalRequest(
        Initiator="testapi",
        SecurityCredential="cred",
        TransactionID="OEI2AK4Q16",
        Amount=1,
        ReceiverParty="600000",
        ResultURL="https://x.test/r",
        QueueTimeOutURL="https://x.test/t",
    )

    payload = req.to_payload()
    assert payload["CommandID"] == CommandID.TRANSACTION_REVERSAL.value
    assert payload["RecieverIdentifierType"] == 11


def test_missing_required_field_is_rejected():
    with pytest.raises(ValidationError):
        C2BSimulateRequest(ShortCode="600000", Amount=10)

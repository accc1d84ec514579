from mpesa_client.error_handler import AuthError, ErrorHandler, MpesaError, RequestError


def test_handle_mpesa_error_keeps_payload():
    eh = ErrorHandler()
    exc = RequestError("Bad Request - Invalid Amount", status_code=400, payload={"errorCode": "400.002.02"})

    out = eh.handle_exception(exc, context={"command": "stk-push"})

    assert out["success"] is False
    assert out["error_type"] == "RequestError"
    assert out["status_code"] == 400
    assert out["payload"] == {"errorCode": "400.002.02"}
    assert out["context"] == {"command": "stk-push"}


def test_handle_unexpected_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"))
    assert out["success"] is False
    assert "internal error" in out["error"].lower()
    assert "boom" in out["payload"]["error"]


def test_error_defaults():
    exc = AuthError("no token")
    assert isinstance(exc, MpesaError)
    assert exc.status_code is None
    assert exc.payload == {}

"""Tests for the error classifier and typed errors."""

from hdfs_explorer.errors import (
    Err, GatewayError, Ok, TransportError,
    classify, error_from_response,
)

URL = "http://nn:9870/webhdfs/v1/x?op=LISTSTATUS"


def _remote(message: str) -> dict:
    return {"RemoteException": {
        "message": message,
        "exception": "AccessControlException",
        "javaClassName": "org.apache.hadoop.security.AccessControlException",
    }}


class TestClassify:
    def test_401(self):
        msg = classify(401, url=URL)
        assert "Authentication failed" in msg
        assert URL in msg

    def test_403_generic(self):
        msg = classify(403, url=URL, reason="Forbidden")
        assert msg.startswith("Permission denied")
        assert "Forbidden" in msg

    def test_403_prefers_remote_message(self):
        msg = classify(403, _remote("Permission denied: user=x"), url=URL)
        assert msg == "Permission denied: user=x"

    def test_404_without_envelope(self):
        assert "does not exist" in classify(404)

    def test_default_appends_reason(self):
        msg = classify(500, url=URL, reason="Internal Server Error")
        assert msg == f"Failed to retrieve data from {URL}: Internal Server Error"

    def test_unknown_status_is_never_empty(self):
        assert classify(0)
        assert classify(418)

    def test_remote_message_wins_for_any_status(self):
        assert classify(500, _remote("boom")) == "boom"
        assert classify(200, _remote("inline failure")) == "inline failure"

    def test_remote_without_message_falls_back(self):
        assert "does not exist" in classify(404, {"RemoteException": {"exception": "X"}})


class TestErrorFromResponse:
    def test_gateway_error_carries_exception_details(self):
        err = error_from_response(403, _remote("nope"))
        assert isinstance(err, GatewayError)
        assert err.message == "nope"
        assert err.status == 403
        assert err.exception == "AccessControlException"
        assert err.java_class_name.endswith("AccessControlException")

    def test_transport_error_without_envelope(self):
        err = error_from_response(502, None, url=URL, reason="Bad Gateway")
        assert isinstance(err, TransportError)
        assert "Bad Gateway" in err.message


class TestResult:
    def test_ok_and_err_flags(self):
        assert Ok(1).ok is True
        err = Err(TransportError("down"))
        assert err.ok is False
        assert err.message == "down"

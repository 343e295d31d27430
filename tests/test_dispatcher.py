from notilify.dispatcher import MessageDispatcher
from notilify.errors import NotilifyAPIError, NotilifyTransportError


class FakeApi:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def _done(self, body):
        if self.error:
            raise self.error
        return body

    def send_message(self, sender_id, phone_number, message):
        self.sent.append(("sms", sender_id, phone_number, message))
        return self._done({"id": "m1"})

    def create_otp(self, phone_number, message, options=None):
        self.sent.append(("otp", phone_number, message, options))
        return self._done({"id": "o1"})

    def get_last_response(self):
        return {"status": 201}


def test_send_sms_ok():
    api = FakeApi()
    res = MessageDispatcher(api=api).send_sms("ACME", "+15551234567", "hi")
    assert res == {"ok": True, "status": 201, "body": {"id": "m1"}}
    assert api.sent == [("sms", "ACME", "+15551234567", "hi")]


def test_send_otp_api_error():
    res = MessageDispatcher(api=FakeApi(error=NotilifyAPIError("Invalid phone number", 422))).send_otp("+1", "code")
    assert res == {"ok": False, "error_type": "NotilifyAPIError", "message": "Invalid phone number", "status_code": 422}


def test_transport_error_has_no_status():
    res = MessageDispatcher(api=FakeApi(error=NotilifyTransportError("down"))).send_sms("ACME", "+1", "hi")
    assert res["ok"] is False
    assert res["status_code"] is None


class ClosingApi(FakeApi):
    closed = False

    def close(self):
        self.closed = True


def test_close_leaves_injected_api_open():
    api = ClosingApi()
    MessageDispatcher(api=api).close()
    assert api.closed is False


def test_close_releases_lazily_built_api():
    d = MessageDispatcher()
    d.close()
    d.api = ClosingApi()
    d.close()
    assert d.api.closed is True

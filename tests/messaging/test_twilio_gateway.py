import pytest
import requests

from congregation.core.exceptions import ConfigurationError, MessagingError
from congregation.messaging.twilio_gateway import TwilioSmsGateway


class FakeResponse:
    def __init__(self, status_code: int, payload: dict):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def _gateway(session):
    return TwilioSmsGateway(account_sid="AC123", auth_token="tok", from_number="+15550001111", session=session)


def test_send_posts_form_and_returns_sid():
    session = FakeSession(FakeResponse(201, {"sid": "SM42"}))

    sid = _gateway(session).send(to="+15552223333", body="hi")

    assert sid == "SM42"
    url, kwargs = session.calls[0]
    assert url.endswith("/Accounts/AC123/Messages.json")
    assert kwargs["data"] == {"From": "+15550001111", "To": "+15552223333", "Body": "hi"}
    assert kwargs["auth"] == ("AC123", "tok")


def test_provider_error_becomes_messaging_error():
    session = FakeSession(FakeResponse(400, {"message": "The 'To' number is not valid."}))

    with pytest.raises(MessagingError, match="not valid"):
        _gateway(session).send(to="bogus", body="hi")


def test_network_error_becomes_messaging_error():
    session = FakeSession(exc=requests.ConnectionError("down"))

    with pytest.raises(MessagingError):
        _gateway(session).send(to="+15552223333", body="hi")


def test_missing_credentials():
    with pytest.raises(ConfigurationError):
        TwilioSmsGateway(account_sid="", auth_token="tok", from_number="+1")

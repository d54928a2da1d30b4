from __future__ import annotations

import logging
from typing import Optional

import requests

from ..core.constants import DEFAULT_SMS_TIMEOUT_SECONDS
from ..core.exceptions import ConfigurationError, MessagingError
from .gateway import SmsGateway

log = logging.getLogger(__name__)

API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioSmsGateway(SmsGateway):
    """Sends SMS through Twilio's Messages REST endpoint."""

    def __init__(
        self,
        *,
        account_sid: str,
        auth_token: str,
        from_number: str,
        timeout: float = DEFAULT_SMS_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        if not account_sid or not auth_token or not from_number:
            raise ConfigurationError("TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER must be set")
        self._account_sid = account_sid
        self._auth = (account_sid, auth_token)
        self._from = from_number
        self._timeout = timeout
        self._session = session or requests.Session()

    def send(self, *, to: str, body: str) -> str:
        url = f"{API_BASE}/Accounts/{self._account_sid}/Messages.json"
        try:
            resp = self._session.post(
                url,
                data={"From": self._from, "To": to, "Body": body},
                auth=self._auth,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise MessagingError(f"could not reach SMS provider: {e}") from e

        if resp.status_code >= 400:
            try:
                detail = (resp.json() or {}).get("message")
            except ValueError:
                detail = None
            raise MessagingError(detail or f"SMS provider returned HTTP {resp.status_code}")

        sid = (resp.json() or {}).get("sid")
        if not sid:
            raise MessagingError("SMS provider response had no message sid")
        log.debug("sms to %s accepted as %s", to, sid)
        return str(sid)

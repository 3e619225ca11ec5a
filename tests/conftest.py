# tests/conftest.py
from typing import Dict, Iterable, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from telerelay.config import Settings, get_settings
from telerelay.errors import ProviderError
from telerelay.main import app
from telerelay.schemas import CallReceipt, MessageReceipt, PhoneLookup
from telerelay.services.twilio_client import get_twilio_client


class FakeTwilioClient:
    """
    Records every request instead of talking to Twilio.

    `lookups` maps a number to {"caller_name": ..., "line_type_intelligence": ...};
    numbers in `fail_on` raise ProviderError like a 404 from Twilio would.
    """

    from_number = "+15550000000"

    def __init__(
        self,
        lookups: Optional[Dict[str, dict]] = None,
        fail_on: Iterable[str] = (),
    ):
        self.lookups = lookups or {}
        self.fail_on = set(fail_on)
        self.lookup_requests: list[tuple] = []
        self.messages: list[tuple] = []
        self.calls: list[tuple] = []

    def _maybe_fail(self, number: str, action: str) -> None:
        if number in self.fail_on:
            raise ProviderError(f"Twilio {action} failed: number not found", code=20404)

    def lookup_phone_number(self, phone_number: str, fields: Sequence[str]) -> PhoneLookup:
        self.lookup_requests.append((phone_number, tuple(fields)))
        self._maybe_fail(phone_number, "lookup")
        data = self.lookups.get(phone_number, {})
        return PhoneLookup(
            phone_number=phone_number,
            caller_name=data.get("caller_name") if "caller_name" in fields else None,
            line_type_intelligence=(
                data.get("line_type_intelligence")
                if "line_type_intelligence" in fields
                else None
            ),
        )

    def send_message(self, to_number: str, body: str) -> MessageReceipt:
        self._maybe_fail(to_number, "message")
        self.messages.append((to_number, body))
        return MessageReceipt(
            sid=f"SM_FAKE_{len(self.messages)}",
            status="queued",
            to=to_number,
            from_number=self.from_number,
            body=body,
        )

    def create_call(self, to_number: str, twiml: str) -> CallReceipt:
        self._maybe_fail(to_number, "call")
        self.calls.append((to_number, twiml))
        return CallReceipt(
            sid=f"CA_FAKE_{len(self.calls)}",
            status="queued",
            to=to_number,
            from_number=self.from_number,
        )


@pytest.fixture
def fake_twilio():
    return FakeTwilioClient()


@pytest.fixture
def settings():
    """Settings used by the app during a test; mutate before making requests."""
    return Settings(
        _env_file=None,
        TWILIO_ACCOUNT_SID="AC_TEST",
        TWILIO_API_KEY="SK_TEST",
        TWILIO_API_KEY_SECRET="secret",
        TWILIO_PHONE_NUMBER=FakeTwilioClient.from_number,
    )


@pytest.fixture
def client(fake_twilio, settings):
    app.dependency_overrides[get_twilio_client] = lambda: fake_twilio
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

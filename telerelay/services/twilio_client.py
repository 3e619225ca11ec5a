# telerelay/services/twilio_client.py
from contextlib import contextmanager
from typing import Iterator, Sequence

from fastapi import Depends
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.rest import Client as TwilioSDKClient

from telerelay.config import Settings, get_settings
from telerelay.errors import ConfigurationError, ProviderError
from telerelay.logging_config import get_logger
from telerelay.schemas import CallReceipt, MessageReceipt, PhoneLookup

logger = get_logger(__name__)

CALLER_NAME = "caller_name"
LINE_TYPE_INTELLIGENCE = "line_type_intelligence"


@contextmanager
def _provider_errors(action: str, to_number: str) -> Iterator[None]:
    """Re-raise Twilio SDK failures as ProviderError."""
    try:
        yield
    except TwilioRestException as exc:
        logger.warning(
            "Twilio %s failed for %s: %s (code=%s, status=%s)",
            action, to_number, exc.msg, exc.code, exc.status,
        )
        raise ProviderError(f"Twilio {action} failed: {exc.msg}", code=exc.code) from exc
    except TwilioException as exc:
        logger.warning("Twilio %s failed for %s: %s", action, to_number, exc)
        raise ProviderError(f"Twilio {action} failed") from exc


class TwilioClient:
    """
    Thin wrapper around the Twilio Python SDK.

    This is the only place that talks to Twilio. It:
    - centralizes config (account SID, API key pair, from number)
    - turns SDK resources into our receipt/lookup models
    - can be swapped for a fake in tests via dependency overrides.
    """

    def __init__(
        self,
        account_sid: str,
        api_key: str,
        api_secret: str,
        from_number: str,
        sdk_client=None,
    ):
        self._client = sdk_client or TwilioSDKClient(
            api_key, api_secret, account_sid=account_sid
        )
        self._from_number = from_number

    @property
    def from_number(self) -> str:
        return self._from_number

    def lookup_phone_number(self, phone_number: str, fields: Sequence[str]) -> PhoneLookup:
        """
        Lookup v2 query for the requested data packages
        (`caller_name`, `line_type_intelligence`).
        """
        with _provider_errors("lookup", phone_number):
            result = self._client.lookups.v2.phone_numbers(phone_number).fetch(
                fields=",".join(fields)
            )

        if getattr(result, "valid", None) is False:
            raise ProviderError(f"Invalid phone number: {phone_number}")

        caller_name = None
        if CALLER_NAME in fields and isinstance(result.caller_name, dict):
            caller_name = result.caller_name.get("caller_name")

        line_type = None
        if LINE_TYPE_INTELLIGENCE in fields and isinstance(result.line_type_intelligence, dict):
            line_type = result.line_type_intelligence

        return PhoneLookup(
            phone_number=phone_number,
            caller_name=caller_name,
            line_type_intelligence=line_type,
        )

    def send_message(self, to_number: str, body: str) -> MessageReceipt:
        with _provider_errors("message", to_number):
            message = self._client.messages.create(
                to=to_number,
                from_=self._from_number,
                body=body,
            )
        logger.info("Sent SMS %s to %s", message.sid, to_number)
        return MessageReceipt(
            sid=message.sid,
            status=message.status,
            to=message.to,
            from_number=message.from_,
            body=message.body,
        )

    def create_call(self, to_number: str, twiml: str) -> CallReceipt:
        """Place an outbound call that runs the given TwiML document on answer."""
        with _provider_errors("call", to_number):
            call = self._client.calls.create(
                to=to_number,
                from_=self._from_number,
                twiml=twiml,
            )
        logger.info("Placed call %s to %s", call.sid, to_number)
        return CallReceipt(
            sid=call.sid,
            status=call.status,
            to=call.to,
            from_number=call.from_,
        )


def get_twilio_client(settings: Settings = Depends(get_settings)) -> TwilioClient:
    """
    FastAPI dependency to get a configured TwilioClient.
    Raises ConfigurationError if configuration is incomplete.
    """
    missing = settings.twilio_missing
    if missing:
        logger.error("Twilio not configured", extra={"missing": missing})
        raise ConfigurationError(f"Twilio not configured, missing: {', '.join(missing)}")

    return TwilioClient(
        account_sid=settings.TWILIO_ACCOUNT_SID,
        api_key=settings.TWILIO_API_KEY,
        api_secret=settings.TWILIO_API_KEY_SECRET,
        from_number=settings.TWILIO_PHONE_NUMBER,
    )

# telerelay/routers/messaging.py
from fastapi import APIRouter, Depends

from telerelay.config import Settings, get_settings
from telerelay.schemas import BroadcastRequest, MessageReceipt, SendRequest
from telerelay.services.messaging_service import MessagingService, get_messaging_service

router = APIRouter(tags=["sms"])


@router.post("/sms", response_model=MessageReceipt)
def send_sms(
    payload: SendRequest,
    messaging: MessagingService = Depends(get_messaging_service),
    settings: Settings = Depends(get_settings),
):
    """
    Send one SMS. The message goes out as written unless
    TEMPLATE_SINGLE_SENDS is enabled.
    """
    body = payload.message
    if settings.TEMPLATE_SINGLE_SENDS:
        body = messaging.render(body, payload.recipient())
    return messaging.send_message(payload.phone_number, body)


@router.post("/broadcastSMS", response_model=None)
def broadcast_sms(
    payload: BroadcastRequest,
    messaging: MessagingService = Depends(get_messaging_service),
):
    """
    Personalized SMS to everyone in `people`, e.g.

      {
        "people": [{"firstName": "Ada", "lastName": "Lovelace", "phoneNumber": "+15555550100"}],
        "message": "Hi firstName!"
      }
    """
    return messaging.broadcast_sms(payload.people, payload.message)

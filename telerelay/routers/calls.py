# telerelay/routers/calls.py
from fastapi import APIRouter, Depends

from telerelay.config import Settings, get_settings
from telerelay.schemas import BroadcastRequest, CallReceipt, SendRequest
from telerelay.services.messaging_service import MessagingService, get_messaging_service

router = APIRouter(tags=["calls"])


@router.post("/call", response_model=CallReceipt)
def place_call(
    payload: SendRequest,
    messaging: MessagingService = Depends(get_messaging_service),
    settings: Settings = Depends(get_settings),
):
    """Call one person, wait for them to pick up, then read the message."""
    spoken = payload.message
    if settings.TEMPLATE_SINGLE_SENDS:
        spoken = messaging.render(spoken, payload.recipient())
    return messaging.place_announcement_call(payload.phone_number, spoken)


@router.post("/calls", response_model=None)
def place_calls(
    payload: BroadcastRequest,
    messaging: MessagingService = Depends(get_messaging_service),
):
    return messaging.broadcast_calls(payload.people, payload.message)


@router.post("/conference", response_model=None)
def conference(
    payload: BroadcastRequest,
    messaging: MessagingService = Depends(get_messaging_service),
):
    """
    Call everyone, read each their personalized message, then drop them
    all into the shared conference room.
    """
    return messaging.broadcast_conference(payload.people, payload.message)

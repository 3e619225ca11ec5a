# telerelay/services/messaging_service.py
from typing import Optional, Sequence

from fastapi import Depends

from telerelay.config import Settings, get_settings
from telerelay.logging_config import get_logger
from telerelay.schemas import CallReceipt, MessageReceipt, Person
from telerelay.services.dispatch_service import BatchPolicy, dispatch
from telerelay.services.template_service import TemplateStyle, render_for_style
from telerelay.services.twiml import build_call_twiml
from telerelay.services.twilio_client import TwilioClient, get_twilio_client

logger = get_logger(__name__)

DEFAULT_CONFERENCE_ROOM = "MyConferenceRoom"


class MessagingService:
    """
    Outbound SMS and voice calls, single and broadcast.

    Broadcasts render the message per recipient before sending, then fan
    out through the dispatcher.
    """

    def __init__(
        self,
        twilio_client: TwilioClient,
        pause_seconds: int = 10,
        conference_room: str = DEFAULT_CONFERENCE_ROOM,
        policy: BatchPolicy = "fail_fast",
        max_workers: int = 1,
        template_style: TemplateStyle = "literal",
    ):
        self.twilio_client = twilio_client
        self.pause_seconds = pause_seconds
        self.conference_room = conference_room
        self.policy = policy
        self.max_workers = max_workers
        self.template_style = template_style

    def render(self, message: str, person: Person) -> str:
        return render_for_style(message, person.template_fields(), self.template_style)

    # --- single recipient ---

    def send_message(self, to: str, body: str) -> MessageReceipt:
        return self.twilio_client.send_message(to_number=to, body=body)

    def place_announcement_call(self, to: str, spoken_message: str) -> CallReceipt:
        twiml = build_call_twiml(spoken_message, pause_seconds=self.pause_seconds)
        return self.twilio_client.create_call(to_number=to, twiml=twiml)

    def place_conference_call(self, to: str, spoken_message: str, room_name: str) -> CallReceipt:
        twiml = build_call_twiml(
            spoken_message,
            pause_seconds=self.pause_seconds,
            conference_room=room_name,
        )
        return self.twilio_client.create_call(to_number=to, twiml=twiml)

    # --- broadcasts ---

    def _broadcast(self, people: Sequence[Person], operation) -> list:
        return dispatch(people, operation, policy=self.policy, max_workers=self.max_workers)

    def broadcast_sms(self, people: Sequence[Person], message: str) -> list:
        logger.info("Broadcasting SMS to %s recipients", len(people))
        return self._broadcast(
            people,
            lambda person: self.send_message(person.phone_number, self.render(message, person)),
        )

    def broadcast_calls(self, people: Sequence[Person], message: str) -> list:
        logger.info("Broadcasting calls to %s recipients", len(people))
        return self._broadcast(
            people,
            lambda person: self.place_announcement_call(
                person.phone_number, self.render(message, person)
            ),
        )

    def broadcast_conference(
        self,
        people: Sequence[Person],
        message: str,
        room_name: Optional[str] = None,
    ) -> list:
        room = room_name or self.conference_room
        logger.info("Calling %s recipients into conference %s", len(people), room)
        return self._broadcast(
            people,
            lambda person: self.place_conference_call(
                person.phone_number, self.render(message, person), room
            ),
        )


def get_messaging_service(
    twilio_client: TwilioClient = Depends(get_twilio_client),
    settings: Settings = Depends(get_settings),
) -> MessagingService:
    return MessagingService(
        twilio_client=twilio_client,
        pause_seconds=settings.CALL_PAUSE_SECONDS,
        conference_room=settings.CONFERENCE_ROOM,
        policy=settings.BATCH_POLICY,
        max_workers=settings.DISPATCH_MAX_WORKERS,
        template_style=settings.TEMPLATE_STYLE,
    )

# telerelay/services/twiml.py
from typing import Optional

from twilio.twiml.voice_response import Dial, VoiceResponse


def build_call_twiml(
    spoken_message: str,
    pause_seconds: int = 10,
    conference_room: Optional[str] = None,
) -> str:
    """
    TwiML for an outbound call:

    - <Pause> so the callee has time to pick up and say hello
    - <Say> the message with text-to-speech
    - optionally <Dial><Conference> into a named room
    """
    vr = VoiceResponse()
    if pause_seconds:
        vr.pause(length=pause_seconds)
    vr.say(spoken_message)

    if conference_room:
        dial = Dial()
        dial.conference(conference_room)
        vr.append(dial)

    return str(vr)

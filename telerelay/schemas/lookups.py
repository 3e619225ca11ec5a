# telerelay/schemas/lookups.py
from typing import Any, Dict, List, Optional

from pydantic import Field

from telerelay.schemas.common import CamelModel, PhoneNumber


class LookupRequest(CamelModel):
    phone_number: PhoneNumber


class LookupsRequest(CamelModel):
    phone_numbers: List[PhoneNumber] = Field(min_length=1)


class LookupResult(CamelModel):
    caller_id: Optional[str] = None
    # Twilio's line_type_intelligence object, e.g. {"type": "mobile", "carrier_name": ...}
    line_type: Optional[Dict[str, Any]] = None


class PhoneLookup(CamelModel):
    """What the provider client hands back for one number."""

    phone_number: str
    caller_name: Optional[str] = None
    line_type_intelligence: Optional[Dict[str, Any]] = None

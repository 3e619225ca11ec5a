from telerelay.schemas.common import (  # noqa: F401
    BatchItemOutcome,
    ErrorBody,
    ErrorResponse,
    PhoneNumber,
)
from telerelay.schemas.lookups import (  # noqa: F401
    LookupRequest,
    LookupResult,
    LookupsRequest,
    PhoneLookup,
)
from telerelay.schemas.messaging import (  # noqa: F401
    BroadcastRequest,
    CallReceipt,
    MessageReceipt,
    Person,
    SendRequest,
)

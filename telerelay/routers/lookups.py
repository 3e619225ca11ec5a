# telerelay/routers/lookups.py
from fastapi import APIRouter, Depends

from telerelay.schemas import LookupRequest, LookupResult, LookupsRequest
from telerelay.services.lookup_service import LookupService, get_lookup_service

router = APIRouter(tags=["lookups"])


@router.post("/lookup", response_model=LookupResult)
def lookup(
    payload: LookupRequest,
    lookups: LookupService = Depends(get_lookup_service),
):
    """
    Caller name + line type for one number.

    Example input:
      {"phoneNumber": "+15555555555"}
    """
    return lookups.lookup(payload.phone_number)


@router.post("/lookups", response_model=None)
def lookup_batch(
    payload: LookupsRequest,
    lookups: LookupService = Depends(get_lookup_service),
):
    """
    Same as /lookup for a list of numbers; the response list follows the
    order of `phoneNumbers`.
    """
    return lookups.lookup_many(payload.phone_numbers)

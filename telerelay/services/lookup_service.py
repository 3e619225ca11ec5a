# telerelay/services/lookup_service.py
from typing import Any, Dict, List, Optional, Sequence

from fastapi import Depends

from telerelay.config import Settings, get_settings
from telerelay.schemas import LookupResult, PhoneLookup
from telerelay.services.dispatch_service import BatchPolicy, dispatch
from telerelay.services.twilio_client import (
    CALLER_NAME,
    LINE_TYPE_INTELLIGENCE,
    TwilioClient,
    get_twilio_client,
)


def _to_result(lookup: PhoneLookup) -> LookupResult:
    return LookupResult(
        caller_id=lookup.caller_name,
        line_type=lookup.line_type_intelligence,
    )


class LookupService:
    """
    Read-only number lookups: caller name (CNAM) and line type.

    Batches go through the dispatcher, so ordering and failure handling
    follow the configured policy.
    """

    def __init__(
        self,
        twilio_client: TwilioClient,
        policy: BatchPolicy = "fail_fast",
        max_workers: int = 1,
    ):
        self.twilio_client = twilio_client
        self.policy = policy
        self.max_workers = max_workers

    def _fetch(self, phone_number: str, *fields: str) -> PhoneLookup:
        return self.twilio_client.lookup_phone_number(phone_number, fields=list(fields))

    def _dispatch(self, numbers: Sequence[str], operation):
        return dispatch(numbers, operation, policy=self.policy, max_workers=self.max_workers)

    def resolve_caller_names(self, numbers: Sequence[str]) -> List[Optional[str]]:
        return self._dispatch(
            numbers,
            lambda number: self._fetch(number, CALLER_NAME).caller_name,
        )

    def resolve_line_types(self, numbers: Sequence[str]) -> List[Optional[Dict[str, Any]]]:
        return self._dispatch(
            numbers,
            lambda number: self._fetch(number, LINE_TYPE_INTELLIGENCE).line_type_intelligence,
        )

    def lookup(self, phone_number: str) -> LookupResult:
        """Both data packages in one provider request."""
        return _to_result(self._fetch(phone_number, CALLER_NAME, LINE_TYPE_INTELLIGENCE))

    def lookup_many(self, numbers: Sequence[str]) -> list:
        """
        One provider request per number, both packages at once.

        Returns LookupResults in input order, or BatchItemOutcomes when
        the policy is best_effort.
        """
        return self._dispatch(numbers, self.lookup)


def get_lookup_service(
    twilio_client: TwilioClient = Depends(get_twilio_client),
    settings: Settings = Depends(get_settings),
) -> LookupService:
    return LookupService(
        twilio_client=twilio_client,
        policy=settings.BATCH_POLICY,
        max_workers=settings.DISPATCH_MAX_WORKERS,
    )

# telerelay/schemas/common.py
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


E164_PATTERN = r"^\+[1-9]\d{1,14}$"

PhoneNumber = Annotated[str, Field(pattern=E164_PATTERN, examples=["+15555555555"])]


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorBody(CamelModel):
    kind: str
    message: str
    index: Optional[int] = None
    details: Optional[List[Any]] = None
    # Sentry event id for unexpected errors, quotable to support
    event_id: Optional[str] = None


class ErrorResponse(CamelModel):
    error: ErrorBody


class BatchItemOutcome(CamelModel):
    """Per-item result of a best-effort batch."""

    index: int
    ok: bool
    result: Optional[Any] = None
    error: Optional[ErrorBody] = None

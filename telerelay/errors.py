# telerelay/errors.py
from typing import Optional


class TelerelayError(Exception):
    """
    Base error for everything this service reports back to a caller.

    Subclasses set `kind` and `status_code`; the exception handlers in
    telerelay.main turn them into the JSON error envelope.
    """

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(TelerelayError):
    kind = "configuration_error"
    status_code = 503


class ProviderError(TelerelayError):
    """A Twilio request failed (invalid number, auth, quota, network...)."""

    kind = "provider_error"
    status_code = 502

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class BatchDispatchError(TelerelayError):
    """
    Fail-fast abort of a batch. `index` is the position of the first item
    that failed; results gathered before it are discarded.
    """

    kind = "batch_failed"
    status_code = 502

    def __init__(self, index: int, cause: BaseException):
        reason = cause.message if isinstance(cause, TelerelayError) else "unexpected error"
        super().__init__(f"Item {index} failed: {reason}")
        self.index = index
        self.cause = cause

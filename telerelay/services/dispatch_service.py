# telerelay/services/dispatch_service.py
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Literal, Sequence, TypeVar, Union

from telerelay.errors import BatchDispatchError, TelerelayError
from telerelay.logging_config import get_logger
from telerelay.schemas import BatchItemOutcome, ErrorBody

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

BatchPolicy = Literal["fail_fast", "best_effort"]


def _error_body(index: int, exc: BaseException) -> ErrorBody:
    if isinstance(exc, TelerelayError):
        return ErrorBody(kind=exc.kind, message=exc.message, index=index)
    return ErrorBody(kind="internal_error", message="unexpected error", index=index)


def _run_sequential(items: Sequence[T], operation: Callable[[T], R], policy: BatchPolicy) -> list:
    results: list = []
    for index, item in enumerate(items):
        try:
            results.append(operation(item))
        except Exception as exc:
            if policy == "fail_fast":
                raise BatchDispatchError(index, exc) from exc
            results.append(exc)
    return results


def _run_pooled(
    items: Sequence[T],
    operation: Callable[[T], R],
    policy: BatchPolicy,
    max_workers: int,
) -> list:
    results: list = []
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dispatch") as pool:
        futures: List[Future] = [pool.submit(operation, item) for item in items]
        # Walk in input order so the reported failure is the lowest index
        for index, future in enumerate(futures):
            try:
                results.append(future.result())
            except Exception as exc:
                if policy == "fail_fast":
                    for pending in futures[index + 1:]:
                        pending.cancel()
                    raise BatchDispatchError(index, exc) from exc
                results.append(exc)
    return results


def dispatch(
    items: Sequence[T],
    operation: Callable[[T], R],
    *,
    policy: BatchPolicy = "fail_fast",
    max_workers: int = 1,
) -> Union[List[R], List[BatchItemOutcome]]:
    """
    Run `operation` once per item and return the results in input order.

    - max_workers == 1: strictly sequential, one call at a time.
    - max_workers > 1: bounded thread pool; ordering still follows input.

    policy="fail_fast" raises BatchDispatchError for the first failing
    item and returns nothing else. policy="best_effort" runs every item
    and returns one BatchItemOutcome per item.
    """
    if policy not in ("fail_fast", "best_effort"):
        raise ValueError(f"unknown batch policy: {policy!r}")
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    if not items:
        return []

    logger.info(
        "Dispatching batch",
        extra={"items": len(items), "policy": policy, "max_workers": max_workers},
    )

    try:
        if max_workers == 1 or len(items) == 1:
            raw = _run_sequential(items, operation, policy)
        else:
            raw = _run_pooled(items, operation, policy, min(max_workers, len(items)))
    except BatchDispatchError as exc:
        logger.warning(
            "Batch aborted at item %s", exc.index,
            exc_info=not isinstance(exc.cause, TelerelayError),
        )
        raise

    if policy == "fail_fast":
        return raw

    outcomes: List[BatchItemOutcome] = []
    for index, value in enumerate(raw):
        if isinstance(value, Exception):
            logger.warning(
                "Batch item %s failed: %s", index, value,
                exc_info=None if isinstance(value, TelerelayError) else value,
            )
            outcomes.append(BatchItemOutcome(index=index, ok=False, error=_error_body(index, value)))
        else:
            outcomes.append(BatchItemOutcome(index=index, ok=True, result=value))
    return outcomes

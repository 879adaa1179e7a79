"""One asynchronous pipeline operation and the rule for running it.

``launch`` is the only way the application layer starts I/O: the work
runs on the background context, and every outcome (success callback,
error callback, follow-up state changes) is marshalled back onto the
interactive context.  No exception escapes the operation.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from shopcat.application.execution import ExecutionContext
from shopcat.domain.exceptions import DomainException, ValidationError

logger = logging.getLogger(__name__)

SuccessCallback = Callable[..., None]
ErrorCallback = Callable[[Exception], None]


class OperationStatus(Enum):
    IDLE = "IDLE"
    IN_FLIGHT = "IN_FLIGHT"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class Operation:
    """Tracks ``IDLE -> IN_FLIGHT -> {SUCCEEDED, FAILED}``.

    Both outcomes are terminal; there are no retries.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.status = OperationStatus.IDLE
        self.result: Any = None
        self.error: Exception | None = None
        self._done = threading.Event()

    # --- State transitions ----------------------------------------------------

    def start(self) -> None:
        if self.status != OperationStatus.IDLE:
            raise ValidationError(
                f"Cannot start {self.name}: current status is {self.status.value}, "
                f"expected IDLE"
            )
        self.status = OperationStatus.IN_FLIGHT

    def succeed(self, result: Any = None) -> None:
        self._assert_in_flight()
        self.result = result
        self.status = OperationStatus.SUCCEEDED
        self._done.set()

    def fail(self, error: Exception) -> None:
        self._assert_in_flight()
        self.error = error
        self.status = OperationStatus.FAILED
        self._done.set()

    # --- Queries --------------------------------------------------------------

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until terminal; False if ``timeout`` elapsed first."""
        return self._done.wait(timeout)

    def _assert_in_flight(self) -> None:
        if self.status != OperationStatus.IN_FLIGHT:
            raise ValidationError(
                f"Cannot finish {self.name}: current status is {self.status.value}"
            )


def launch(
    name: str,
    work: Callable[[], Any],
    background: ExecutionContext,
    interactive: ExecutionContext,
    on_success: SuccessCallback | None = None,
    on_error: ErrorCallback | None = None,
    then: Callable[[Any], None] | None = None,
) -> Operation:
    """Run ``work`` on ``background``; report on ``interactive``.

    ``then`` runs on the interactive context after a success and before
    ``on_success``; it is where cache reconciliation belongs.
    ``on_success`` receives the work's result when it returns one.
    """
    operation = Operation(name)
    operation.start()

    def finish_ok(result: Any) -> None:
        try:
            if then is not None:
                then(result)
        except Exception as exc:
            logger.exception("%s: follow-up failed", name)
            finish_error(exc)
            return
        operation.succeed(result)
        if on_success is not None:
            if result is None:
                on_success()
            else:
                on_success(result)

    def finish_error(exc: Exception) -> None:
        operation.fail(exc)
        if on_error is not None:
            on_error(exc)

    def run() -> None:
        try:
            result = work()
        except DomainException as exc:
            logger.warning("%s failed: %s", name, exc)
            interactive.submit(finish_error, exc)
            return
        except Exception as exc:
            logger.exception("%s failed unexpectedly", name)
            interactive.submit(finish_error, exc)
            return
        logger.debug("%s succeeded", name)
        interactive.submit(finish_ok, result)

    background.submit(run)
    return operation

"""Base class for one-shot sub-flows."""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Generic, Optional, TypeVar

from ...core.exceptions import AuthzError, NetworkError
from ..event_bus import LifecycleEventBus
from ..events import FlowCompleted
from ..machine import Machine, S
from ..mailbox import Mailbox
from ..results import FlowKind, FlowResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Flow(Machine[S], Generic[S, T]):
    """A sub-flow that runs once and reports its outcome once.

    Subclasses implement ``_execute`` and declare their terminal states.
    ``run`` never raises (apart from task cancellation): every failure is
    captured as a ``FlowResult`` and, when an invoker mailbox was given,
    posted there as a ``FlowCompleted`` message.
    """

    kind: ClassVar[FlowKind]
    done_state: ClassVar[Enum]
    failed_state: ClassVar[Enum]

    def __init__(
        self,
        initial_state: S,
        *,
        invoker: Optional[Mailbox] = None,
        event_bus: Optional[LifecycleEventBus] = None,
        flow_id: Optional[str] = None
    ):
        super().__init__(initial_state, machine_id=flow_id, event_bus=event_bus)
        self._invoker = invoker
        self._result: Optional[FlowResult[T]] = None
        self._started = False

    @property
    def flow_id(self) -> str:
        return self.machine_id

    @property
    def result(self) -> Optional[FlowResult[T]]:
        """Outcome once the flow reached a terminal state."""
        return self._result

    @property
    def finished(self) -> bool:
        return self._result is not None

    async def run(self) -> FlowResult[T]:
        """Execute the flow to completion.

        Raises:
            RuntimeError: If the flow was already started
        """
        if self._started:
            raise RuntimeError(f"{self.machine_name} flow {self.flow_id} already started")
        self._started = True

        try:
            value = await self._execute()
        except AuthzError as e:
            self._finish(FlowResult.failure(e), self.failed_state, "failed")
        except Exception as e:
            logger.exception("Unexpected failure in %s flow %s", self.machine_name, self.flow_id)
            error = AuthzError(
                f"{self.machine_name} flow failed unexpectedly: {e}",
                error_code="UnexpectedError",
                details={"cause": e.__class__.__name__},
            )
            error.__cause__ = e
            self._finish(FlowResult.failure(error), self.failed_state, "failed")
        else:
            self._finish(FlowResult.success(value), self.done_state, "completed")

        return self._result

    async def wait_for_result(self, timeout: Optional[float] = None) -> FlowResult[T]:
        """Wait until the flow reaches a terminal state and return its outcome."""
        await self.wait_for(self.done_state, self.failed_state, timeout=timeout)
        return self._result

    async def _execute(self) -> T:
        raise NotImplementedError

    def _on_failure(self, error: AuthzError) -> None:
        """Hook for subclasses that record the error in their context."""

    def _finish(self, result: FlowResult[T], terminal: S, trigger: str) -> None:
        self._result = result
        if result.error is not None:
            self._on_failure(result.error)
            logger.debug(
                "%s flow %s failed: %s", self.machine_name, self.flow_id, result.error
            )
        self._transition(terminal, trigger)
        if self._invoker is not None:
            self._invoker.post(FlowCompleted(self.kind, self.flow_id, result))

    async def _call(self, operation: str, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """Invoke a service operation, wrapping non-library errors.

        Raises:
            AuthzError: Re-raised unchanged from the service
            NetworkError: For any other exception, with the cause chained
        """
        try:
            return await func(*args, **kwargs)
        except AuthzError:
            raise
        except Exception as e:
            raise NetworkError.from_exception(operation, e) from e

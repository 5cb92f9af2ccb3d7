"""Common state bookkeeping for the orchestrator and its sub-flows."""

import asyncio
from enum import Enum
from typing import ClassVar, FrozenSet, Generic, List, Optional, Tuple, TypeVar
from uuid import uuid4

from ..core.events import StateTransitioned, TransitionRejected
from .event_bus import LifecycleEventBus

S = TypeVar("S", bound=Enum)


class Machine(Generic[S]):
    """Holds a machine's current state and publishes its transitions.

    Every state change goes through ``_transition`` so observers see one
    ``StateTransitioned`` event per change, and coroutines blocked in
    ``wait_for`` are woken even if the state moves on immediately after.
    """

    machine_name: ClassVar[str] = "machine"

    def __init__(
        self,
        initial_state: S,
        *,
        machine_id: Optional[str] = None,
        event_bus: Optional[LifecycleEventBus] = None
    ):
        self.machine_id = machine_id or uuid4().hex[:12]
        self._state = initial_state
        self._event_bus = event_bus or LifecycleEventBus()
        self._waiters: List[Tuple[FrozenSet[S], "asyncio.Future[S]"]] = []

    @property
    def state(self) -> S:
        return self._state

    @property
    def event_bus(self) -> LifecycleEventBus:
        return self._event_bus

    def _transition(self, target: S, trigger: str) -> None:
        source = self._state
        self._state = target
        self._event_bus.publish(
            StateTransitioned(
                machine=self.machine_name,
                machine_id=self.machine_id,
                source=source.value,
                target=target.value,
                trigger=trigger,
            )
        )
        for states, waiter in list(self._waiters):
            if target in states and not waiter.done():
                waiter.set_result(target)

    def _reject(self, trigger: str, reason: str) -> None:
        self._event_bus.publish(
            TransitionRejected(
                machine=self.machine_name,
                machine_id=self.machine_id,
                state=self._state.value,
                trigger=trigger,
                reason=reason,
            )
        )

    async def wait_for(self, *states: S, timeout: Optional[float] = None) -> S:
        """Wait until the machine enters one of ``states``.

        Returns immediately if the machine is already in one of them.

        Raises:
            asyncio.TimeoutError: If ``timeout`` elapses first
        """
        if self._state in states:
            return self._state

        waiter: "asyncio.Future[S]" = asyncio.get_running_loop().create_future()
        entry = (frozenset(states), waiter)
        self._waiters.append(entry)
        try:
            return await asyncio.wait_for(waiter, timeout)
        finally:
            self._waiters.remove(entry)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.machine_id}, state={self._state.value})"

"""Per-machine event queue."""

import asyncio
from typing import Generic, TypeVar

M = TypeVar("M")


class Mailbox(Generic[M]):
    """FIFO queue of events addressed to a single machine instance.

    A machine drains its own mailbox one message at a time; other machines
    only ever post to it.
    """

    def __init__(self) -> None:
        self._queue: "asyncio.Queue[M]" = asyncio.Queue()

    def post(self, message: M) -> None:
        """Enqueue a message without waiting."""
        self._queue.put_nowait(message)

    async def receive(self) -> M:
        """Wait for the next message."""
        return await self._queue.get()

    def __len__(self) -> int:
        return self._queue.qsize()

# ABOUTME: Cancellable timer tokens and a restart-on-change debouncer built on asyncio.
# ABOUTME: A debounce cancels only the scheduling of a call, never a call already running.

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


class ScheduledCall:
    """A cancellable token for a callback scheduled on the event loop."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        """Schedule callback to run after delay seconds.

        Args:
            delay: Seconds to wait before running the callback.
            callback: Plain callable run on the event loop.

        Raises:
            RuntimeError: If there is no running event loop.
        """
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire)
        self._callback = callback
        self._fired = False

    def _fire(self) -> None:
        self._fired = True
        self._callback()

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()

    def cancel(self) -> bool:
        """Cancel the call if it has not fired yet.

        Returns:
            True if this call prevented the callback from running.
        """
        if self._fired or self._handle.cancelled():
            return False
        self._handle.cancel()
        return True


@dataclass(frozen=True)
class Idle:
    """No call is waiting for its quiet period to elapse."""


@dataclass(frozen=True)
class Pending:
    """A call is scheduled and will run once its token fires."""

    token: ScheduledCall


DebounceState = Idle | Pending


class Debouncer:
    """Runs an async action once input has been quiet for a fixed window.

    Every trigger cancels a pending token and schedules a fresh one. When a
    token fires the state returns to Idle and the action starts as a tracked
    task, which later triggers never cancel.
    """

    def __init__(self, delay: float, action: Callable[[], Awaitable[None]]) -> None:
        """Initialize the debouncer.

        Args:
            delay: Quiet window in seconds.
            action: Coroutine function to run after the window elapses.
        """
        self.delay = delay
        self._action = action
        self._state: DebounceState = Idle()
        self._running: set[asyncio.Task[None]] = set()
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def state(self) -> DebounceState:
        return self._state

    @property
    def pending(self) -> bool:
        return isinstance(self._state, Pending)

    def trigger(self) -> None:
        """Restart the quiet window, replacing any pending call."""
        self.cancel()
        self._state = Pending(ScheduledCall(self.delay, self._on_fire))
        self._idle.clear()

    def cancel(self) -> None:
        """Drop the pending call, if any. Running actions are left alone."""
        if isinstance(self._state, Pending):
            self._state.token.cancel()
            logger.debug("debounced_call_cancelled")
        self._state = Idle()
        self._idle.set()

    def _on_fire(self) -> None:
        self._state = Idle()
        self._idle.set()
        task = asyncio.get_running_loop().create_task(self._action())
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def settled(self) -> None:
        """Wait until no call is pending and every started action has finished."""
        await self._idle.wait()
        await self.drain()

    async def drain(self) -> None:
        """Wait for every action that has already started to finish."""
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel the pending call and wait for started actions."""
        self.cancel()
        await self.drain()

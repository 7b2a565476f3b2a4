from __future__ import annotations

import asyncio
import enum
import inspect
from typing import Any, Callable, Optional, Protocol, Set

from utils.logger import get_logger

_logger = get_logger(__name__)

DEFAULT_WINDOW = 0.5  # seconds


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


# (delay, callback) -> handle. asyncio's loop.call_later fits
Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def _call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class DebounceState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"


class SearchDebouncer:
    """
    Defers the search action until typing pauses for `window` seconds.

    Each push cancels the pending timer, if any, and schedules a new one, so
    at most one action fires per quiet window and it sees the latest text.
    Requests that already left are not aborted.
    """

    def __init__(
        self,
        action: Callable[[str], Any],
        window: float = DEFAULT_WINDOW,
        schedule: Optional[Scheduler] = None,
    ):
        self.action = action
        self.window = window
        self._schedule = schedule or _call_later
        self._timer: Optional[TimerHandle] = None
        self._text = ""
        self._tasks: Set[asyncio.Future] = set()

    @property
    def state(self) -> DebounceState:
        return DebounceState.PENDING if self._timer is not None else DebounceState.IDLE

    def push(self, text: str) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._text = text
        self._timer = self._schedule(self.window, self._fire)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        _logger.debug(f"debounce expired, searching {self._text!r}")
        result = self.action(self._text)
        if inspect.isawaitable(result):
            # keep a reference, the loop only holds weak ones
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

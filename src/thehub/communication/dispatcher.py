"""Serialized FIFO task queue with a reentrancy guard.

Every subscriber call made by the hub goes through a `Dispatcher`.  Tasks run
one at a time in the order they were enqueued.  A task that enqueues more work
(for example a handler that publishes another property) appends to the same
queue, and the drain pass already in progress picks it up.  Nested drain
requests never recurse.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..settings import HubSettings

logger = logging.getLogger(__name__)

FailureHook = Callable[[Exception, Any, Callable[..., Any], Tuple[Any, ...]], None]


class DispatcherState(str, Enum):
    IDLE = "idle"
    DRAINING = "draining"


class Task(BaseModel):
    """One queued call: ``fn(*args)``, remembered together with its target."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: Any = None
    fn: Callable[..., Any]
    args: Tuple[Any, ...] = ()

    def run(self):
        return self.fn(*self.args)


class Dispatcher:
    """Single-consumer task queue.

    Parameters
    ----------
    on_failure: callable, optional
        Replaces the default failure hook.  Called as
        ``on_failure(error, target, fn, args)`` whenever a task raises.
        Errors raised by the hook itself are logged and draining goes on.
    settings: HubSettings, optional
        Controls failure logging and the long-drain warning.
    """

    def __init__(
        self,
        on_failure: Optional[FailureHook] = None,
        settings: Optional[HubSettings] = None,
    ) -> None:
        self.settings = settings or HubSettings()
        self.queue: Deque[Task] = deque()
        self.state = DispatcherState.IDLE
        if on_failure is not None:
            self.on_failure = on_failure  # type: ignore[method-assign]

    def __repr__(self) -> str:
        return f"Dispatcher[{len(self.queue)}]"

    @property
    def pending(self) -> int:
        return len(self.queue)

    @property
    def is_draining(self) -> bool:
        return self.state is DispatcherState.DRAINING

    # ------------------------------------------------------------------
    # Queue operations
    # ------------------------------------------------------------------

    def enqueue(
        self,
        target: Any,
        fn: Union[Callable[..., Any], str],
        args: Sequence[Any] = (),
    ) -> "Dispatcher":
        """Append a task without running anything.

        ``fn`` may name a method on ``target``; it is looked up now so the
        queued task always holds a concrete callable.
        """
        if isinstance(fn, str):
            fn = getattr(target, fn)
        self.queue.append(Task(target=target, fn=fn, args=tuple(args)))
        return self

    def drain(self) -> "Dispatcher":
        """Run queued tasks until the queue is empty.

        A call made while a drain is already running returns immediately and
        leaves the queue to the outer pass.
        """
        if self.state is DispatcherState.DRAINING:
            logger.debug("drain skipped, already draining (%d pending)", len(self.queue))
            return self
        self.state = DispatcherState.DRAINING
        executed = 0
        limit = self.settings.max_drain
        try:
            while self.queue:
                task = self.queue.popleft()
                executed += 1
                if limit is not None and executed == limit + 1:
                    logger.warning(
                        "drain pass exceeded %d tasks (%d still pending); possible publish loop",
                        limit,
                        len(self.queue),
                    )
                try:
                    task.run()
                except Exception as exc:
                    try:
                        self.on_failure(exc, task.target, task.fn, task.args)
                    except Exception:
                        logger.exception("Failure hook raised for fn=%r", task.fn)
        finally:
            self.state = DispatcherState.IDLE
        return self

    def enter(
        self,
        target: Any,
        fn: Union[Callable[..., Any], str],
        args: Sequence[Any] = (),
    ) -> "Dispatcher":
        """Enqueue, then drain."""
        return self.enqueue(target, fn, args).drain()

    def on_failure(self, error: Exception, target: Any, fn: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        """Handle an exception raised by a task.  Override to route errors elsewhere."""
        if self.settings.log_failures:
            logger.error(
                "Task failed: fn=%r target=%r args=%r: %s",
                fn,
                target,
                args,
                error,
                exc_info=error,
            )

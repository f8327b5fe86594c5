"""
State events and the in-process event bus.

Services publish an event only after the mutation that caused it has
been committed.  Handlers run either inline (no executor) or on a
thread pool; either way a failing handler is logged and never reaches
the publisher.
"""

import datetime
import enum
import logging
import threading
from collections import defaultdict
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class EventType(str, enum.Enum):
    ENROLLED = "ENROLLED"
    WEEK_COMPLETED = "WEEK_COMPLETED"
    CYCLE_BOUNDARY_REACHED = "CYCLE_BOUNDARY_REACHED"
    CYCLE_STARTED = "CYCLE_STARTED"
    QUIT = "QUIT"
    WORKOUT_STARTED = "WORKOUT_STARTED"
    WORKOUT_COMPLETED = "WORKOUT_COMPLETED"
    WORKOUT_ABANDONED = "WORKOUT_ABANDONED"
    SET_LOGGED = "SET_LOGGED"


@dataclass(frozen=True)
class StateEvent:
    type: EventType
    user_id: int
    program_id: int
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime.datetime = field(default_factory=datetime.datetime.utcnow)


EventHandler = Callable[[StateEvent], None]


class EventBus:
    """Fan-out of :class:`StateEvent` to subscribed handlers."""

    def __init__(self, executor: Optional[Executor] = None):
        self._executor = executor
        self._handlers: dict[EventType, list[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()

    @classmethod
    def with_workers(cls, workers: int) -> "EventBus":
        """Inline bus for ``workers == 0``, thread pool otherwise."""
        if workers <= 0:
            return cls()
        return cls(ThreadPoolExecutor(max_workers=workers, thread_name_prefix="event-bus"))

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        with self._lock:
            self._handlers[event_type].append(handler)

    def subscriber_count(self, event_type: EventType) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, []))

    def publish(self, event: StateEvent) -> list[Exception]:
        """Run every handler for ``event`` now; return the errors they raised."""
        with self._lock:
            handlers = list(self._handlers.get(event.type, []))

        errors: list[Exception] = []
        for handler in handlers:
            try:
                handler(event)
            except Exception as exc:
                logger.exception("Event handler failed for %s (user %s)", event.type.value, event.user_id)
                errors.append(exc)
        return errors

    def publish_async(self, event: StateEvent) -> None:
        """Fire and forget.  Never raises."""
        if self._executor is None:
            self.publish(event)
            return
        try:
            self._executor.submit(self.publish, event)
        except RuntimeError:
            # Executor already shut down
            logger.exception("Dropped %s event for user %s", event.type.value, event.user_id)

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)

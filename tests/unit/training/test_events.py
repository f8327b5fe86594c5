"""Tests for the in-process event bus."""

import threading
from concurrent.futures import ThreadPoolExecutor

from app.training.events import EventBus, EventType, StateEvent


def _event(event_type: EventType = EventType.SET_LOGGED) -> StateEvent:
    return StateEvent(type=event_type, user_id=1, program_id=2, payload={"sessionId": 3})


def test_publish_reaches_subscribers_of_that_type_only():
    bus = EventBus()
    seen = []
    bus.subscribe(EventType.SET_LOGGED, seen.append)
    bus.subscribe(EventType.QUIT, lambda e: seen.append("quit"))
    bus.publish(_event())
    assert len(seen) == 1
    assert seen[0].payload == {"sessionId": 3}


def test_handler_order_is_subscription_order():
    bus = EventBus()
    seen = []
    bus.subscribe(EventType.ENROLLED, lambda e: seen.append(1))
    bus.subscribe(EventType.ENROLLED, lambda e: seen.append(2))
    bus.publish(_event(EventType.ENROLLED))
    assert seen == [1, 2]


def test_failing_handler_is_isolated():
    bus = EventBus()
    seen = []

    def boom(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.SET_LOGGED, boom)
    bus.subscribe(EventType.SET_LOGGED, seen.append)
    errors = bus.publish(_event())
    assert len(seen) == 1
    assert [str(e) for e in errors] == ["boom"]


def test_publish_async_never_raises():
    bus = EventBus()
    bus.subscribe(EventType.SET_LOGGED, lambda e: 1 / 0)
    bus.publish_async(_event())


def test_publish_without_subscribers():
    assert EventBus().publish(_event(EventType.QUIT)) == []


def test_subscriber_count():
    bus = EventBus()
    assert bus.subscriber_count(EventType.QUIT) == 0
    bus.subscribe(EventType.QUIT, print)
    assert bus.subscriber_count(EventType.QUIT) == 1


def test_worker_bus_runs_handlers_off_thread():
    bus = EventBus(ThreadPoolExecutor(max_workers=2))
    done = threading.Event()
    threads = []

    def handler(event):
        threads.append(threading.current_thread().name)
        done.set()

    bus.subscribe(EventType.WORKOUT_STARTED, handler)
    bus.publish_async(_event(EventType.WORKOUT_STARTED))
    assert done.wait(5)
    bus.shutdown()
    assert threads != [threading.current_thread().name]


def test_publish_after_shutdown_is_dropped():
    bus = EventBus.with_workers(1)
    bus.shutdown()
    bus.publish_async(_event())


def test_with_zero_workers_is_inline():
    bus = EventBus.with_workers(0)
    seen = []
    bus.subscribe(EventType.SET_LOGGED, seen.append)
    bus.publish_async(_event())
    assert len(seen) == 1

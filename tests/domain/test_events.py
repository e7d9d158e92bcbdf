from __future__ import annotations

import pytest

from collabsync.domain.events import AddressbookEvent, EventBus, EventEmitter, ListenerScope


def test_bus_satisfies_emitter_protocol(event_bus: EventBus) -> None:
    assert isinstance(event_bus, EventEmitter)


def test_listeners_run_in_subscription_order(event_bus: EventBus) -> None:
    received: list[tuple[str, object]] = []
    event_bus.subscribe(AddressbookEvent.CREATED, lambda payload: received.append(("a", payload)))
    event_bus.subscribe(AddressbookEvent.CREATED, lambda payload: received.append(("b", payload)))

    event_bus.emit(AddressbookEvent.CREATED, "book")

    assert received == [("a", "book"), ("b", "book")]


def test_emit_only_reaches_listeners_of_that_name(event_bus: EventBus) -> None:
    received: list[object] = []
    event_bus.subscribe(AddressbookEvent.DELETED, received.append)

    event_bus.emit(AddressbookEvent.CREATED, "book")

    assert received == []


def test_unsubscribe_stops_delivery(event_bus: EventBus) -> None:
    received: list[object] = []
    unsubscribe = event_bus.subscribe(AddressbookEvent.UPDATED, received.append)

    unsubscribe()
    unsubscribe()
    event_bus.emit(AddressbookEvent.UPDATED, "book")

    assert received == []


def test_listener_may_unsubscribe_while_emitting(event_bus: EventBus) -> None:
    received: list[object] = []
    unsubscribe = event_bus.subscribe(
        AddressbookEvent.CREATED, lambda payload: (received.append(payload), unsubscribe())
    )
    event_bus.subscribe(AddressbookEvent.CREATED, received.append)

    event_bus.emit(AddressbookEvent.CREATED, 1)
    event_bus.emit(AddressbookEvent.CREATED, 2)

    assert received == [1, 1, 2]


def test_listener_errors_propagate_to_emitter(event_bus: EventBus) -> None:
    def explode(payload: object) -> None:
        raise RuntimeError("listener failed")

    event_bus.subscribe(AddressbookEvent.CREATED, explode)

    with pytest.raises(RuntimeError, match="listener failed"):
        event_bus.emit(AddressbookEvent.CREATED)


def test_scope_drops_its_subscriptions_on_exit(event_bus: EventBus) -> None:
    received: list[object] = []
    with ListenerScope(event_bus) as scope:
        scope.subscribe(AddressbookEvent.CREATED, received.append)
        scope.subscribe(AddressbookEvent.DELETED, received.append)
        event_bus.emit(AddressbookEvent.CREATED, "inside")

    event_bus.emit(AddressbookEvent.CREATED, "outside")
    event_bus.emit(AddressbookEvent.DELETED, "outside")

    assert received == ["inside"]

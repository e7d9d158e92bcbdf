"""In-process publish/subscribe channel for confirmed state changes.

The bus is passed explicitly to the services that emit on it. Listeners are
called synchronously, in subscription order, from inside ``emit``; a surface
that subscribes should do so through a ``ListenerScope`` and close the scope
when the surface goes away.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

log = getLogger(__name__)

type Listener = Callable[[object], None]


class AddressbookEvent(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class CollaborationEvent(StrEnum):
    INVITE_USERS = "invite:users"


@runtime_checkable
class EventEmitter(Protocol):
    """What emitting services depend on."""

    def emit(self, name: str, payload: object = None) -> None: ...


class EventBus:
    def __init__(self) -> None:
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, name: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``name``. Returns an unsubscribe function."""

        self._listeners[name].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(name)
            if listeners and listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def emit(self, name: str, payload: object = None) -> None:
        listeners = tuple(self._listeners.get(name, ()))
        log.debug("Emitting %s to %d listener(s)", name, len(listeners))
        for listener in listeners:
            listener(payload)


class ListenerScope:
    """Owns the subscriptions of one surface; ``close`` drops them all."""

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._unsubscribers: list[Callable[[], None]] = []

    def __enter__(self) -> ListenerScope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def subscribe(self, name: str, listener: Listener) -> None:
        self._unsubscribers.append(self._bus.subscribe(name, listener))

    def close(self) -> None:
        while self._unsubscribers:
            self._unsubscribers.pop()()

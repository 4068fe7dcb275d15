"""Events about sources and caches, and a bus that delivers them."""

from __future__ import annotations

import abc
import asyncio
import logging
import threading
import weakref
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 256


@dataclass(frozen=True)
class SourceAdded:
    """A variable source was registered."""

    source_id: str


@dataclass(frozen=True)
class SourceRemoved:
    """A variable source was removed."""

    source_id: str


@dataclass(frozen=True)
class VariablesChanged:
    """The set of variables of a source changed."""

    source_id: str
    added: tuple = ()
    removed: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "added", tuple(self.added))
        object.__setattr__(self, "removed", tuple(self.removed))


@dataclass(frozen=True)
class CacheInvalidated:
    """Cached values were dropped; ``scope`` is the workspace context, or None for all."""

    scope: Optional[Any] = None


AbundantisEvent = Union[SourceAdded, SourceRemoved, VariablesChanged, CacheInvalidated]


class EventSubscriber(abc.ABC):
    """Receives every event published on a bus it is subscribed to."""

    @abc.abstractmethod
    def on_event(self, event: AbundantisEvent) -> None:
        """Handle one event."""


class EventReceiver:
    """A bounded queue of events broadcast by a bus.

    When the queue is full the oldest event is dropped and ``lagged`` grows.
    """

    def __init__(self, bus: "EventBus", capacity: int) -> None:
        self._bus = bus
        self._capacity = capacity
        self._queue: deque = deque()
        self._condition = threading.Condition()
        self.lagged = 0

    def _push(self, event: AbundantisEvent) -> None:
        with self._condition:
            if len(self._queue) >= self._capacity:
                self._queue.popleft()
                self.lagged += 1
            self._queue.append(event)
            self._condition.notify_all()

    def try_recv(self) -> Optional[AbundantisEvent]:
        """Return the next event, or None if none is waiting."""
        with self._condition:
            return self._queue.popleft() if self._queue else None

    def recv(self, timeout: Optional[float] = None) -> AbundantisEvent:
        """Wait for the next event; raise TimeoutError if none arrives in time."""
        with self._condition:
            if not self._condition.wait_for(lambda: bool(self._queue), timeout):
                raise TimeoutError("no event received")
            return self._queue.popleft()

    def close(self) -> None:
        """Stop receiving events from the bus."""
        self._bus._detach(self)

    def __len__(self) -> int:
        with self._condition:
            return len(self._queue)

    def __enter__(self) -> "EventReceiver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class EventBus:
    """Delivers events to subscribers and to broadcast receivers."""

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._capacity = max(buffer_size, 1)
        self._subscribers: list = []
        self._receivers: weakref.WeakSet = weakref.WeakSet()
        self._lock = threading.Lock()

    def _broadcast(self, event: AbundantisEvent) -> None:
        with self._lock:
            receivers = list(self._receivers)
        if not receivers:
            logger.debug("No receivers for event bus broadcast")
        for receiver in receivers:
            receiver._push(event)

    def _detach(self, receiver: EventReceiver) -> None:
        with self._lock:
            self._receivers.discard(receiver)

    def publish(self, event: AbundantisEvent) -> None:
        """Deliver ``event`` to every subscriber, then to every receiver."""
        with self._lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            subscriber.on_event(event)
        self._broadcast(event)

    async def publish_async(self, event: AbundantisEvent) -> None:
        """Deliver ``event`` to subscribers in a worker thread, then broadcast it.

        A failing subscriber is logged and does not stop the broadcast.
        """
        with self._lock:
            subscribers = list(self._subscribers)

        def notify() -> None:
            for subscriber in subscribers:
                subscriber.on_event(event)

        try:
            await asyncio.to_thread(notify)
        except Exception:
            logger.exception("Async event subscriber failed")
        self._broadcast(event)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        with self._lock:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: EventSubscriber) -> None:
        """Remove every registration of this very subscriber object."""
        with self._lock:
            self._subscribers = [s for s in self._subscribers if s is not subscriber]

    def subscribe_channel(self) -> EventReceiver:
        """Open a receiver that gets every event published from now on."""
        receiver = EventReceiver(self, self._capacity)
        with self._lock:
            self._receivers.add(receiver)
        return receiver

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def receiver_count(self) -> int:
        with self._lock:
            return len(self._receivers)
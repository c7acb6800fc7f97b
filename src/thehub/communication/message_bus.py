from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Hashable, List, Mapping, Optional, TypeVar

from pydantic import ValidationError

from ..settings import HubSettings
from .dispatcher import Dispatcher, FailureHook
from .subscriber import Subscriber

if TYPE_CHECKING:
    from .channel import Channel

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Hub(Generic[K, V]):
    """Property-change pub-sub hub with a last-value cache (process-local).

    Subscriber calls are never made directly; they are queued on the hub's
    `Dispatcher` so handlers run one at a time, in order, even when a handler
    publishes again.
    """

    def __init__(
        self,
        on_failure: Optional[FailureHook] = None,
        settings: Optional[HubSettings] = None,
    ) -> None:
        self.settings = settings or HubSettings()
        self.subscriber_map: Dict[K, List[Subscriber]] = {}
        self.last: Dict[K, V] = {}
        self.dispatcher = Dispatcher(on_failure=on_failure, settings=self.settings)

    def __repr__(self) -> str:
        return "Hub"

    def subscribers_for(self, property: K) -> List[Subscriber]:
        subscribers = self.subscriber_map.get(property)
        if subscribers is None:
            subscribers = self.subscriber_map[property] = []
        return subscribers

    def subscribe(self, property: K, callback: Callable[..., Any], context: Any = None) -> "Hub[K, V]":
        """Register ``callback`` (with optional ``context``) for changes to ``property``.

        Subscribing the same pair twice is a no-op.  If the property already
        has a value, the new subscriber receives it through the queue.
        """
        try:
            new_subscriber = Subscriber(callback=callback, context=context)
        except ValidationError:
            logger.debug("Ignoring non-callable subscriber for %r: %r", property, callback)
            return self
        subscribers = self.subscribers_for(property)
        if new_subscriber in subscribers:
            return self
        subscribers.append(new_subscriber)
        if property in self.last:
            self.dispatcher.enter(new_subscriber, new_subscriber.call, (self.last[property],))
        return self

    def unsubscribe(self, property: K, callback: Callable[..., Any], context: Any = None) -> "Hub[K, V]":
        """Stop future deliveries to the pair.  Already queued calls still run."""
        try:
            old_subscriber = Subscriber(callback=callback, context=context)
        except ValidationError:
            logger.debug("Ignoring unsubscribe of non-callable for %r: %r", property, callback)
            return self
        subscribers = self.subscribers_for(property)
        remaining = [subscriber for subscriber in subscribers if subscriber != old_subscriber]
        if len(remaining) == len(subscribers):
            logger.debug("Unsubscribe for %r matched nothing", property)
        subscribers[:] = remaining
        return self

    def dispatch(self, property: K, value: V) -> "Hub[K, V]":
        """Record the last value and queue one call per current subscriber."""
        self.last[property] = value
        for subscriber in list(self.subscribers_for(property)):
            self.dispatcher.enqueue(subscriber, subscriber.call, (value,))
        return self

    def publish(self, property: K, value: V) -> "Hub[K, V]":
        self.dispatch(property, value)
        self.dispatcher.drain()
        return self

    def publish_multiple(self, properties: Mapping[K, V]) -> "Hub[K, V]":
        """Publish several properties at once.

        Every last value is committed before the first subscriber call runs.
        Do not rely on the order between properties.
        """
        for property, value in properties.items():
            self.dispatch(property, value)
        self.dispatcher.drain()
        return self

    def get_last(self, property: K, default: Any = None) -> Any:
        return self.last[property] if property in self.last else default

    def channel(self, property: K) -> "Channel[V]":
        from .channel import Channel

        return Channel(self, property)

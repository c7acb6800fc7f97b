from __future__ import annotations

from typing import Any, Callable, Generic, Hashable, List, TypeVar

from .message_bus import Hub
from .subscriber import Subscriber

V = TypeVar("V")


class Channel(Generic[V]):
    """A hub handle bound to one property, typed by its payload."""

    def __init__(self, hub: Hub, property: Hashable):
        self.hub = hub
        self.property = property

    def __repr__(self) -> str:
        return f"Channel[{self.property!r}]"

    def publish(self, value: V) -> "Channel[V]":
        self.hub.publish(self.property, value)
        return self

    def subscribe(self, callback: Callable[..., Any], context: Any = None) -> "Channel[V]":
        self.hub.subscribe(self.property, callback, context)
        return self

    def unsubscribe(self, callback: Callable[..., Any], context: Any = None) -> "Channel[V]":
        self.hub.unsubscribe(self.property, callback, context)
        return self

    def last(self, default: Any = None) -> Any:
        return self.hub.get_last(self.property, default)

    def subscribers(self) -> List[Subscriber]:
        return self.hub.subscribers_for(self.property)

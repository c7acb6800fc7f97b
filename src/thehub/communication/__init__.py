from .dispatcher import Dispatcher, DispatcherState, FailureHook, Task
from .subscriber import Subscriber
from .message_bus import Hub
from .channel import Channel

__all__ = [
    "Channel",
    "Dispatcher",
    "DispatcherState",
    "FailureHook",
    "Hub",
    "Subscriber",
    "Task",
]

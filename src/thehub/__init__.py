"""In-process property pub-sub hub built on a serialized task dispatcher."""

from .communication import Channel, Dispatcher, DispatcherState, Hub, Subscriber, Task
from .settings import HubSettings
from .utils.logger import setup_logger

__all__ = [
    "Channel",
    "Dispatcher",
    "DispatcherState",
    "Hub",
    "HubSettings",
    "Subscriber",
    "Task",
    "setup_logger",
]

__version__ = "0.1.0"

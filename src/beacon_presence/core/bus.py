"""
Event Bus implementation for occupancy and monitoring state.

The Event Bus is a set of simple, synchronous broadcast channels.
Delivery is fire-and-forget: nothing is buffered or replayed.
"""

from typing import Any, Callable, Generic, List, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

Handler = Callable[[Any], None]


class Channel(Generic[T]):
    """
    An unbounded broadcast channel.

    Handlers are wrapped in try/except so one bad subscriber cannot stop
    delivery to the others or crash the sender.
    """

    def __init__(self, name: str) -> None:
        """
        Initialize a channel.

        Args:
            name: Channel name used in log messages
        """
        self.name = name
        self._handlers: List[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Callable[[], None]:
        """
        Subscribe to values sent on this channel.

        Args:
            handler: Callable that receives each value

        Returns:
            Callable that removes the subscription
        """
        self._handlers.append(handler)
        logger.debug(f"Subscribed handler {_name_of(handler)} to {self.name}")

        def unsubscribe() -> None:
            self.unsubscribe(handler)

        return unsubscribe

    def unsubscribe(self, handler: Callable[[T], None]) -> None:
        """
        Remove a handler from this channel.

        Args:
            handler: The handler to remove
        """
        self._handlers = [h for h in self._handlers if h != handler]
        logger.debug(f"Unsubscribed handler {_name_of(handler)} from {self.name}")

    def send(self, value: T) -> None:
        """
        Deliver a value to every current subscriber.

        Args:
            value: The value to broadcast
        """
        logger.debug(f"Sending on {self.name}: {value!r}")

        for handler in list(self._handlers):
            try:
                handler(value)
            except Exception as e:
                logger.error(
                    f"Error in handler {_name_of(handler)} for {self.name}: {e}",
                    exc_info=True,
                )

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)


class EventBus:
    """
    The channels published by the beacon detector.

    Channels:
    - enters: room ids whose region was entered
    - exits: room ids whose region was exited
    - permission: PermissionState whenever the gate changes
    - telemetry: MonitorSnapshot after every ranging burst
    """

    def __init__(self) -> None:
        """Initialize the event bus."""
        self.enters: Channel[int] = Channel("enters")
        self.exits: Channel[int] = Channel("exits")
        self.permission: Channel[Any] = Channel("permission")
        self.telemetry: Channel[Any] = Channel("telemetry")


def _name_of(handler: Handler) -> str:
    return getattr(handler, "__name__", repr(handler))

"""Optional observers of region callbacks.

The detector works without any observer. A harness that wants local alerts
for every boundary crossing (typically a debug build) wires in a
LocalNotificationObserver.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from beacon_presence.core.config import DetectorConfig

logger = logging.getLogger(__name__)


class TransitionObserver(ABC):
    """Receives every accepted beacon-region callback."""

    @abstractmethod
    def on_region_callback(
        self, room_id: int, is_entered: bool, emitted: bool, beacon_count: int
    ) -> None:
        """
        Called after the detector handled an enter/exit callback.

        Args:
            room_id: Room the region belongs to
            is_entered: True for enter, False for exit
            emitted: True if the callback produced an event on the bus
            beacon_count: Number of beacons currently scanned
        """
        pass


@dataclass(frozen=True)
class LocalNotification:
    """A fire-and-forget local alert.

    Attributes:
        identifier: Platform request identifier.
        title: Alert title.
        body: Alert body.
        sound: Whether the alert plays the default sound.
    """

    identifier: str
    title: str
    body: str
    sound: bool = True


Notifier = Callable[[LocalNotification], None]


class LocalNotificationObserver(TransitionObserver):
    """
    Posts a local notification for each region callback.

    Honors the notify_on_enter / notify_on_exit / notify_with_sound toggles
    of DetectorConfig. Delivery is best effort: failures are logged and
    never reach the detector.
    """

    def __init__(
        self,
        notifier: Notifier,
        config: Optional[DetectorConfig] = None,
        app_name: str = "CoThings",
    ) -> None:
        self._notifier = notifier
        self._config = config or DetectorConfig()
        self._app_name = app_name

    def build_notification(
        self, room_id: int, is_entered: bool, beacon_count: int
    ) -> LocalNotification:
        action = "Enter" if is_entered else "Exit"
        return LocalNotification(
            identifier=f"testNotification{random.randint(200, 300)}",
            title=f"{self._app_name} Room: {room_id}",
            body=f"Action:{action} beacon count:{beacon_count}",
            sound=self._config.notify_with_sound,
        )

    def on_region_callback(
        self, room_id: int, is_entered: bool, emitted: bool, beacon_count: int
    ) -> None:
        if is_entered and not self._config.notify_on_enter:
            return
        if not is_entered and not self._config.notify_on_exit:
            return

        notification = self.build_notification(room_id, is_entered, beacon_count)
        try:
            self._notifier(notification)
        except Exception as e:
            logger.error(f"Failed to deliver notification for room {room_id}: {e}", exc_info=True)

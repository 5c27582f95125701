"""TransitionDetector - turns raw region callbacks into occupancy events."""

import logging
from typing import Callable, List, Optional, Sequence

from beacon_presence.core.bus import EventBus
from beacon_presence.core.store import StatusStore

from .engine import TransitionResult, decide_transition
from .models import Region
from .notifications import TransitionObserver

logger = logging.getLogger(__name__)


class TransitionDetector:
    """
    Deduplicates region callbacks against the persisted status map.

    The status store is written before the event is sent, so the store and
    the bus never disagree about the last transition of a region: a
    callback either flips the stored flag and emits exactly one event, or
    does neither. A store that cannot be written drops the callback.
    """

    def __init__(
        self,
        store: StatusStore,
        bus: EventBus,
        observers: Optional[Sequence[TransitionObserver]] = None,
        beacon_count: Optional[Callable[[], int]] = None,
    ) -> None:
        self._store = store
        self._bus = bus
        self._observers: List[TransitionObserver] = list(observers or [])
        self._beacon_count = beacon_count or (lambda: 0)

    def add_observer(self, observer: TransitionObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: TransitionObserver) -> None:
        self._observers = [o for o in self._observers if o is not observer]

    def handle(self, region: Region, is_entered: bool) -> TransitionResult:
        """
        Process one enter/exit callback.

        Args:
            region: Region reported by the platform
            is_entered: True for enter, False for exit

        Returns:
            TransitionResult describing what happened
        """
        statuses = self._store.load()
        result = decide_transition(statuses, region, is_entered)
        if result.room_id is None:
            return result

        if result.event is not None:
            try:
                self._store.save(result.statuses)
            except OSError as e:
                logger.error(
                    f"Failed to persist status for room {result.room_id}, dropping transition: {e}",
                    exc_info=True,
                )
                return TransitionResult(statuses=statuses)

            if result.event.is_entered:
                self._bus.enters.send(result.event.room_id)
            else:
                self._bus.exits.send(result.event.room_id)

            logger.info(
                f"Room {result.event.room_id} "
                f"{'ENTERED' if result.event.is_entered else 'EXITED'}"
            )

        self._notify_observers(result.room_id, is_entered, result.changed)
        return result

    def _notify_observers(self, room_id: int, is_entered: bool, emitted: bool) -> None:
        if not self._observers:
            return

        beacon_count = self._beacon_count()
        for observer in self._observers:
            try:
                observer.on_region_callback(room_id, is_entered, emitted, beacon_count)
            except Exception as e:
                logger.error(
                    f"Error in observer {type(observer).__name__} for room {room_id}: {e}",
                    exc_info=True,
                )

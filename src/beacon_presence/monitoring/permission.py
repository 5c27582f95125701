"""PermissionGate - publishes whether monitoring can take effect."""

import logging
from typing import Optional

from beacon_presence.core.bus import EventBus

from .engine import evaluate_permission
from .models import AuthorizationStatus, PermissionState

logger = logging.getLogger(__name__)


class PermissionGate:
    """
    Tracks location authorization and monitoring capability.

    Purely reactive: the state only changes when an authorization callback
    arrives, and the only side effect is publishing the new value.
    """

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self._bus = bus
        self._state = PermissionState.UNKNOWN

    @property
    def state(self) -> PermissionState:
        return self._state

    @property
    def granted(self) -> Optional[bool]:
        """True/False once known, None before the first callback."""
        if self._state is PermissionState.UNKNOWN:
            return None
        return self._state is PermissionState.GRANTED

    def on_authorization_changed(
        self, status: AuthorizationStatus, monitoring_available: bool
    ) -> PermissionState:
        """
        Recompute the gate after an authorization callback.

        Args:
            status: Authorization reported by the platform
            monitoring_available: Whether beacon region monitoring is supported

        Returns:
            The new permission state
        """
        new_state = evaluate_permission(status, monitoring_available)
        if new_state is self._state:
            return new_state

        logger.info(
            f"Permission {self._state.value} -> {new_state.value} "
            f"(authorization={status.value}, monitoring_available={monitoring_available})"
        )
        self._state = new_state

        if self._bus:
            self._bus.permission.send(new_state)

        return new_state

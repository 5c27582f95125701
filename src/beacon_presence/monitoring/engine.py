"""The core decision logic for beacon monitoring.

Pure functions: they take the current state and an incoming platform signal
and return the new state plus whatever should be emitted. Nothing here
touches the store, the bus or the platform.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping

from beacon_presence.core.identity import parse_region_identifier

from .models import (
    AuthorizationStatus,
    PermissionState,
    Region,
    RegionKind,
    TransitionEvent,
)

_LOGGER = logging.getLogger(__name__)

SUFFICIENT_AUTHORIZATION = frozenset(
    {
        AuthorizationStatus.AUTHORIZED_ALWAYS,
        AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
    }
)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one region callback.

    Attributes:
        statuses: Status map after the callback (same content if nothing changed).
        event: The transition to emit, or None for a discarded/duplicate callback.
        room_id: Room the callback resolved to (None if it was discarded as foreign).
    """

    statuses: Mapping[str, bool] = field(default_factory=dict)
    event: TransitionEvent | None = None
    room_id: int | None = None

    @property
    def changed(self) -> bool:
        return self.event is not None


def decide_transition(
    statuses: Mapping[str, bool], region: Region, is_entered: bool
) -> TransitionResult:
    """Decide whether a region callback is a genuine transition.

    Args:
        statuses: Current region identifier -> entered map. Not mutated.
        region: Region reported by the platform.
        is_entered: True for an enter callback, False for exit.

    Returns:
        TransitionResult. The event is set only when the stored flag flips.
    """
    if region.kind is not RegionKind.BEACON:
        _LOGGER.debug(f"Discarding callback for non-beacon region {region.identifier!r}")
        return TransitionResult(statuses=statuses)

    identifier = region.identifier
    room_id = parse_region_identifier(identifier)
    if room_id is None:
        _LOGGER.debug(f"Discarding callback for unparsable region identifier {identifier!r}")
        return TransitionResult(statuses=statuses)

    if statuses.get(identifier, False) == is_entered:
        _LOGGER.debug(
            f"Duplicate {'enter' if is_entered else 'exit'} for region {identifier}, suppressed"
        )
        return TransitionResult(statuses=statuses, room_id=room_id)

    new_statuses = dict(statuses)
    new_statuses[identifier] = is_entered

    return TransitionResult(
        statuses=new_statuses,
        event=TransitionEvent(
            room_id=room_id,
            region_identifier=identifier,
            is_entered=is_entered,
        ),
        room_id=room_id,
    )


def evaluate_permission(
    status: AuthorizationStatus, monitoring_available: bool
) -> PermissionState:
    """Derive the permission gate value.

    Args:
        status: Authorization reported by the platform.
        monitoring_available: Whether beacon region monitoring is supported.

    Returns:
        GRANTED only when authorization is sufficient and monitoring is available.
    """
    if status in SUFFICIENT_AUTHORIZATION and monitoring_available:
        return PermissionState.GRANTED
    return PermissionState.DENIED

"""
Beacon monitoring for beacon-presence.

Turns noisy platform region callbacks into one authoritative enter/exit
event per room.

Features:
- Region monitoring + ranging per room (idempotent start/stop)
- Duplicate suppression against a persisted status map
- Permission gate (authorization + monitoring capability)
- Live ranging telemetry snapshots
- Optional debug notification observer

Events Emitted:
- enters / exits: room ids on genuine transitions
- permission: PermissionState on change
- telemetry: MonitorSnapshot after each ranging burst
"""

from .adapter import LocationPlatform, MockLocationPlatform
from .base import LocationEventHandler
from .detector import BeaconDetector
from .dispatch import SerialDispatcher
from .engine import TransitionResult, decide_transition, evaluate_permission
from .models import (
    AuthorizationStatus,
    BeaconRegion,
    BeaconSnapshot,
    CircularRegion,
    MonitoredBeacon,
    MonitorSnapshot,
    PermissionState,
    Proximity,
    RangedBeacon,
    Region,
    RegionKind,
    TransitionEvent,
)
from .monitor import RegionMonitor
from .notifications import LocalNotification, LocalNotificationObserver, TransitionObserver
from .permission import PermissionGate
from .transitions import TransitionDetector

__all__ = [
    "BeaconDetector",
    "RegionMonitor",
    "TransitionDetector",
    "PermissionGate",
    "SerialDispatcher",
    "LocationPlatform",
    "MockLocationPlatform",
    "LocationEventHandler",
    "TransitionResult",
    "decide_transition",
    "evaluate_permission",
    "AuthorizationStatus",
    "BeaconRegion",
    "BeaconSnapshot",
    "CircularRegion",
    "MonitoredBeacon",
    "MonitorSnapshot",
    "PermissionState",
    "Proximity",
    "RangedBeacon",
    "Region",
    "RegionKind",
    "TransitionEvent",
    "LocalNotification",
    "LocalNotificationObserver",
    "TransitionObserver",
]

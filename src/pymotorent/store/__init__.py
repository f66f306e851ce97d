"""Client-side state containers."""

from .auth import AuthStore
from .base import BaseStore
from .booking import BookingStore
from .cart import CartStore
from .motorcycle import MotorcycleStore
from .motorcycle_log import MotorcycleLogStore
from .notify import LoggingNotifier, Notifier, RecordingNotifier
from .persistence import JsonFileStorage, MemoryStorage, SnapshotStorage
from .state import AppState

__all__ = [
    "AppState",
    "AuthStore",
    "BaseStore",
    "BookingStore",
    "CartStore",
    "JsonFileStorage",
    "LoggingNotifier",
    "MemoryStorage",
    "MotorcycleLogStore",
    "MotorcycleStore",
    "Notifier",
    "RecordingNotifier",
    "SnapshotStorage",
]

"""User-visible notifications raised by stores."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Protocol

_LOGGER = logging.getLogger(__name__)

Level = Literal["success", "error"]


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Send notifications to the library logger."""

    def success(self, message: str) -> None:
        _LOGGER.info("%s", message)

    def error(self, message: str) -> None:
        _LOGGER.error("%s", message)


@dataclass
class RecordingNotifier:
    """Keep notifications in memory, for UIs that poll and for tests."""

    messages: list[tuple[Level, str]] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def drain(self) -> list[tuple[Level, str]]:
        drained = list(self.messages)
        self.messages.clear()
        return drained

"""Store base class and shared behavior."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from ..api import RestApi
from ..exceptions import PyMotoRentError
from .notify import LoggingNotifier, Notifier

_LOGGER = logging.getLogger(__name__)


class BaseStore:
    """Holds one snapshot of server-owned data plus ``loading`` and ``error``.

    Every remote operation runs inside :meth:`_operation`: ``loading`` is set
    and ``error`` cleared on entry, ``loading`` is cleared on every exit path,
    and a library error is recorded, shown through the notifier and re-raised.
    """

    name = "store"

    def __init__(self, api: RestApi, notifier: Notifier | None = None) -> None:
        self._api = api
        self._notifier: Notifier = notifier or LoggingNotifier()
        self.loading = False
        self.error: str | None = None
        self.on_change: Callable[[], None] | None = None

    def reset(self) -> None:
        self.loading = False
        self.error = None
        self._reset_snapshot()

    def _reset_snapshot(self) -> None:
        raise NotImplementedError

    @asynccontextmanager
    async def _operation(self, operation: str, fallback_message: str) -> AsyncIterator[None]:
        _LOGGER.debug("Store %s %s started", self.name, operation)
        self.loading = True
        self.error = None
        try:
            yield
        except PyMotoRentError as exc:
            message = exc.user_message or fallback_message
            self.error = message
            _LOGGER.debug("Store %s %s failed: %s", self.name, operation, exc)
            self._notifier.error(message)
            raise
        finally:
            self.loading = False
        _LOGGER.debug("Store %s %s completed", self.name, operation)
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

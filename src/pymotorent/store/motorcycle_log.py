"""Maintenance log store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..api import RestApi
from ..api.mapping import map_motorcycle_log, map_page, unwrap_data
from ..models import MotorcycleLog, PageMetadata
from .base import BaseStore
from .merge import prepend, remove_by_id, replace_by_id
from .notify import Notifier


class MotorcycleLogStore(BaseStore):
    name = "motorcycle_log"

    def __init__(self, api: RestApi, notifier: Notifier | None = None) -> None:
        super().__init__(api, notifier)
        self.logs: list[MotorcycleLog] = []
        self.metadata = PageMetadata()

    def _reset_snapshot(self) -> None:
        self.logs = []
        self.metadata = PageMetadata()

    async def get_all_motorcycle_logs(
        self,
        params: Mapping[str, Any] | None = None,
    ) -> list[MotorcycleLog]:
        async with self._operation("get_all_motorcycle_logs", "Failed to fetch motorcycle logs"):
            envelope = await self._api.get_all_motorcycle_logs(params)
            self._set_page(unwrap_data(envelope))
        return self.logs

    async def get_motorcycle_logs(
        self,
        motorcycle_id: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[MotorcycleLog]:
        async with self._operation("get_motorcycle_logs", "Failed to fetch motorcycle logs"):
            envelope = await self._api.get_motorcycle_logs(motorcycle_id, params)
            self._set_page(unwrap_data(envelope))
        return self.logs

    async def create_motorcycle_log(
        self,
        motorcycle_id: str,
        data: Mapping[str, Any],
    ) -> MotorcycleLog:
        """Create a log; newest logs are held first."""
        async with self._operation("create_motorcycle_log", "Failed to create motorcycle log"):
            envelope = await self._api.create_motorcycle_log(motorcycle_id, data)
            log = map_motorcycle_log(unwrap_data(envelope))
            self.logs = prepend(self.logs, log)
        return log

    async def update_motorcycle_log(self, log_id: str, data: Mapping[str, Any]) -> MotorcycleLog:
        async with self._operation("update_motorcycle_log", "Failed to update motorcycle log"):
            envelope = await self._api.update_motorcycle_log(log_id, data)
            log = map_motorcycle_log(unwrap_data(envelope))
            self.logs = replace_by_id(self.logs, log, log_id)
        return log

    async def delete_motorcycle_log(self, log_id: str) -> None:
        async with self._operation("delete_motorcycle_log", "Failed to delete motorcycle log"):
            await self._api.delete_motorcycle_log(log_id)
            self.logs = remove_by_id(self.logs, log_id)

    def _set_page(self, data: Any) -> None:
        raw_items, metadata = map_page(data)
        self.logs = [map_motorcycle_log(item) for item in raw_items]
        self.metadata = metadata

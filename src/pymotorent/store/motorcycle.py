"""Motorcycle (fleet) store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..api import RestApi
from ..api.mapping import map_motorcycle, map_page, unwrap_data
from ..models import Motorcycle, PageMetadata
from .base import BaseStore
from .merge import append, remove_by_id, replace_by_id
from .notify import Notifier


class MotorcycleStore(BaseStore):
    name = "motorcycle"

    def __init__(self, api: RestApi, notifier: Notifier | None = None) -> None:
        super().__init__(api, notifier)
        self.motorcycles: list[Motorcycle] = []
        self.metadata = PageMetadata()

    def _reset_snapshot(self) -> None:
        self.motorcycles = []
        self.metadata = PageMetadata()

    async def get_all_motorcycles(self, params: Mapping[str, Any] | None = None) -> list[Motorcycle]:
        async with self._operation("get_all_motorcycles", "Failed to fetch motorcycles"):
            envelope = await self._api.get_all_motorcycles(params)
            raw_items, metadata = map_page(unwrap_data(envelope))
            self.motorcycles = [map_motorcycle(item) for item in raw_items]
            self.metadata = metadata
        return self.motorcycles

    async def add_motorcycle(self, data: Mapping[str, Any]) -> Motorcycle:
        async with self._operation("add_motorcycle", "Failed to add motorcycle"):
            envelope = await self._api.add_motorcycle(data)
            motorcycle = map_motorcycle(unwrap_data(envelope))
            self.motorcycles = append(self.motorcycles, motorcycle)
        return motorcycle

    async def get_motorcycle_by_id(self, motorcycle_id: str) -> Motorcycle:
        """Fetch one motorcycle; the held list becomes just that motorcycle."""
        async with self._operation("get_motorcycle_by_id", "Failed to fetch motorcycle"):
            envelope = await self._api.get_motorcycle_by_id(motorcycle_id)
            motorcycle = map_motorcycle(unwrap_data(envelope))
            self.motorcycles = [motorcycle]
        return motorcycle

    async def update_motorcycle_details(
        self,
        motorcycle_id: str,
        data: Mapping[str, Any],
    ) -> Motorcycle:
        async with self._operation("update_motorcycle_details", "Failed to update motorcycle"):
            envelope = await self._api.update_motorcycle_details(motorcycle_id, data)
            motorcycle = map_motorcycle(unwrap_data(envelope))
            self.motorcycles = replace_by_id(self.motorcycles, motorcycle, motorcycle_id)
        return motorcycle

    async def update_motorcycle_maintenance_logs(
        self,
        motorcycle_id: str,
        data: Mapping[str, Any],
    ) -> None:
        async with self._operation(
            "update_motorcycle_maintenance_logs",
            "Failed to update maintenance logs",
        ):
            await self._api.update_motorcycle_maintenance_logs(motorcycle_id, data)

    async def delete_motorcycle(self, motorcycle_id: str) -> None:
        async with self._operation("delete_motorcycle", "Failed to delete motorcycle"):
            await self._api.delete_motorcycle(motorcycle_id)
            self.motorcycles = remove_by_id(self.motorcycles, motorcycle_id)

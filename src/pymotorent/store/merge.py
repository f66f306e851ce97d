"""Rules for folding a mutation response into a held snapshot.

Collections are merged by entity id; singleton resources (cart, current
user) are always replaced wholesale by the caller.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Protocol, TypeVar

from ..models import Booking, User


class _HasId(Protocol):
    @property
    def id(self) -> str: ...


EntityT = TypeVar("EntityT", bound=_HasId)


def replace_by_id(items: Sequence[EntityT], entity: EntityT, entity_id: str | None = None) -> list[EntityT]:
    """Swap the entry with a matching id; unknown ids leave the list unchanged."""
    target = entity_id if entity_id is not None else entity.id
    return [entity if item.id == target else item for item in items]


def upsert_by_id(items: Sequence[EntityT], entity: EntityT) -> list[EntityT]:
    if any(item.id == entity.id for item in items):
        return replace_by_id(items, entity)
    return append(items, entity)


def append(items: Sequence[EntityT], entity: EntityT) -> list[EntityT]:
    return [*items, entity]


def prepend(items: Sequence[EntityT], entity: EntityT) -> list[EntityT]:
    return [entity, *items]


def remove_by_id(items: Sequence[EntityT], entity_id: str) -> list[EntityT]:
    return [item for item in items if item.id != entity_id]


def attach_customer(booking: Booking, customer: User | None) -> Booking:
    """Merge the ``{updatedBooking, customer}`` response pair into one booking."""
    if customer is None:
        return booking
    return dataclasses.replace(booking, customer=customer)

"""
Training plan change events.

Open plan views subscribe per pet. Every write to a pet's training tasks
publishes a refresh event naming the affected days, so all views of that
pet reload them whoever made the change.
"""

import asyncio
from typing import Iterable
from uuid import UUID

from pawplan.core.logger import setup_logger
from pawplan.models.enums import DayOfWeek
from pawplan.models.plan import PlanRefreshEvent

logger = setup_logger(__name__)


class PlanEventBroker:
    """Fans refresh events out to the subscribed views of each pet."""

    def __init__(self) -> None:
        self._subscribers: dict[UUID, set[asyncio.Queue[PlanRefreshEvent]]] = {}

    def subscribe(self, pet_id: UUID) -> asyncio.Queue[PlanRefreshEvent]:
        queue: asyncio.Queue[PlanRefreshEvent] = asyncio.Queue()
        self._subscribers.setdefault(pet_id, set()).add(queue)
        return queue

    def unsubscribe(self, pet_id: UUID, queue: asyncio.Queue[PlanRefreshEvent]) -> None:
        queues = self._subscribers.get(pet_id)
        if not queues:
            return
        queues.discard(queue)
        if not queues:
            del self._subscribers[pet_id]

    def subscriber_count(self, pet_id: UUID) -> int:
        return len(self._subscribers.get(pet_id, ()))

    def publish_refresh(
        self,
        pet_id: UUID,
        days: Iterable[DayOfWeek],
        changed_by: str,
    ) -> PlanRefreshEvent:
        """
        Queue a refresh event for every view of ``pet_id``.

        Args:
            pet_id: Pet whose tasks changed
            days: Day partitions touched by the write; duplicates are dropped
            changed_by: Acting user id

        Returns:
            The published event
        """
        event = PlanRefreshEvent(
            pet_id=pet_id,
            days=sorted(set(days), key=lambda d: d.weekday),
            changed_by=changed_by,
        )
        queues = self._subscribers.get(pet_id, set())
        for queue in queues:
            queue.put_nowait(event)
        logger.debug(
            f"Refresh for pet {pet_id} ({','.join(d.value for d in event.days)}) "
            f"sent to {len(queues)} view(s)"
        )
        return event


plan_events = PlanEventBroker()

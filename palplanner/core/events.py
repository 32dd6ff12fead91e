"""Change notification for store observers (views, widgets, tests)."""

import logging
import threading
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


class ChangeKind(StrEnum):
    """What changed inside a store."""

    TASK_ADDED = "task_added"
    TASK_COMPLETED = "task_completed"
    TASK_DELETED = "task_deleted"
    TASKS_EXPIRED = "tasks_expired"
    POINTS_CHANGED = "points_changed"
    PET_STATS_CHANGED = "pet_stats_changed"
    PET_RENAMED = "pet_renamed"
    PET_EQUIPMENT_CHANGED = "pet_equipment_changed"
    ITEM_PURCHASED = "item_purchased"
    ITEM_EQUIPPED = "item_equipped"
    ITEM_UNEQUIPPED = "item_unequipped"


class StoreEvent(BaseModel):
    """Event published after a store applied a change."""

    store: str = Field(..., description="Name of the publishing store (tasks, pet, shop)")
    kind: ChangeKind = Field(..., description="What changed")
    subject_id: str | None = Field(default=None, description="Task ID, item ID or category the change applies to")


Listener = Callable[[StoreEvent], None]


class ChangeNotifier:
    """Subscribe/unsubscribe registry that fans events out to listeners.

    Listeners are called synchronously on the publishing thread. A failing
    listener is logged and skipped.
    """

    def __init__(self, store: str) -> None:
        self.store = store
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Callable that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove a listener. Returns False if it was not subscribed."""
        with self._lock:
            if listener not in self._listeners:
                return False
            self._listeners.remove(listener)
            return True

    def publish(self, kind: ChangeKind, subject_id: str | None = None) -> StoreEvent:
        """Build an event for this store and deliver it to every listener."""
        event = StoreEvent(store=self.store, kind=kind, subject_id=subject_id)
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener failed for %s event %s", self.store, kind)
        return event

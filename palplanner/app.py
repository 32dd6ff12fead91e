"""PalPlanner application core: wires the stores to their collaborators."""

import logging
from types import TracebackType
from typing import Any, Self

from palplanner.core.clock import Clock, SystemClock
from palplanner.core.config import Settings, get_settings
from palplanner.core.logging import configure_logfire
from palplanner.core.scheduler import APSchedulerTicker
from palplanner.domain.shop import ItemCategory
from palplanner.models.service_models import ActivitySummary
from palplanner.services.analytics_service import get_activity_summary
from palplanner.services.notification_service import LocalNotificationScheduler, NotificationScheduler
from palplanner.services.pet_service import DECAY_JOB_ID, PetStore
from palplanner.services.shop_service import ShopStore
from palplanner.services.task_service import EXPIRATION_JOB_ID, TaskStore


logger = logging.getLogger(__name__)


class PalPlannerApp:
    """Composition root for the task, pet and shop stores.

    Every collaborator is constructed here (or injected) and handed to the
    stores that need it; nothing is shared through module-level globals.

    Usage:
        with PalPlannerApp() as app:
            task_id = app.tasks.add_task(title="Workout", due_date=today, due_time=time(8, 0))
            app.tasks.complete_task(task_id=task_id)
            app.purchase_item("pizza")
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        clock: Clock | None = None,
        ticker: APSchedulerTicker | None = None,
        notifications: NotificationScheduler | None = None,
        configure_logging: bool = False,
    ) -> None:
        self.settings = settings or get_settings()
        if configure_logging:
            configure_logfire(self.settings)

        self.clock = clock or SystemClock()
        self.ticker = ticker or APSchedulerTicker()
        self.notifications = notifications or LocalNotificationScheduler(clock=self.clock)
        self.tasks = TaskStore(
            settings=self.settings,
            clock=self.clock,
            notifications=self.notifications,
            ticker=self.ticker,
        )
        self.pet = PetStore(settings=self.settings, ticker=self.ticker)
        self.shop = ShopStore(pet=self.pet)

    def start(self) -> None:
        """Start the expiration sweep and the pet decay."""
        logger.info("Starting PalPlanner")
        self.tasks.start()
        self.pet.start()
        self.ticker.start()

    def shutdown(self) -> None:
        """Stop all periodic work. Safe to call more than once."""
        logger.info("Shutting down PalPlanner")
        self.tasks.stop()
        self.pet.stop()
        self.ticker.shutdown()

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

    def purchase_item(self, item_id: str) -> bool:
        """Buy a shop item with the user's PalPoints."""
        return self.shop.purchase_item(item_id=item_id, account=self.tasks)

    def equip_item(self, item_id: str) -> bool:
        """Equip an owned item on the pet."""
        return self.shop.equip_item(item_id=item_id, pet=self.pet)

    def unequip_item(self, category: ItemCategory) -> bool:
        """Empty one of the pet's equip slots."""
        return self.shop.unequip_item(category=category, pet=self.pet)

    def activity_summary(self, limit: int | None = None) -> ActivitySummary:
        return get_activity_summary(store=self.tasks, limit=limit)

    def job_status(self) -> dict[str, dict[str, Any]]:
        """Run statistics for the periodic jobs."""
        return {
            job_id: self.ticker.tracker.get_job_status(job_id) for job_id in (EXPIRATION_JOB_ID, DECAY_JOB_ID)
        }

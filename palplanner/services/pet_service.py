"""Pet store: happiness, energy, mood, equipped items and background decay."""

import logging
import threading

from palplanner.core.config import Constants, Settings, get_settings
from palplanner.core.errors import RejectionReason
from palplanner.core.events import ChangeKind, ChangeNotifier
from palplanner.core.logging import log_with_context, span
from palplanner.core.scheduler import JobHandle, Ticker
from palplanner.domain.pet import PetMood, PetState, clamp_stat, compute_mood
from palplanner.domain.shop import ItemCategory, ShopItem


logger = logging.getLogger(__name__)

DECAY_JOB_ID = "pet_stat_decay"


class PetStore:
    """Owns the single pet.

    Every stat change clamps happiness and energy into [0, 1] and recomputes
    the mood in the same critical section, so mood is never stale.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        ticker: Ticker | None = None,
        happiness: float = Constants.PET_STARTING_HAPPINESS,
        energy: float = Constants.PET_STARTING_ENERGY,
    ) -> None:
        self._settings = settings or get_settings()
        self._ticker = ticker
        self._name = self._settings.default_pet_name
        self._happiness = clamp_stat(happiness)
        self._energy = clamp_stat(energy)
        self._mood = compute_mood(self._happiness, self._energy)
        self._equipped: dict[ItemCategory, ShopItem] = {}
        self._lock = threading.RLock()
        self._job: JobHandle | None = None
        self.changes = ChangeNotifier("pet")

    @property
    def name(self) -> str:
        with self._lock:
            return self._name

    @property
    def happiness(self) -> float:
        with self._lock:
            return self._happiness

    @property
    def energy(self) -> float:
        with self._lock:
            return self._energy

    @property
    def mood(self) -> PetMood:
        with self._lock:
            return self._mood

    @property
    def equipped_items(self) -> dict[ItemCategory, ShopItem]:
        with self._lock:
            return {category: item.model_copy() for category, item in self._equipped.items()}

    @property
    def state(self) -> PetState:
        """Consistent snapshot of the whole pet."""
        with self._lock:
            return PetState(
                name=self._name,
                happiness=self._happiness,
                energy=self._energy,
                mood=self._mood,
                equipped_items=self.equipped_items,
            )

    def has_food_equipped(self) -> bool:
        with self._lock:
            return ItemCategory.FOOD in self._equipped

    def _apply_stats(self, *, happiness_delta: float = 0.0, energy_delta: float = 0.0) -> bool:
        """Adjust stats and recompute mood. Caller holds the lock.

        Returns:
            True if happiness or energy actually moved (clamping can absorb a delta)
        """
        before = (self._happiness, self._energy)
        self._happiness = clamp_stat(self._happiness + happiness_delta)
        self._energy = clamp_stat(self._energy + energy_delta)
        self._mood = compute_mood(self._happiness, self._energy)
        return (self._happiness, self._energy) != before

    def feed(self) -> bool:
        """Feed the pet with the equipped food.

        Returns:
            True if the pet was fed, False if no food item is equipped
        """
        with span("pet_store.feed"):
            with self._lock:
                if ItemCategory.FOOD not in self._equipped:
                    log_with_context(
                        logger, "debug", "Feed refused", reason=RejectionReason.NO_FOOD_EQUIPPED.value
                    )
                    return False
                changed = self._apply_stats(energy_delta=Constants.FEED_ENERGY_BOOST)
                energy, mood = self._energy, self._mood

            log_with_context(logger, "info", "Pet fed", energy=energy, mood=mood.value)
            if changed:
                self.changes.publish(ChangeKind.PET_STATS_CHANGED)
            return True

    def play(self) -> None:
        """Play with the pet: happier but more tired."""
        with span("pet_store.play"):
            with self._lock:
                changed = self._apply_stats(
                    happiness_delta=Constants.PLAY_HAPPINESS_BOOST,
                    energy_delta=-Constants.PLAY_ENERGY_COST,
                )
                happiness, energy, mood = self._happiness, self._energy, self._mood

            log_with_context(logger, "info", "Played with pet", happiness=happiness, energy=energy, mood=mood.value)
            if changed:
                self.changes.publish(ChangeKind.PET_STATS_CHANGED)

    def decay_tick(self) -> None:
        """Apply one step of background neglect."""
        with self._lock:
            changed = self._apply_stats(happiness_delta=-Constants.DECAY_STEP, energy_delta=-Constants.DECAY_STEP)
            happiness, energy, mood = self._happiness, self._energy, self._mood

        if not changed:
            return
        log_with_context(logger, "debug", "Pet stats decayed", happiness=happiness, energy=energy, mood=mood.value)
        self.changes.publish(ChangeKind.PET_STATS_CHANGED)

    def equip_item(self, item: ShopItem) -> None:
        """Put an item in its category slot, replacing any previous occupant.

        Ownership is not checked here; ShopStore.equip_item() does that.
        """
        with self._lock:
            previous = self._equipped.get(item.category)
            self._equipped[item.category] = item.model_copy(update={"is_equipped": True})

        if previous is not None and previous.id != item.id:
            logger.info("Replaced %s with %s in %s slot", previous.id, item.id, item.category)
        else:
            logger.info("Equipped %s in %s slot", item.id, item.category)
        self.changes.publish(ChangeKind.PET_EQUIPMENT_CHANGED, item.category.value)

    def unequip_item(self, category: ItemCategory) -> bool:
        """Empty a category slot.

        Returns:
            True if an item was removed, False if the slot was already empty
        """
        with self._lock:
            removed = self._equipped.pop(category, None)

        if removed is None:
            return False

        logger.info("Unequipped %s from %s slot", removed.id, category)
        self.changes.publish(ChangeKind.PET_EQUIPMENT_CHANGED, category.value)
        return True

    def rename(self, name: str) -> bool:
        """Rename the pet. Blank names are refused."""
        name = name.strip()
        if not name:
            log_with_context(logger, "debug", "Rename refused", reason=RejectionReason.INVALID_NAME.value)
            return False

        with self._lock:
            self._name = name

        logger.info("Pet renamed to %s", name)
        self.changes.publish(ChangeKind.PET_RENAMED)
        return True

    # Periodic decay

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def start(self) -> None:
        """Register the periodic decay tick with the ticker."""
        if self._job is not None:
            return
        if self._ticker is None:
            msg = "PetStore was created without a ticker"
            raise RuntimeError(msg)

        self._job = self._ticker.add_interval_job(
            func=self.decay_tick,
            seconds=self._settings.pet_decay_interval_seconds,
            job_id=DECAY_JOB_ID,
            name="Decay Pet Stats",
        )

    def stop(self) -> None:
        """Cancel the periodic decay. No tick runs after this returns."""
        if self._job is None:
            return
        self._job.cancel()
        self._job = None

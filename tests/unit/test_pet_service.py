"""Unit tests for the pet store."""

import pytest

from palplanner.core.config import Settings
from palplanner.core.events import ChangeKind
from palplanner.domain.pet import PetMood, compute_mood
from palplanner.domain.shop import ItemCategory, ShopItem
from palplanner.services.pet_service import DECAY_JOB_ID, PetStore
from tests.unit.mocks import ManualTicker


@pytest.fixture
def pizza() -> ShopItem:
    return ShopItem(id="pizza", name="Pizza", price=50, category=ItemCategory.FOOD, is_owned=True)


@pytest.fixture
def ball() -> ShopItem:
    return ShopItem(id="ball", name="Ball", price=30, category=ItemCategory.TOY, is_owned=True)


def assert_mood_consistent(pet: PetStore) -> None:
    assert pet.mood == compute_mood(pet.happiness, pet.energy)


@pytest.mark.unit
class TestInitialState:
    """Tests for a fresh pet."""

    def test_defaults(self, pet_store: PetStore) -> None:
        assert pet_store.name == "Timo"
        assert pet_store.happiness == pytest.approx(0.8)
        assert pet_store.energy == pytest.approx(0.7)
        assert pet_store.mood == PetMood.HAPPY
        assert pet_store.equipped_items == {}

    def test_starting_stats_are_clamped(self, settings: Settings) -> None:
        pet = PetStore(settings=settings, happiness=1.5, energy=-0.2)

        assert pet.happiness == 1.0
        assert pet.energy == 0.0
        assert_mood_consistent(pet)

    def test_state_snapshot(self, pet_store: PetStore, pizza: ShopItem) -> None:
        pet_store.equip_item(pizza)

        state = pet_store.state

        assert state.name == "Timo"
        assert state.mood == PetMood.HAPPY
        assert state.equipped_items[ItemCategory.FOOD].id == "pizza"


@pytest.mark.unit
class TestFeed:
    """Tests for feed."""

    def test_without_food_changes_nothing(self, pet_store: PetStore, ball: ShopItem, events: list) -> None:
        """Feeding fails when only non-food items are equipped."""
        pet_store.equip_item(ball)
        events.clear()

        assert pet_store.feed() is False
        assert pet_store.happiness == pytest.approx(0.8)
        assert pet_store.energy == pytest.approx(0.7)
        assert events == []

    def test_with_food_boosts_energy(self, pet_store: PetStore, pizza: ShopItem) -> None:
        pet_store.equip_item(pizza)

        assert pet_store.feed() is True
        assert pet_store.energy == pytest.approx(0.9)
        assert pet_store.happiness == pytest.approx(0.8)
        assert_mood_consistent(pet_store)

    def test_energy_caps_at_one(self, pet_store: PetStore, pizza: ShopItem, events: list) -> None:
        pet_store.equip_item(pizza)

        events.clear()
        for _ in range(3):
            assert pet_store.feed() is True

        assert pet_store.energy == 1.0
        assert [e.kind for e in events] == [ChangeKind.PET_STATS_CHANGED] * 2

    def test_has_food_equipped(self, pet_store: PetStore, pizza: ShopItem) -> None:
        assert pet_store.has_food_equipped() is False

        pet_store.equip_item(pizza)

        assert pet_store.has_food_equipped() is True


@pytest.mark.unit
class TestPlay:
    """Tests for play."""

    def test_play_raises_happiness_and_costs_energy(self, pet_store: PetStore) -> None:
        pet_store.play()

        assert pet_store.happiness == pytest.approx(1.0)
        assert pet_store.energy == pytest.approx(0.6)
        assert_mood_consistent(pet_store)

    def test_repeated_play_clamps_both_stats(self, pet_store: PetStore) -> None:
        for _ in range(10):
            pet_store.play()

        assert pet_store.happiness == 1.0
        assert pet_store.energy == 0.0
        assert pet_store.mood == PetMood.NEUTRAL

    def test_publishes_event(self, pet_store: PetStore, events: list) -> None:
        pet_store.play()

        assert [e.kind for e in events] == [ChangeKind.PET_STATS_CHANGED]

    def test_no_event_when_both_stats_are_pinned(self, settings: Settings) -> None:
        pet = PetStore(settings=settings, happiness=1.0, energy=0.0)
        received: list = []
        pet.changes.subscribe(received.append)

        pet.play()

        assert received == []


@pytest.mark.unit
class TestDecay:
    """Tests for decay_tick."""

    def test_happy_to_neutral_boundary(self, pet_store: PetStore) -> None:
        """0.8/0.7 is happy; after one decay the average is exactly 0.70, which is neutral."""
        assert pet_store.mood == PetMood.HAPPY

        pet_store.decay_tick()

        assert pet_store.happiness == pytest.approx(0.75)
        assert pet_store.energy == pytest.approx(0.65)
        assert pet_store.mood == PetMood.NEUTRAL

    def test_decay_floors_at_zero(self, pet_store: PetStore) -> None:
        for _ in range(30):
            pet_store.decay_tick()

        assert pet_store.happiness == 0.0
        assert pet_store.energy == 0.0
        assert pet_store.mood == PetMood.SAD

    def test_no_event_once_stats_bottom_out(self, settings: Settings) -> None:
        """Decay at zero changes nothing, so observers are not notified."""
        pet = PetStore(settings=settings, happiness=0.0, energy=0.0)
        received: list = []
        pet.changes.subscribe(received.append)

        pet.decay_tick()

        assert received == []
        assert pet.mood == PetMood.SAD

    def test_mood_consistent_after_mixed_actions(self, pet_store: PetStore, pizza: ShopItem) -> None:
        pet_store.equip_item(pizza)
        actions = [pet_store.decay_tick, pet_store.play, pet_store.feed, pet_store.decay_tick] * 5

        for action in actions:
            action()
            assert_mood_consistent(pet_store)
            assert 0.0 <= pet_store.happiness <= 1.0
            assert 0.0 <= pet_store.energy <= 1.0

    def test_periodic_decay(self, pet_store: PetStore, ticker: ManualTicker) -> None:
        pet_store.start()

        assert ticker.jobs[DECAY_JOB_ID].seconds == 3600
        assert ticker.tick(DECAY_JOB_ID, times=2) == 2
        assert pet_store.happiness == pytest.approx(0.7)
        assert pet_store.energy == pytest.approx(0.6)

    def test_no_decay_after_stop(self, pet_store: PetStore, ticker: ManualTicker) -> None:
        pet_store.start()
        pet_store.stop()

        assert ticker.tick(DECAY_JOB_ID) == 0
        assert pet_store.happiness == pytest.approx(0.8)
        assert not pet_store.is_running

    def test_start_without_ticker_raises(self, settings: Settings) -> None:
        with pytest.raises(RuntimeError, match="without a ticker"):
            PetStore(settings=settings).start()


@pytest.mark.unit
class TestEquipment:
    """Tests for equip_item and unequip_item."""

    def test_equip_replaces_same_category(self, pet_store: PetStore, pizza: ShopItem) -> None:
        basic = ShopItem(id="basic_pet_food", name="Basic Pet Food", price=0, category=ItemCategory.FOOD)
        pet_store.equip_item(basic)

        pet_store.equip_item(pizza)

        equipped = pet_store.equipped_items
        assert list(equipped) == [ItemCategory.FOOD]
        assert equipped[ItemCategory.FOOD].id == "pizza"
        assert equipped[ItemCategory.FOOD].is_equipped is True

    def test_slots_are_independent(self, pet_store: PetStore, pizza: ShopItem, ball: ShopItem) -> None:
        pet_store.equip_item(pizza)
        pet_store.equip_item(ball)

        assert set(pet_store.equipped_items) == {ItemCategory.FOOD, ItemCategory.TOY}

    def test_unequip(self, pet_store: PetStore, pizza: ShopItem, events: list) -> None:
        pet_store.equip_item(pizza)

        assert pet_store.unequip_item(ItemCategory.FOOD) is True
        assert pet_store.unequip_item(ItemCategory.FOOD) is False
        assert pet_store.equipped_items == {}
        assert pet_store.feed() is False
        assert [e.kind for e in events] == [ChangeKind.PET_EQUIPMENT_CHANGED, ChangeKind.PET_EQUIPMENT_CHANGED]


@pytest.mark.unit
class TestRename:
    """Tests for rename."""

    def test_rename(self, pet_store: PetStore) -> None:
        assert pet_store.rename("  Biscuit ") is True
        assert pet_store.name == "Biscuit"

    def test_blank_name_is_refused(self, pet_store: PetStore, events: list) -> None:
        assert pet_store.rename("   ") is False
        assert pet_store.name == "Timo"
        assert events == []

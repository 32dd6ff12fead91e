"""Pytest configuration and fixtures for unit tests."""

from datetime import datetime

import pytest

from palplanner.core.config import Settings
from palplanner.services.pet_service import PetStore
from palplanner.services.shop_service import ShopStore
from palplanner.services.task_service import TaskStore
from tests.unit.mocks import FakeClock, ManualTicker, RecordingNotificationScheduler


@pytest.fixture
def clock(morning: datetime) -> FakeClock:
    return FakeClock(morning)


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def notifications() -> RecordingNotificationScheduler:
    return RecordingNotificationScheduler()


@pytest.fixture
def task_store(
    settings: Settings,
    clock: FakeClock,
    notifications: RecordingNotificationScheduler,
    ticker: ManualTicker,
) -> TaskStore:
    """TaskStore with a fake clock, manual ticker and recording notifications."""
    return TaskStore(settings=settings, clock=clock, notifications=notifications, ticker=ticker)


@pytest.fixture
def pet_store(settings: Settings, ticker: ManualTicker) -> PetStore:
    return PetStore(settings=settings, ticker=ticker)


@pytest.fixture
def shop_store(pet_store: PetStore) -> ShopStore:
    return ShopStore(pet=pet_store)


@pytest.fixture
def events(task_store: TaskStore, pet_store: PetStore, shop_store: ShopStore) -> list:
    """Every event published by the three stores, in order."""
    received: list = []
    task_store.changes.subscribe(received.append)
    pet_store.changes.subscribe(received.append)
    shop_store.changes.subscribe(received.append)
    return received

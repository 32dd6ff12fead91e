"""Domain models and DTOs."""

from palplanner.domain.create_models import TaskCreate
from palplanner.domain.notification import NotificationTime
from palplanner.domain.pet import PetMood, PetState, clamp_stat, compute_mood
from palplanner.domain.shop import ItemCategory, ShopItem, seed_catalog
from palplanner.domain.task import Task, TaskStatus


__all__ = [
    "ItemCategory",
    "NotificationTime",
    "PetMood",
    "PetState",
    "ShopItem",
    "Task",
    "TaskCreate",
    "TaskStatus",
    "clamp_stat",
    "compute_mood",
    "seed_catalog",
]

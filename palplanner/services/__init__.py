from palplanner.services.pet_service import PetStore
from palplanner.services.shop_service import PointsAccount, ShopStore
from palplanner.services.task_service import TaskStore


__all__ = [
    "PetStore",
    "PointsAccount",
    "ShopStore",
    "TaskStore",
]

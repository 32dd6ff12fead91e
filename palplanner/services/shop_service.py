"""Shop store: catalog, owned items, purchases and equipping."""

import logging
import threading
from typing import Protocol

from palplanner.core.config import Constants
from palplanner.core.errors import RejectionReason
from palplanner.core.events import ChangeKind, ChangeNotifier
from palplanner.core.logging import log_with_context, span
from palplanner.domain.shop import ItemCategory, ShopItem, seed_catalog
from palplanner.services.pet_service import PetStore


logger = logging.getLogger(__name__)


class PointsAccount(Protocol):
    """Balance that purchases are paid from (TaskStore in the app)."""

    @property
    def balance(self) -> int: ...

    def try_debit(self, amount: int) -> bool: ...


class ShopStore:
    """Owns the item catalog and the set of owned items.

    Owned items are reported in catalog order. The starter food is always
    owned: if it is ever missing it is restored before owned items are read.

    Equipped flags are not stored here. Items read from the shop report
    is_equipped from the bound pet's slots, so equipping or unequipping
    directly on the pet is reflected too.
    """

    def __init__(self, *, catalog: list[ShopItem] | None = None, pet: PetStore | None = None) -> None:
        items = catalog if catalog is not None else seed_catalog()
        self._catalog: dict[str, ShopItem] = {
            item.id: item.model_copy(update={"is_equipped": False}) for item in items
        }
        self._pet = pet
        self._owned_ids: set[str] = {item.id for item in items if item.is_owned}
        self._lock = threading.RLock()
        self.changes = ChangeNotifier("shop")
        self._ensure_starter_owned()

    def _ensure_starter_owned(self) -> None:
        starter = self._catalog.get(Constants.STARTER_ITEM_ID)
        if starter is None:
            return
        with self._lock:
            if starter.id in self._owned_ids and starter.is_owned:
                return
            starter.is_owned = True
            self._owned_ids.add(starter.id)
        logger.warning("Starter item %s was missing from inventory, restored", starter.id)

    def _equipped_ids(self) -> set[str]:
        if self._pet is None:
            return set()
        return {item.id for item in self._pet.equipped_items.values()}

    def _resolve_pet(self, pet: PetStore | None) -> PetStore:
        if pet is None:
            pet = self._pet
        if pet is None:
            msg = "ShopStore has no pet to equip"
            raise RuntimeError(msg)
        return pet

    # Queries

    @property
    def items(self) -> list[ShopItem]:
        """Full catalog in catalog order."""
        equipped = self._equipped_ids()
        with self._lock:
            return [
                item.model_copy(update={"is_equipped": item.id in equipped}) for item in self._catalog.values()
            ]

    @property
    def owned_items(self) -> list[ShopItem]:
        self._ensure_starter_owned()
        with self._lock:
            owned = set(self._owned_ids)
        return [item for item in self.items if item.id in owned]

    def get_item(self, item_id: str) -> ShopItem | None:
        equipped = self._equipped_ids()
        with self._lock:
            item = self._catalog.get(item_id)
            return item.model_copy(update={"is_equipped": item_id in equipped}) if item else None

    def is_owned(self, item_id: str) -> bool:
        self._ensure_starter_owned()
        with self._lock:
            return item_id in self._owned_ids

    def items_by_category(self, category: ItemCategory) -> list[ShopItem]:
        return [item for item in self.items if item.category == category]

    def owned_items_by_category(self, category: ItemCategory) -> list[ShopItem]:
        return [item for item in self.owned_items if item.category == category]

    # Purchasing

    def check_purchase(self, *, item_id: str, account: PointsAccount) -> RejectionReason | None:
        """Return why purchase_item() would be refused, or None if it would succeed."""
        with self._lock:
            item = self._catalog.get(item_id)
            if item is None:
                return RejectionReason.UNKNOWN_ITEM
            if item_id in self._owned_ids:
                return RejectionReason.ALREADY_OWNED
            if account.balance < item.price:
                return RejectionReason.INSUFFICIENT_POINTS
            return None

    def purchase_item(self, *, item_id: str, account: PointsAccount) -> bool:
        """Buy an item with PalPoints from `account`.

        Owned items cannot be bought again. A refused purchase changes nothing:
        not the balance, the catalog or the owned items.

        Returns:
            True if the item was bought
        """
        with span("shop_store.purchase_item"):
            with self._lock:
                reason = self.check_purchase(item_id=item_id, account=account)
                if reason is None and not account.try_debit(self._catalog[item_id].price):
                    reason = RejectionReason.INSUFFICIENT_POINTS

                if reason is not None:
                    log_with_context(logger, "info", "Purchase refused", item_id=item_id, reason=reason.value)
                    return False

                item = self._catalog[item_id]
                item.is_owned = True
                self._owned_ids.add(item_id)

            log_with_context(logger, "info", "Item purchased", item_id=item_id, price=item.price)
            self.changes.publish(ChangeKind.ITEM_PURCHASED, item_id)
            return True

    # Equipping

    def equip_item(self, *, item_id: str, pet: PetStore | None = None) -> bool:
        """Equip an owned item on the pet, replacing whatever held its slot.

        Args:
            item_id: Catalog ID of the item
            pet: Pet to equip (defaults to the pet the shop was built with)

        Returns:
            True if the item was equipped, False if it is unknown or not owned
        """
        with span("shop_store.equip_item"):
            pet = self._resolve_pet(pet)
            if not self.is_owned(item_id):
                log_with_context(
                    logger, "info", "Equip refused", item_id=item_id, reason=RejectionReason.ITEM_NOT_OWNED.value
                )
                return False

            with self._lock:
                equipped = self._catalog[item_id].model_copy()

            pet.equip_item(equipped)
            self.changes.publish(ChangeKind.ITEM_EQUIPPED, item_id)
            return True

    def unequip_item(self, *, category: ItemCategory, pet: PetStore | None = None) -> bool:
        """Empty a category slot on the pet.

        Returns:
            True if the pet had an item in that slot
        """
        removed = self._resolve_pet(pet).unequip_item(category)
        if removed:
            self.changes.publish(ChangeKind.ITEM_UNEQUIPPED, category.value)
        return removed

"""Shop domain models, enums and the seed catalog."""

from enum import StrEnum

from pydantic import BaseModel, Field

from palplanner.core.config import Constants


class ItemCategory(StrEnum):
    """Shop item category. Each category is one equip slot on the pet."""

    FOOD = "food"
    TOY = "toy"
    CLOTHING = "clothing"
    ACCESSORY = "accessory"


class ShopItem(BaseModel):
    """Shop item data transfer object."""

    id: str = Field(..., description="Stable item ID")
    name: str = Field(..., description="Display name (e.g., 'Pizza')")
    description: str = Field(default="", description="Short item description")
    price: int = Field(..., ge=0, description="Price in PalPoints")
    category: ItemCategory = Field(..., description="Equip slot the item occupies")
    image_name: str = Field(default="", description="Image asset reference")
    is_owned: bool = Field(default=False, description="Whether the user owns the item")
    is_equipped: bool = Field(default=False, description="Whether the item is equipped on the pet")


def seed_catalog() -> list[ShopItem]:
    """Build the catalog every new shop starts from.

    The zero-price starter food is owned from the start.
    """
    return [
        ShopItem(
            id=Constants.STARTER_ITEM_ID,
            name="Basic Pet Food",
            description="Simple food to keep your pet going",
            price=0,
            category=ItemCategory.FOOD,
            image_name="bowl.fill",
            is_owned=True,
        ),
        ShopItem(
            id="pizza",
            name="Pizza",
            description="A tasty treat for your pet",
            price=50,
            category=ItemCategory.FOOD,
            image_name="pizza",
        ),
        ShopItem(
            id="ball",
            name="Ball",
            description="A fun toy to play with",
            price=30,
            category=ItemCategory.TOY,
            image_name="circle.fill",
        ),
        ShopItem(
            id="t_shirt",
            name="T-Shirt",
            description="A stylish shirt for your pet",
            price=100,
            category=ItemCategory.CLOTHING,
            image_name="tshirt.fill",
        ),
        ShopItem(
            id="sunglasses",
            name="Sunglasses",
            description="Cool shades for your pet",
            price=75,
            category=ItemCategory.ACCESSORY,
            image_name="eyeglasses",
        ),
    ]

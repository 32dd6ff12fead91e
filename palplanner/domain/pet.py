"""Pet domain models and mood rules."""

from enum import StrEnum

from pydantic import BaseModel, Field

from palplanner.core.config import Constants
from palplanner.domain.shop import ItemCategory, ShopItem


class PetMood(StrEnum):
    """Pet mood, derived from happiness and energy."""

    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"


def clamp_stat(value: float) -> float:
    """Clamp a stat into [0, 1] and drop float noise below the stored precision."""
    return round(min(1.0, max(0.0, value)), Constants.STAT_PRECISION)


def compute_mood(happiness: float, energy: float) -> PetMood:
    """Derive mood from the average of happiness and energy.

    Thresholds are exclusive: an average of exactly 0.7 is neutral.
    """
    average = round((happiness + energy) / 2, Constants.STAT_PRECISION)
    if average > Constants.MOOD_HAPPY_THRESHOLD:
        return PetMood.HAPPY
    if average > Constants.MOOD_NEUTRAL_THRESHOLD:
        return PetMood.NEUTRAL
    return PetMood.SAD


class PetState(BaseModel):
    """Snapshot of the pet."""

    name: str = Field(..., min_length=1, description="Pet name")
    happiness: float = Field(..., ge=0.0, le=1.0)
    energy: float = Field(..., ge=0.0, le=1.0)
    mood: PetMood = Field(..., description="Mood derived from happiness and energy")
    equipped_items: dict[ItemCategory, ShopItem] = Field(default_factory=dict, description="One item per category")

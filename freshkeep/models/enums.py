"""Enums for ingredient classification fields."""

from enum import Enum


class Category(str, Enum):
    """What kind of food an ingredient is."""

    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    DAIRY = "dairy"
    FISH = "fish"
    MEAT = "meat"
    LIQUID = "liquid"


class Location(str, Enum):
    """Where an ingredient is stored."""

    FRIDGE = "fridge"
    FREEZER = "freezer"
    PANTRY = "pantry"


class ConfectionType(str, Enum):
    """How an ingredient is preserved."""

    FRESH = "fresh"
    CANNED = "canned"
    FROZEN = "frozen"
    CURED = "cured"
    DRIED = "dried"

    def tracks_ripeness(self) -> bool:
        """Check if ripeness check-ins apply to this confection type."""
        return self == ConfectionType.FRESH


class Ripeness(str, Enum):
    """Ripeness vocabulary for fresh ingredients."""

    GREEN = "green"
    RIPE = "ripe"
    ADVANCED = "advanced"
    TOO_RIPE = "too ripe"

"""SQLAlchemy models."""

from freshkeep.models.ingredient import Ingredient
from freshkeep.models.ripeness_check import RipenessCheck

__all__ = [
    "Ingredient",
    "RipenessCheck",
]

"""Pydantic schemas for API requests and responses."""

from freshkeep.schemas.ingredient import (
    ExpirationStatusResponse,
    IngredientCreate,
    IngredientOpenToggle,
    IngredientResponse,
    IngredientUpdate,
    RipenessCheckResponse,
)
from freshkeep.schemas.product import ProductResponse

__all__ = [
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientOpenToggle",
    "IngredientResponse",
    "ExpirationStatusResponse",
    "RipenessCheckResponse",
    "ProductResponse",
]

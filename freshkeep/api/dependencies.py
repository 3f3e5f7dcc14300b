"""FastAPI dependencies for storage, collaborators and the clock."""

from datetime import date
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from freshkeep.database import get_db
from freshkeep.services.ingredient_repository import IngredientRepository
from freshkeep.services.product_lookup import ProductLookupService


def get_today() -> date:
    """Current date used by the freshness rules."""
    return date.today()


def get_ingredient_repository(
    db: Annotated[Session, Depends(get_db)],
) -> IngredientRepository:
    """Get ingredient repository bound to the request session."""
    return IngredientRepository(db)


def get_product_lookup_service() -> ProductLookupService:
    """Get product lookup service instance."""
    return ProductLookupService()

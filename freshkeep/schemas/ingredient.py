"""Ingredient schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from freshkeep.models.enums import Category, ConfectionType, Location, Ripeness


class IngredientCreate(BaseModel):
    """Add an ingredient.

    Vegetables pick ``shelf_life_days`` (7, 10, 14 or 30) instead of a date.
    """

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., max_length=255)
    brand: str | None = Field(None, max_length=255)
    category: Category | None = None
    location: Location | None = None
    confection_type: ConfectionType | None = None
    ripeness: Ripeness | None = None
    open: bool = False
    expiration_date: date | None = None
    shelf_life_days: int | None = None


class IngredientUpdate(BaseModel):
    """Edit an ingredient. Omitted fields are left unchanged; null clears a field."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(None, max_length=255)
    brand: str | None = Field(None, max_length=255)
    category: Category | None = None
    location: Location | None = None
    confection_type: ConfectionType | None = None
    ripeness: Ripeness | None = None
    expiration_date: date | None = None


class IngredientOpenToggle(BaseModel):
    """Mark an ingredient opened or unopened."""

    open: bool


class ExpirationStatusResponse(BaseModel):
    """Derived expiration status."""

    kind: str
    days_until: int | None
    label: str


class IngredientResponse(BaseModel):
    """Ingredient response with derived freshness."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    brand: str | None
    category: str | None
    location: str | None
    confection_type: str | None
    ripeness: str | None
    open: bool
    expiration_date: date | None
    last_checked_date: date | None
    expiration_status: ExpirationStatusResponse
    needs_ripeness_check: bool


class RipenessCheckResponse(BaseModel):
    """A ripeness check-in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ingredient_id: int
    date: date

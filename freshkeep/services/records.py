"""In-memory ingredient records consumed by the lifecycle rules.

Records are plain values: storage rows are mapped into them at the
repository boundary, and the rule functions return updated copies rather
than mutating their inputs.
"""

from dataclasses import dataclass
from datetime import date

from freshkeep.models.enums import Category, ConfectionType, Location, Ripeness
from freshkeep.services.errors import ValidationError

_CLASSIFICATION_VOCABULARY: dict[str, set[str]] = {
    "category": {c.value for c in Category},
    "location": {loc.value for loc in Location},
    "confection_type": {t.value for t in ConfectionType},
    "ripeness": {r.value for r in Ripeness},
}

# Fields whose absence puts an ingredient on the "missing data" list
REQUIRED_DETAIL_FIELDS = ("category", "location", "confection_type", "expiration_date")


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class IngredientRecord:
    """A tracked ingredient."""

    name: str
    id: int | None = None
    brand: str | None = None
    category: str | None = None
    location: str | None = None
    confection_type: str | None = None
    ripeness: str | None = None
    open: bool = False
    expiration_date: date | None = None
    last_checked_date: date | None = None

    def __post_init__(self) -> None:
        # Empty picker values are stored as "" by older clients
        self.brand = _blank_to_none(self.brand)
        self.category = _blank_to_none(self.category)
        self.location = _blank_to_none(self.location)
        self.confection_type = _blank_to_none(self.confection_type)
        self.ripeness = normalize_ripeness(self.confection_type, self.ripeness)
        self.open = bool(self.open)

    def validate(self) -> "IngredientRecord":
        """Check the record before it is saved.

        Raises:
            ValidationError: if the name is empty or a classification field
                holds a value outside its vocabulary.
        """
        if not self.name or not self.name.strip():
            raise ValidationError("Please enter the ingredient name.")
        for field_name, allowed in _CLASSIFICATION_VOCABULARY.items():
            value = getattr(self, field_name)
            if value is not None and value not in allowed:
                raise ValidationError(
                    f"Invalid {field_name.replace('_', ' ')} '{value}'. "
                    f"Allowed values: {', '.join(sorted(allowed))}"
                )
        return self


@dataclass
class RipenessCheckRecord:
    """A single ripeness check-in."""

    ingredient_id: int
    date: date
    id: int | None = None


def is_fresh_category(confection_type: str | None) -> bool:
    """Return True only for fresh ingredients."""
    if confection_type not in _CLASSIFICATION_VOCABULARY["confection_type"]:
        return False
    return ConfectionType(confection_type).tracks_ripeness()


def requires_ripeness(ingredient: IngredientRecord) -> bool:
    """Check whether ripeness check-ins apply to an ingredient.

    Records are mutable, so a ripeness may still be set on an ingredient
    whose confection type was changed afterwards; rules check this rather
    than trusting the stored value.
    """
    return is_fresh_category(ingredient.confection_type)


def normalize_ripeness(confection_type: str | None, ripeness: str | None) -> str | None:
    """Return the ripeness value to persist; ripeness is dropped for non-fresh food."""
    if not is_fresh_category(confection_type):
        return None
    return _blank_to_none(ripeness)


def has_missing_data(ingredient: IngredientRecord) -> bool:
    """Check if any of category, location, confection type or expiration date is unset."""
    return any(
        getattr(ingredient, field_name) in (None, "") for field_name in REQUIRED_DETAIL_FIELDS
    )

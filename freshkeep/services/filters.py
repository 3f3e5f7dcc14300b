"""Filter criteria for ingredient lists.

Each criterion is evaluated in memory by ``filter_ingredients``; the
repository translates the same criteria into SQL so both paths agree.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from freshkeep.models.enums import ConfectionType, Ripeness
from freshkeep.services.errors import ValidationError
from freshkeep.services.records import IngredientRecord, has_missing_data, requires_ripeness

RECENT_LIMIT = 5


@dataclass(frozen=True)
class ExpiresWithin:
    """Ingredients whose expiration date falls on or before today plus ``days``."""

    days: int

    def __post_init__(self) -> None:
        if self.days < 0:
            raise ValidationError("Days must be zero or more")


@dataclass(frozen=True)
class ExpirationWatchlist:
    """Ripe or open ingredients, except frozen ones."""


@dataclass(frozen=True)
class Recent:
    """The most recently added ingredients."""


@dataclass(frozen=True)
class MissingData:
    """Ingredients lacking category, location, confection type or expiration date."""


@dataclass(frozen=True)
class SameLocation:
    location: str


@dataclass(frozen=True)
class SameCategoryOrType:
    value: str


@dataclass(frozen=True)
class NameContains:
    """Case-insensitive substring match on the name."""

    text: str


@dataclass(frozen=True)
class NeedsRipenessCheck:
    """Ingredients that carry a ripeness and so appear on the check-in list."""


Criterion = (
    ExpiresWithin
    | ExpirationWatchlist
    | Recent
    | MissingData
    | SameLocation
    | SameCategoryOrType
    | NameContains
    | NeedsRipenessCheck
)


def expires_within_cutoff(criterion: ExpiresWithin, now: date) -> date:
    """Last expiration date included by an ``ExpiresWithin`` filter."""
    if isinstance(now, datetime):
        now = now.date()
    return now + timedelta(days=criterion.days)


def tracked_ripeness(ingredient: IngredientRecord) -> str | None:
    """The ingredient's ripeness, or None when ripeness does not apply to it."""
    if not requires_ripeness(ingredient):
        return None
    return ingredient.ripeness


def on_watchlist(ingredient: IngredientRecord) -> bool:
    """Check whether an ingredient needs near-term attention."""
    if ingredient.confection_type == ConfectionType.FROZEN.value:
        return False
    return tracked_ripeness(ingredient) == Ripeness.RIPE.value or ingredient.open


def filter_ingredients(
    ingredients: Iterable[IngredientRecord],
    criterion: Criterion,
    now: date | None = None,
) -> list[IngredientRecord]:
    """Apply a filter criterion to a collection of ingredients.

    ``now`` is only needed for ``ExpiresWithin``. Results keep the input
    order except for ``ExpiresWithin`` (soonest first) and ``Recent``
    (newest first).
    """
    ingredients = list(ingredients)

    if isinstance(criterion, ExpiresWithin):
        if now is None:
            raise ValueError("now is required to filter by expiration")
        cutoff = expires_within_cutoff(criterion, now)
        matching = [
            i for i in ingredients if i.expiration_date is not None and i.expiration_date <= cutoff
        ]
        return sorted(matching, key=lambda i: i.expiration_date)

    if isinstance(criterion, ExpirationWatchlist):
        return [i for i in ingredients if on_watchlist(i)]

    if isinstance(criterion, Recent):
        # Storage ids increase with insertion order
        newest_first = sorted(ingredients, key=lambda i: i.id or 0, reverse=True)
        return newest_first[:RECENT_LIMIT]

    if isinstance(criterion, MissingData):
        return [i for i in ingredients if has_missing_data(i)]

    if isinstance(criterion, SameLocation):
        return [i for i in ingredients if i.location == criterion.location]

    if isinstance(criterion, SameCategoryOrType):
        return [
            i
            for i in ingredients
            if i.category == criterion.value or i.confection_type == criterion.value
        ]

    if isinstance(criterion, NameContains):
        needle = criterion.text.lower()
        return [i for i in ingredients if needle in i.name.lower()]

    if isinstance(criterion, NeedsRipenessCheck):
        return [i for i in ingredients if tracked_ripeness(i)]

    raise TypeError(f"Unsupported filter criterion: {criterion!r}")

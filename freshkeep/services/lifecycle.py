"""Freshness and expiration lifecycle rules.

Every function here is pure: it takes records and the current date and
returns a decision or an updated copy. Callers are responsible for loading
and persisting the records.
"""

import calendar
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from enum import Enum

from freshkeep.models.enums import Category, ConfectionType
from freshkeep.services.errors import InvalidOperation, ValidationError
from freshkeep.services.records import (
    IngredientRecord,
    RipenessCheckRecord,
    requires_ripeness,
)

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)

# Shelf life once a package has been opened
OPEN_SHELF_LIFE_DAYS = 4

# Freezing extends the printed date by this many calendar months
FROZEN_EXTENSION_MONTHS = 6

# Day-count menu offered for vegetables instead of a date picker
VEGETABLE_SHELF_LIFE_DAYS = (7, 10, 14, 30)

# A ripeness check older than this many whole days marks the ingredient open
RIPENESS_CHECK_MAX_AGE_DAYS = 3


class ExpirationRule(str, Enum):
    """Which rule decided an expiration date."""

    OPEN_OVERRIDE = "open_override"
    FROZEN_EXTENSION = "frozen_extension"
    SHELF_LIFE_DAYS = "shelf_life_days"
    MANUAL_DATE = "manual_date"
    NONE = "none"


class StatusKind(str, Enum):
    """Derived expiration status."""

    NO_DATE = "no_date"
    EXPIRED = "expired"
    EXPIRING_TOMORROW = "expiring_tomorrow"
    EXPIRING_IN_DAYS = "expiring_in_days"


class OpenSignal(str, Enum):
    """Result of re-evaluating whether an ingredient should be marked open."""

    SHOULD_OPEN = "should_open"
    NO_CHANGE = "no_change"


@dataclass(frozen=True)
class ExpirationInput:
    """What the add form knows when an ingredient is first saved."""

    category: str | None = None
    confection_type: str | None = None
    open: bool = False
    base_date: date | None = None
    shelf_life_days: int | None = None


@dataclass(frozen=True)
class ExpirationDecision:
    """An expiration date and the rule that produced it."""

    expiration_date: date | None
    rule: ExpirationRule


@dataclass(frozen=True)
class ExpirationStatus:
    """Derived expiration status of an ingredient on a given day."""

    kind: StatusKind
    days_until: int | None = None

    @property
    def label(self) -> str:
        """Human readable status."""
        if self.kind == StatusKind.NO_DATE:
            return "No expiration date"
        if self.kind == StatusKind.EXPIRED:
            return "Expired"
        if self.kind == StatusKind.EXPIRING_TOMORROW:
            return "Expires tomorrow"
        return f"Expires in {self.days_until} days"


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _elapsed_days(start: date, end: date) -> float:
    """Fractional number of days from start to end."""
    return (_as_datetime(end) - _as_datetime(start)) / DAY


def add_months(value: date, months: int) -> date:
    """Shift a date by calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def extend_frozen_expiration(base_date: date | None) -> date | None:
    """Push a frozen ingredient's date forward by the freezer extension."""
    if base_date is None:
        return None
    return add_months(base_date, FROZEN_EXTENSION_MONTHS)


def open_expiration_date(now: date) -> date:
    """Expiration date of an ingredient opened on ``now``."""
    return _as_date(now) + timedelta(days=OPEN_SHELF_LIFE_DAYS)


def compute_expiration_date(data: ExpirationInput, now: date) -> ExpirationDecision:
    """Decide the expiration date of an ingredient being saved for the first time.

    Precedence is open override, then frozen extension, then the vegetable
    day-count, then the manually picked date. The frozen extension is applied
    to whatever base date the lower rules produce, so this must only be
    called on creation; reads and edits use the stored date unchanged.

    Raises:
        ValidationError: if a day-count is given for a non-vegetable or is not
            one of the offered shelf lives.
    """
    today = _as_date(now)

    if data.open:
        return ExpirationDecision(open_expiration_date(today), ExpirationRule.OPEN_OVERRIDE)

    if data.shelf_life_days is not None:
        if data.category != Category.VEGETABLE.value:
            raise ValidationError("Shelf life in days is only offered for vegetables")
        if data.shelf_life_days not in VEGETABLE_SHELF_LIFE_DAYS:
            choices = ", ".join(str(d) for d in VEGETABLE_SHELF_LIFE_DAYS)
            raise ValidationError(f"Shelf life must be one of {choices} days")
        base_date = today + timedelta(days=data.shelf_life_days)
        rule = ExpirationRule.SHELF_LIFE_DAYS
    elif data.base_date is not None:
        base_date = data.base_date
        rule = ExpirationRule.MANUAL_DATE
    else:
        base_date = None
        rule = ExpirationRule.NONE

    if data.confection_type == ConfectionType.FROZEN.value and base_date is not None:
        return ExpirationDecision(
            extend_frozen_expiration(base_date), ExpirationRule.FROZEN_EXTENSION
        )

    return ExpirationDecision(base_date, rule)


def toggle_open(ingredient: IngredientRecord, value: bool, now: date) -> IngredientRecord:
    """Apply the open toggle.

    Opening sets the expiration to ``now`` plus the open shelf life,
    whatever was stored before. Closing clears the expiration date; the
    previous date is not restored.
    """
    if value:
        return replace(ingredient, open=True, expiration_date=open_expiration_date(now))
    return replace(ingredient, open=False, expiration_date=None)


def derive_expiration_status(expiration_date: date | None, now: date) -> ExpirationStatus:
    """Classify an expiration date relative to ``now``.

    Days until expiry are rounded up, so anything due today or earlier is
    expired and a date one day out expires tomorrow.
    """
    if expiration_date is None:
        return ExpirationStatus(StatusKind.NO_DATE)

    days_until = math.ceil(_elapsed_days(now, expiration_date))
    if days_until < 1:
        return ExpirationStatus(StatusKind.EXPIRED, days_until)
    if days_until == 1:
        return ExpirationStatus(StatusKind.EXPIRING_TOMORROW, days_until)
    return ExpirationStatus(StatusKind.EXPIRING_IN_DAYS, days_until)


def record_ripeness_check(
    ingredient: IngredientRecord, now: date
) -> tuple[IngredientRecord, RipenessCheckRecord]:
    """Build a check-in for ``ingredient`` and the ingredient's updated last-checked date.

    Raises:
        InvalidOperation: if the ingredient is not fresh.
        ValidationError: if the ingredient has not been saved yet.
    """
    if not requires_ripeness(ingredient):
        raise InvalidOperation(
            f"Ripeness is only tracked for fresh ingredients, '{ingredient.name}' is "
            f"{ingredient.confection_type or 'unclassified'}"
        )
    if ingredient.id is None:
        raise ValidationError("Save the ingredient before checking its ripeness")

    checked_on = _as_date(now)
    check = RipenessCheckRecord(ingredient_id=ingredient.id, date=checked_on)
    return replace(ingredient, last_checked_date=checked_on), check


def derive_open_status(ingredient: IngredientRecord, now: date) -> OpenSignal:
    """Decide whether a stale ripeness check means the ingredient should be open.

    Only fresh ingredients with a ripeness and a previous check-in are
    considered. More than three whole days since the last check flips them
    open. Ingredients that are already open always yield ``NO_CHANGE`` so
    ``refresh_open_statuses`` only reports flags that actually change.
    """
    if ingredient.open:
        return OpenSignal.NO_CHANGE
    if not requires_ripeness(ingredient):
        return OpenSignal.NO_CHANGE
    if not ingredient.ripeness or ingredient.last_checked_date is None:
        return OpenSignal.NO_CHANGE

    days_since_check = math.floor(_elapsed_days(ingredient.last_checked_date, now))
    if days_since_check > RIPENESS_CHECK_MAX_AGE_DAYS:
        return OpenSignal.SHOULD_OPEN
    return OpenSignal.NO_CHANGE


def refresh_open_statuses(
    ingredients: Iterable[IngredientRecord], now: date
) -> list[IngredientRecord]:
    """Return updated copies of the ingredients that should now be marked open.

    Only the flag changes; the expiration date is left as stored.
    """
    opened = []
    for ingredient in ingredients:
        if derive_open_status(ingredient, now) == OpenSignal.SHOULD_OPEN:
            logger.info(
                f"Ingredient {ingredient.id} '{ingredient.name}' not checked since "
                f"{ingredient.last_checked_date}, marking open"
            )
            opened.append(replace(ingredient, open=True))
    return opened

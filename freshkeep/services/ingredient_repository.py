"""SQLAlchemy-backed storage for ingredients and their ripeness checks."""

import logging
from collections.abc import Iterable
from datetime import date

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from freshkeep.models.enums import ConfectionType, Ripeness
from freshkeep.models.ingredient import Ingredient
from freshkeep.models.ripeness_check import RipenessCheck
from freshkeep.services.errors import NotFound, ValidationError
from freshkeep.services.filters import (
    RECENT_LIMIT,
    Criterion,
    ExpirationWatchlist,
    ExpiresWithin,
    MissingData,
    NameContains,
    NeedsRipenessCheck,
    Recent,
    SameCategoryOrType,
    SameLocation,
    expires_within_cutoff,
)
from freshkeep.services.records import IngredientRecord, RipenessCheckRecord, normalize_ripeness

logger = logging.getLogger(__name__)

_RECORD_FIELDS = (
    "name",
    "brand",
    "category",
    "location",
    "confection_type",
    "ripeness",
    "open",
    "expiration_date",
    "last_checked_date",
)


def _is_blank(column):
    return or_(column.is_(None), column == "")


def to_record(ingredient: Ingredient) -> IngredientRecord:
    """Map an ORM row to an ingredient record."""
    return IngredientRecord(
        id=ingredient.id,
        **{field: getattr(ingredient, field) for field in _RECORD_FIELDS},
    )


def to_check_record(check: RipenessCheck) -> RipenessCheckRecord:
    """Map an ORM row to a ripeness check record."""
    return RipenessCheckRecord(id=check.id, ingredient_id=check.ingredient_id, date=check.date)


class IngredientRepository:
    """Persistence for ingredient records.

    The lifecycle rules never see ORM objects; everything crossing this
    boundary is an ``IngredientRecord`` or ``RipenessCheckRecord``.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_model(self, ingredient_id: int) -> Ingredient:
        ingredient = self.db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
        if not ingredient:
            raise NotFound(f"Ingredient {ingredient_id} not found")
        return ingredient

    def load_all(self) -> list[IngredientRecord]:
        """Load every ingredient in insertion order."""
        return [to_record(i) for i in self.db.query(Ingredient).order_by(Ingredient.id).all()]

    def get(self, ingredient_id: int) -> IngredientRecord:
        """Load one ingredient or raise ``NotFound``."""
        return to_record(self._get_model(ingredient_id))

    def load_history(self, ingredient_id: int) -> list[RipenessCheckRecord]:
        """Load an ingredient's ripeness checks, newest first."""
        self._get_model(ingredient_id)
        checks = (
            self.db.query(RipenessCheck)
            .filter(RipenessCheck.ingredient_id == ingredient_id)
            .order_by(RipenessCheck.date.desc(), RipenessCheck.id.desc())
            .all()
        )
        return [to_check_record(c) for c in checks]

    def save(self, record: IngredientRecord) -> int:
        """Insert or update an ingredient and return its id."""
        record.validate()

        if record.id is None:
            ingredient = Ingredient()
            self.db.add(ingredient)
        else:
            ingredient = self._get_model(record.id)

        for field in _RECORD_FIELDS:
            setattr(ingredient, field, getattr(record, field))
        ingredient.ripeness = normalize_ripeness(record.confection_type, record.ripeness)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ValidationError(f"Could not save ingredient '{record.name}'") from e
        self.db.refresh(ingredient)

        if record.id is None:
            logger.info(f"Created ingredient {ingredient.id} '{ingredient.name}'")
        return ingredient.id

    def append_check(self, check: RipenessCheckRecord) -> RipenessCheckRecord:
        """Store a check-in and move the ingredient's last-checked date with it."""
        ingredient = self._get_model(check.ingredient_id)
        row = RipenessCheck(ingredient_id=check.ingredient_id, date=check.date)
        self.db.add(row)
        if ingredient.last_checked_date is None or check.date >= ingredient.last_checked_date:
            ingredient.last_checked_date = check.date
        self.db.commit()
        self.db.refresh(row)
        logger.info(f"Recorded ripeness check for ingredient {check.ingredient_id} on {check.date}")
        return to_check_record(row)

    def delete(self, ingredient_id: int) -> None:
        """Delete an ingredient along with its check history."""
        ingredient = self._get_model(ingredient_id)
        self.db.delete(ingredient)
        self.db.commit()
        logger.info(f"Deleted ingredient {ingredient_id}")

    def mark_open(self, ingredient_ids: Iterable[int]) -> int:
        """Set the open flag on the given ingredients; returns the number changed."""
        ids = list(ingredient_ids)
        if not ids:
            return 0
        updated = (
            self.db.query(Ingredient)
            .filter(Ingredient.id.in_(ids), Ingredient.open.is_(False))
            .update({Ingredient.open: True}, synchronize_session="fetch")
        )
        self.db.commit()
        if updated:
            logger.info(f"Marked {updated} ingredient(s) open")
        return updated

    def query(self, criterion: Criterion, now: date | None = None) -> list[IngredientRecord]:
        """Evaluate a filter criterion in the database."""
        return [to_record(i) for i in self._build_query(criterion, now).all()]

    def _build_query(self, criterion: Criterion, now: date | None) -> Query:
        query = self.db.query(Ingredient)

        if isinstance(criterion, ExpiresWithin):
            if now is None:
                raise ValueError("now is required to filter by expiration")
            cutoff = expires_within_cutoff(criterion, now)
            return query.filter(
                Ingredient.expiration_date.isnot(None),
                Ingredient.expiration_date <= cutoff,
            ).order_by(Ingredient.expiration_date, Ingredient.id)

        if isinstance(criterion, ExpirationWatchlist):
            return query.filter(
                or_(
                    and_(
                        Ingredient.confection_type == ConfectionType.FRESH.value,
                        Ingredient.ripeness == Ripeness.RIPE.value,
                    ),
                    Ingredient.open.is_(True),
                ),
                or_(
                    Ingredient.confection_type.is_(None),
                    Ingredient.confection_type != ConfectionType.FROZEN.value,
                ),
            ).order_by(Ingredient.id)

        if isinstance(criterion, Recent):
            return query.order_by(Ingredient.id.desc()).limit(RECENT_LIMIT)

        if isinstance(criterion, MissingData):
            return query.filter(
                or_(
                    _is_blank(Ingredient.category),
                    _is_blank(Ingredient.location),
                    _is_blank(Ingredient.confection_type),
                    Ingredient.expiration_date.is_(None),
                )
            ).order_by(Ingredient.id)

        if isinstance(criterion, SameLocation):
            return query.filter(Ingredient.location == criterion.location).order_by(Ingredient.id)

        if isinstance(criterion, SameCategoryOrType):
            return query.filter(
                or_(
                    Ingredient.category == criterion.value,
                    Ingredient.confection_type == criterion.value,
                )
            ).order_by(Ingredient.id)

        if isinstance(criterion, NameContains):
            return query.filter(
                Ingredient.name.icontains(criterion.text, autoescape=True)
            ).order_by(Ingredient.id)

        if isinstance(criterion, NeedsRipenessCheck):
            return query.filter(
                Ingredient.confection_type == ConfectionType.FRESH.value,
                Ingredient.ripeness.isnot(None),
                Ingredient.ripeness != "",
            ).order_by(Ingredient.id)

        raise TypeError(f"Unsupported filter criterion: {criterion!r}")

"""Ingredient API endpoints."""

import logging
from dataclasses import asdict, replace
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from freshkeep.api.dependencies import get_ingredient_repository, get_today
from freshkeep.models.enums import Category, ConfectionType, Location
from freshkeep.schemas.ingredient import (
    ExpirationStatusResponse,
    IngredientCreate,
    IngredientOpenToggle,
    IngredientResponse,
    IngredientUpdate,
    RipenessCheckResponse,
)
from freshkeep.services.errors import ValidationError
from freshkeep.services.filters import (
    Criterion,
    ExpirationWatchlist,
    ExpiresWithin,
    MissingData,
    NameContains,
    NeedsRipenessCheck,
    Recent,
    SameCategoryOrType,
    SameLocation,
)
from freshkeep.services.ingredient_repository import IngredientRepository
from freshkeep.services.lifecycle import (
    ExpirationInput,
    compute_expiration_date,
    derive_expiration_status,
    record_ripeness_check,
    refresh_open_statuses,
    toggle_open,
)
from freshkeep.services.records import IngredientRecord, requires_ripeness

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])

Repository = Annotated[IngredientRepository, Depends(get_ingredient_repository)]
Today = Annotated[date, Depends(get_today)]

# Values accepted by the "same category or type" filter
GROUP_VALUES = {c.value for c in Category} | {t.value for t in ConfectionType}


def to_response(record: IngredientRecord, today: date) -> IngredientResponse:
    """Attach derived freshness to an ingredient record."""
    expiration = derive_expiration_status(record.expiration_date, today)
    return IngredientResponse(
        **asdict(record),
        expiration_status=ExpirationStatusResponse(
            kind=expiration.kind.value,
            days_until=expiration.days_until,
            label=expiration.label,
        ),
        needs_ripeness_check=requires_ripeness(record) and bool(record.ripeness),
    )


def refresh_open_flags(repo: IngredientRepository, today: date) -> list[IngredientRecord]:
    """Reload all ingredients, persisting any that a stale ripeness check marks open."""
    records = repo.load_all()
    opened = {r.id: r for r in refresh_open_statuses(records, today)}
    if opened:
        repo.mark_open(opened.keys())
    return [opened.get(r.id, r) for r in records]


def _filtered(repo: IngredientRepository, criterion: Criterion, today: date):
    return [to_response(r, today) for r in repo.query(criterion, today)]


@router.get("", response_model=list[IngredientResponse])
def list_ingredients(
    repo: Repository,
    today: Today,
    q: str | None = Query(default=None, description="Only names containing this text"),
):
    """List ingredients, marking open any whose ripeness check has gone stale."""
    records = refresh_open_flags(repo, today)
    if q:
        records = repo.query(NameContains(q), today)
    return [to_response(r, today) for r in records]


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    data: IngredientCreate,
    repo: Repository,
    today: Today,
):
    """Add an ingredient, deriving its expiration date from how it is stored."""
    decision = compute_expiration_date(
        ExpirationInput(
            category=data.category,
            confection_type=data.confection_type,
            open=data.open,
            base_date=data.expiration_date,
            shelf_life_days=data.shelf_life_days,
        ),
        today,
    )
    record = IngredientRecord(
        name=data.name,
        brand=data.brand,
        category=data.category,
        location=data.location,
        confection_type=data.confection_type,
        ripeness=data.ripeness,
        open=data.open,
        expiration_date=decision.expiration_date,
    )
    ingredient_id = repo.save(record)
    logger.info(
        f"Expiration for ingredient {ingredient_id} set by {decision.rule.value}: "
        f"{decision.expiration_date}"
    )
    return to_response(repo.get(ingredient_id), today)


# --- Filters ---


@router.get("/filters/expiring", response_model=list[IngredientResponse])
def list_expiring(
    repo: Repository,
    today: Today,
    days: int = Query(..., ge=0, description="Include ingredients expiring within this many days"),
):
    """Ingredients expiring within the given number of days, soonest first."""
    return _filtered(repo, ExpiresWithin(days), today)


@router.get("/filters/watchlist", response_model=list[IngredientResponse])
def list_watchlist(repo: Repository, today: Today):
    """Ripe or open ingredients that need using soon (frozen excluded)."""
    refresh_open_flags(repo, today)
    return _filtered(repo, ExpirationWatchlist(), today)


@router.get("/filters/recent", response_model=list[IngredientResponse])
def list_recent(repo: Repository, today: Today):
    """The five most recently added ingredients."""
    return _filtered(repo, Recent(), today)


@router.get("/filters/missing-data", response_model=list[IngredientResponse])
def list_missing_data(repo: Repository, today: Today):
    """Ingredients missing category, location, confection type or expiration date."""
    return _filtered(repo, MissingData(), today)


@router.get("/filters/location/{location}", response_model=list[IngredientResponse])
def list_by_location(location: Location, repo: Repository, today: Today):
    """Ingredients kept in the given location."""
    return _filtered(repo, SameLocation(location.value), today)


@router.get("/filters/group/{value}", response_model=list[IngredientResponse])
def list_by_category_or_type(
    value: str,
    repo: Repository,
    today: Today,
):
    """Ingredients whose category or confection type matches."""
    if value not in GROUP_VALUES:
        raise ValidationError(f"Unknown category or confection type '{value}'")
    return _filtered(repo, SameCategoryOrType(value), today)


@router.get("/filters/ripeness", response_model=list[IngredientResponse])
def list_ripeness_checks(repo: Repository, today: Today):
    """Ingredients on the ripeness check-in list."""
    refresh_open_flags(repo, today)
    return _filtered(repo, NeedsRipenessCheck(), today)


# --- Single ingredient ---


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(ingredient_id: int, repo: Repository, today: Today):
    """Get a specific ingredient."""
    return to_response(repo.get(ingredient_id), today)


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: int,
    data: IngredientUpdate,
    repo: Repository,
    today: Today,
):
    """Edit an ingredient. A picked expiration date is stored as-is."""
    record = replace(repo.get(ingredient_id), **data.model_dump(exclude_unset=True))
    repo.save(record)
    return to_response(repo.get(ingredient_id), today)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(ingredient_id: int, repo: Repository):
    """Remove an ingredient and its check history."""
    repo.delete(ingredient_id)


@router.post("/{ingredient_id}/open", response_model=IngredientResponse)
def set_open(
    ingredient_id: int,
    data: IngredientOpenToggle,
    repo: Repository,
    today: Today,
):
    """Mark an ingredient opened (use within 4 days) or unopened (date cleared)."""
    record = toggle_open(repo.get(ingredient_id), data.open, today)
    repo.save(record)
    if data.open:
        logger.info(f"Ingredient {ingredient_id} opened, use by {record.expiration_date}")
    return to_response(repo.get(ingredient_id), today)


@router.post(
    "/{ingredient_id}/checks",
    response_model=RipenessCheckResponse,
    status_code=status.HTTP_201_CREATED,
)
def check_ripeness(ingredient_id: int, repo: Repository, today: Today):
    """Record that the ingredient's ripeness was checked today."""
    _, check = record_ripeness_check(repo.get(ingredient_id), today)
    return repo.append_check(check)


@router.get("/{ingredient_id}/checks", response_model=list[RipenessCheckResponse])
def list_ripeness_checks_for_ingredient(ingredient_id: int, repo: Repository):
    """Ripeness check history, newest first."""
    return repo.load_history(ingredient_id)

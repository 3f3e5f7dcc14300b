#!/usr/bin/env python3
"""Seed demo ingredients for screenshots.

Clears the ingredient tables and fills them with a kitchen that exercises
every freshness state: expired, expiring tomorrow, opened, frozen, stale
ripeness checks and missing details.

Usage:
    python scripts/seed_demo_data.py

    # Or against another database:
    DATABASE_URL=sqlite:///./demo.db python scripts/seed_demo_data.py
"""

import os
import sys
from datetime import date, timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from freshkeep.database import Base
from freshkeep.models import Ingredient, RipenessCheck
from freshkeep.services.ingredient_repository import IngredientRepository
from freshkeep.services.lifecycle import (
    ExpirationInput,
    compute_expiration_date,
    record_ripeness_check,
)
from freshkeep.services.records import IngredientRecord

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./freshkeep.db")


def _add(repo: IngredientRepository, today: date, shelf_life_days=None, base_date=None, **fields):
    decision = compute_expiration_date(
        ExpirationInput(
            category=fields.get("category"),
            confection_type=fields.get("confection_type"),
            open=fields.get("open", False),
            base_date=base_date,
            shelf_life_days=shelf_life_days,
        ),
        today,
    )
    record = IngredientRecord(expiration_date=decision.expiration_date, **fields)
    record.id = repo.save(record)
    return record


def seed_demo_data():
    """Seed the demo database with representative ingredients."""
    engine = create_engine(DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    today = date.today()

    try:
        if session.query(Ingredient).count():
            print("Demo data already exists. Clearing and re-seeding...")
            session.query(RipenessCheck).delete()
            session.query(Ingredient).delete()
            session.commit()

        repo = IngredientRepository(session)

        # Vegetables use the day-count menu
        _add(
            repo, today, shelf_life_days=7,
            name="Spinach", category="vegetable", location="fridge", confection_type="fresh",
        )
        _add(
            repo, today, shelf_life_days=30,
            name="Carrots", category="vegetable", location="fridge", confection_type="fresh",
        )

        # Manually dated
        _add(
            repo, today, base_date=today - timedelta(days=2),
            name="Yogurt", brand="Danone", category="dairy", location="fridge",
            confection_type="fresh",
        )
        _add(
            repo, today, base_date=today + timedelta(days=1),
            name="Salmon Fillet", category="fish", location="fridge", confection_type="fresh",
        )
        _add(
            repo, today, base_date=today + timedelta(days=400),
            name="Chickpeas", brand="Goya", category="vegetable", location="pantry",
            confection_type="canned",
        )

        # Freezing extends the printed date
        _add(
            repo, today, base_date=today + timedelta(days=5),
            name="Chicken Thighs", category="meat", location="freezer", confection_type="frozen",
        )

        # Opened: use within 4 days
        _add(repo, today, name="Milk", category="liquid", location="fridge", open=True)

        # Ripening fruit, one with a stale check-in
        _add(
            repo, today, base_date=today + timedelta(days=6),
            name="Avocado", category="fruit", location="pantry", confection_type="fresh",
            ripeness="ripe",
        )
        bananas = _add(
            repo, today, base_date=today + timedelta(days=5),
            name="Bananas", category="fruit", location="pantry", confection_type="fresh",
            ripeness="green",
        )
        _, check = record_ripeness_check(bananas, today - timedelta(days=5))
        repo.append_check(check)

        # Missing details
        _add(repo, today, name="Mystery Sauce")

        print("Demo data seeded successfully!")

    except Exception as e:
        session.rollback()
        print(f"Error seeding demo data: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()

"""create ingredients and ripeness_checks

Revision ID: 3f9c1a7e2b4d
Revises:
Create Date: 2026-10-19 09:12:37.481025

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c1a7e2b4d"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("brand", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=20), nullable=True),
        sa.Column("location", sa.String(length=20), nullable=True),
        sa.Column("confection_type", sa.String(length=20), nullable=True),
        sa.Column("ripeness", sa.String(length=20), nullable=True),
        sa.Column("open", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        sa.Column("last_checked_date", sa.Date(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ingredients_id"), "ingredients", ["id"], unique=False)
    op.create_index(op.f("ix_ingredients_category"), "ingredients", ["category"], unique=False)
    op.create_index(op.f("ix_ingredients_location"), "ingredients", ["location"], unique=False)
    op.create_index(
        op.f("ix_ingredients_confection_type"), "ingredients", ["confection_type"], unique=False
    )
    op.create_index(
        op.f("ix_ingredients_expiration_date"), "ingredients", ["expiration_date"], unique=False
    )

    # Check-in history, removed together with its ingredient
    op.create_table(
        "ripeness_checks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("ingredient_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["ingredient_id"], ["ingredients.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ripeness_checks_id"), "ripeness_checks", ["id"], unique=False)
    op.create_index(
        op.f("ix_ripeness_checks_ingredient_id"), "ripeness_checks", ["ingredient_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_ripeness_checks_ingredient_id"), table_name="ripeness_checks")
    op.drop_index(op.f("ix_ripeness_checks_id"), table_name="ripeness_checks")
    op.drop_table("ripeness_checks")
    op.drop_index(op.f("ix_ingredients_expiration_date"), table_name="ingredients")
    op.drop_index(op.f("ix_ingredients_confection_type"), table_name="ingredients")
    op.drop_index(op.f("ix_ingredients_location"), table_name="ingredients")
    op.drop_index(op.f("ix_ingredients_category"), table_name="ingredients")
    op.drop_index(op.f("ix_ingredients_id"), table_name="ingredients")
    op.drop_table("ingredients")

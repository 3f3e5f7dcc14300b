"""Ingredient model for tracked perishables."""

from sqlalchemy import Boolean, Column, Date, Integer, String
from sqlalchemy.orm import relationship

from freshkeep.database import Base
from freshkeep.models.mixins import TimestampMixin


class Ingredient(Base, TimestampMixin):
    """A perishable ingredient kept in the kitchen."""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=True)
    category = Column(String(20), nullable=True, index=True)  # "fruit" | "vegetable" | ...
    location = Column(String(20), nullable=True, index=True)  # "fridge" | "freezer" | "pantry"
    confection_type = Column(String(20), nullable=True, index=True)  # "fresh" | "frozen" | ...
    ripeness = Column(String(20), nullable=True)  # Only set for fresh ingredients
    open = Column(Boolean, nullable=False, default=False)
    expiration_date = Column(Date, nullable=True, index=True)
    last_checked_date = Column(Date, nullable=True)

    # Relationships
    checks = relationship(
        "RipenessCheck",
        back_populates="ingredient",
        cascade="all, delete-orphan",
        order_by="RipenessCheck.id",
    )

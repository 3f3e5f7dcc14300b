"""Ripeness check-in history model."""

from sqlalchemy import Column, Date, ForeignKey, Integer
from sqlalchemy.orm import relationship

from freshkeep.database import Base


class RipenessCheck(Base):
    """Append-only record of a ripeness check-in."""

    __tablename__ = "ripeness_checks"

    id = Column(Integer, primary_key=True, index=True)
    ingredient_id = Column(
        Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False)

    # Relationships
    ingredient = relationship("Ingredient", back_populates="checks")

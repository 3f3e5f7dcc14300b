"""Product lookup schemas."""

from pydantic import BaseModel, ConfigDict


class ProductResponse(BaseModel):
    """Product found for a scanned barcode."""

    model_config = ConfigDict(from_attributes=True)

    barcode: str
    name: str
    brand: str

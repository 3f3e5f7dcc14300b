"""Product lookup by barcode using the Open Food Facts API."""

import logging
from dataclasses import dataclass

import httpx

from freshkeep.config import get_settings
from freshkeep.services.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ProductInfo:
    """Name and brand of a scanned product."""

    barcode: str
    name: str
    brand: str


class ProductLookupService:
    """Service for looking up scanned barcodes on Open Food Facts."""

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.product_lookup_base_url.rstrip("/")
        self.timeout = settings.product_lookup_timeout

    @staticmethod
    def _extract_brand(product: dict) -> str:
        """Pick the brand, falling back to the manufacturer then the producer."""
        for key in ("brands", "manufacturer_name", "producer_name"):
            value = product.get(key)
            if value:
                return value
        return ""

    async def lookup(self, barcode: str) -> ProductInfo:
        """Look up a product by barcode.

        Raises:
            ValidationError: if the barcode is not numeric
            NotFound: if Open Food Facts has no product for the barcode
            httpx.HTTPError: if the API cannot be reached
        """
        barcode = barcode.strip()
        if not barcode.isdigit():
            raise ValidationError(f"Invalid barcode '{barcode}'")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(f"{self.base_url}/api/v0/product/{barcode}.json")
            response.raise_for_status()
            data = response.json()

        product = data.get("product")
        if data.get("status") != 1 or not product:
            logger.info(f"No product found for barcode {barcode}")
            raise NotFound(f"No product found for barcode {barcode}")

        info = ProductInfo(
            barcode=barcode,
            name=product.get("product_name") or "",
            brand=self._extract_brand(product),
        )
        logger.info(f"Barcode {barcode} -> '{info.name}' ({info.brand or 'no brand'})")
        return info

"""Product lookup API endpoints."""

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from freshkeep.api.dependencies import get_product_lookup_service
from freshkeep.schemas.product import ProductResponse
from freshkeep.services.product_lookup import ProductLookupService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("/{barcode}", response_model=ProductResponse)
async def lookup_product(
    barcode: str,
    service: Annotated[ProductLookupService, Depends(get_product_lookup_service)],
):
    """Look up the name and brand of a scanned barcode to prefill the add form."""
    try:
        return await service.lookup(barcode)
    except httpx.HTTPError as e:
        logger.error(f"Product lookup failed for barcode {barcode}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Product lookup service unavailable",
        ) from None

"""Payment Customizations — rule list, creation, and allow-list configuration.

Invariants:
    - Customizations addressed by numeric id in paths; GraphQL gids in bodies
    - Platform failures surface through HideCodError handlers (no HTTPException here)
"""

import logging

from fastapi import APIRouter, Depends, Path, status

from hidecod.api.dependencies import get_service
from hidecod.schemas.payment_customization import (
    ConfigurationResponse,
    ConfigurationUpdate,
    CustomizationCreated,
    CustomizationList,
)
from hidecod.services.payment_customizations import PaymentCustomizationService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/payment-customizations", tags=["payment-customizations"],
)


@router.get("", response_model=CustomizationList)
async def list_customizations(
    service: PaymentCustomizationService = Depends(get_service),
):
    """List the shop's payment customizations."""
    return {"customizations": await service.list_customizations()}

@router.post(
    "", response_model=CustomizationCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_customization(
    service: PaymentCustomizationService = Depends(get_service),
):
    """Create an enabled customization backed by the deployed function."""
    return await service.create_customization()

@router.get(
    "/{customization_id}/configuration", response_model=ConfigurationResponse,
)
async def get_configuration(
    customization_id: str = Path(pattern=r"^\d+$"),
    service: PaymentCustomizationService = Depends(get_service),
):
    return await service.get_configuration(customization_id)

@router.put(
    "/{customization_id}/configuration", response_model=ConfigurationResponse,
)
async def save_configuration(
    body: ConfigurationUpdate,
    customization_id: str = Path(pattern=r"^\d+$"),
    service: PaymentCustomizationService = Depends(get_service),
):
    """Replace the allow-list (and optional keyword list) on the rule."""
    return await service.save_configuration(
        customization_id, body.allowed_cities, body.cod_keywords,
    )

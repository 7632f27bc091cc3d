"""sf_checkout REST API — privileged transaction commands.

POST /initiate-privileged     — price + initiate a transaction (first transition privileged)
POST /transition-privileged   — price + transition an existing transaction
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.sf_checkout.application.schemas import PrivilegedRequest
from src.sf_checkout.application.service import CheckoutApplicationService
from src.sf_common.response import ApiResponse, success_response
from src.sf_marketplace.api.dependencies import get_bearer_token, get_marketplace_client
from src.sf_marketplace.domain.client import MarketplaceClientProtocol
from src.sf_tax.api.dependencies import get_tax_resolver
from src.sf_tax.application.resolver import TaxResolver

router = APIRouter(tags=["checkout"])


async def get_checkout_service(
    marketplace: Annotated[MarketplaceClientProtocol, Depends(get_marketplace_client)],
    tax_resolver: Annotated[TaxResolver, Depends(get_tax_resolver)],
) -> CheckoutApplicationService:
    return CheckoutApplicationService(
        marketplace,
        tax_resolver,
        art_levy_bps=settings.ART_LEVY_RATE_BPS if settings.ART_LEVY_ENABLED else None,
        default_unit_type=settings.DEFAULT_UNIT_TYPE,
    )


@router.post("/initiate-privileged")
async def initiate_privileged(
    body: PrivilegedRequest,
    request: Request,
    service: Annotated[CheckoutApplicationService, Depends(get_checkout_service)],
    token: Annotated[str, Depends(get_bearer_token)],
) -> ApiResponse:
    result = await service.initiate_privileged(body, token)
    return success_response(result.model_dump(by_alias=True), request)


@router.post("/transition-privileged")
async def transition_privileged(
    body: PrivilegedRequest,
    request: Request,
    service: Annotated[CheckoutApplicationService, Depends(get_checkout_service)],
    token: Annotated[str, Depends(get_bearer_token)],
) -> ApiResponse:
    result = await service.transition_privileged(body, token)
    return success_response(result.model_dump(by_alias=True), request)

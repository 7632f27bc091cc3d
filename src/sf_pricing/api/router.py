"""sf_pricing REST API.

POST /transaction-line-items  — price breakdown for a listing or cart (no submission)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.sf_common.response import ApiResponse, success_response
from src.sf_marketplace.api.dependencies import (
    get_marketplace_client,
    get_optional_bearer_token,
)
from src.sf_marketplace.domain.client import MarketplaceClientProtocol
from src.sf_pricing.application.schemas import LineItemsRequest
from src.sf_pricing.application.service import PricingApplicationService

router = APIRouter(tags=["pricing"])


async def get_pricing_service(
    marketplace: Annotated[MarketplaceClientProtocol, Depends(get_marketplace_client)],
) -> PricingApplicationService:
    return PricingApplicationService(
        marketplace,
        art_levy_bps=settings.ART_LEVY_RATE_BPS if settings.ART_LEVY_ENABLED else None,
        default_unit_type=settings.DEFAULT_UNIT_TYPE,
    )


@router.post("/transaction-line-items")
async def transaction_line_items(
    body: LineItemsRequest,
    request: Request,
    service: Annotated[PricingApplicationService, Depends(get_pricing_service)],
    token: Annotated[str | None, Depends(get_optional_bearer_token)],
) -> ApiResponse:
    result = await service.line_items(body, token)
    return success_response(result.model_dump(by_alias=True), request)

"""sf_tax REST API — checkout tax estimate."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.sf_common.response import ApiResponse, success_response
from src.sf_tax.api.dependencies import get_tax_resolver
from src.sf_tax.application import service as svc
from src.sf_tax.application.resolver import TaxResolver
from src.sf_tax.application.schemas import CalculateTaxRequest

router = APIRouter(tags=["tax"])


@router.post("/calculate-tax")
async def calculate_tax(
    body: CalculateTaxRequest,
    resolver: Annotated[TaxResolver, Depends(get_tax_resolver)],
    request: Request,
) -> ApiResponse:
    data = await svc.calculate_tax(body, resolver)
    return success_response(data.model_dump(by_alias=True), request)

"""Pydantic schemas for privileged initiate/transition requests."""

from typing import Any

from pydantic import Field

from src.sf_common.schemas import CamelModel
from src.sf_marketplace.domain.models import MarketplaceResponse
from src.sf_pricing.application.schemas import OrderDataIn


class BodyParamsIn(CamelModel):
    """What would otherwise be sent to the hosted platform directly."""

    transition: str
    id: str | None = None  # transaction id (transition only)
    process_alias: str | None = None  # initiate only
    params: dict[str, Any] = Field(default_factory=dict)


class PrivilegedRequest(CamelModel):
    is_speculative: bool = False
    order_data: OrderDataIn = Field(default_factory=OrderDataIn)
    body_params: BodyParamsIn
    query_params: dict[str, Any] = Field(default_factory=dict)


class PrivilegedResponse(CamelModel):
    status: int
    data: Any = None

    @classmethod
    def from_upstream(cls, resp: MarketplaceResponse) -> "PrivilegedResponse":
        return cls(status=resp.status, data=resp.data)

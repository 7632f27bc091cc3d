"""Hosted marketplace entities as seen by this service (read-only snapshots)."""

from dataclasses import dataclass, field
from typing import Any

from src.sf_negotiation.domain.ledger import Offer, TransitionRecord
from src.sf_pricing.domain.models import LineItem, Listing


@dataclass(frozen=True)
class MarketplaceTransaction:
    id: str
    process_name: str
    listing: Listing
    last_transition: str | None = None
    transitions: list[TransitionRecord] = field(default_factory=list)
    line_items: list[LineItem] = field(default_factory=list)
    offers: list[Offer] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    protected_data: dict[str, Any] = field(default_factory=dict)
    payin_currency: str | None = None

    @property
    def unit_type(self) -> str | None:
        return self.protected_data.get("unitType")


@dataclass(frozen=True)
class MarketplaceResponse:
    """Upstream response passed back to the caller unchanged."""

    status: int
    data: Any

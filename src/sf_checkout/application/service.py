"""CheckoutApplicationService — trusted execution of privileged transitions.

Offer-bearing and payment-request transitions must never reach the hosted
platform without server-computed line items. Each request:
  1. checks the process graph (legal from the current state, right role)
  2. checks the offer ledger against the transition history
  3. prices the order, with tax when a shipping address is known
  4. submits line items and the updated offer ledger with a trusted token
"""

import logging
from typing import Any

from src.sf_checkout.application.schemas import PrivilegedRequest, PrivilegedResponse
from src.sf_common.enums import DeliveryMethod, ProcessName, TransactionRole, parse_role
from src.sf_common.errors import (
    InvalidNegotiationHistoryError,
    ListingNotFoundError,
    MissingCurrencyError,
    NotPrivilegedTransitionError,
    TransactionNotFoundError,
)
from src.sf_common.money import Money, sum_money
from src.sf_marketplace.domain.client import MarketplaceClientProtocol
from src.sf_marketplace.domain.models import MarketplaceTransaction
from src.sf_negotiation.domain.ledger import (
    Offer,
    append_offer,
    make_offer,
    resolve_accepted_offer_amount,
)
from src.sf_pricing.application.schemas import FrameInfoIn, OrderDataIn
from src.sf_pricing.application.service import ensure_delivery_method, fetch_cart_listings
from src.sf_pricing.domain.codes import (
    LINE_ITEM_FRAME,
    LINE_ITEM_SHIPPING_FEE,
    NEGOTIATED_UNIT_TYPE,
    is_base_line_item,
)
from src.sf_pricing.domain.line_items import net_totals_by_code, transaction_line_items
from src.sf_pricing.domain.models import CommissionRates, LineItem, Listing, OrderData
from src.sf_tax.application.resolver import TaxResolver
from src.sf_tax.application.schemas import ShippingAddressIn
from src.sf_tax.domain.models import ShippingAddress, TaxResult
from src.sf_transaction.domain.process import ProcessGraph, normalize_transition
from src.sf_transaction.domain.processes import get_process

logger = logging.getLogger(__name__)


def _currency(price: Money | None, requested: str | None) -> str:
    if price is not None:
        return price.currency
    if requested:
        return requested.upper()
    raise MissingCurrencyError()


def _submission_line_items(line_items: list[LineItem]) -> list[dict[str, object]]:
    return [item.to_wire(with_totals=False) for item in line_items]


def _shipping_address(*sources: Any) -> ShippingAddress | None:
    """First shipping address found, checked in the given order."""
    for source in sources:
        if isinstance(source, ShippingAddressIn):
            return source.to_domain()
        if isinstance(source, dict) and source:
            return ShippingAddressIn.model_validate(source).to_domain()
    return None


def _apply_stored_checkout_data(
    order: OrderData, order_data: OrderDataIn, protected_data: dict[str, Any]
) -> None:
    """Delivery method and frame chosen at initiate live in protectedData."""
    stored_method = protected_data.get("deliveryMethod")
    if order_data.delivery_method == DeliveryMethod.NONE and stored_method:
        order.delivery_method = DeliveryMethod(stored_method)
    stored_frame = protected_data.get("mainListingFrameInfo")
    if order.frame is None and isinstance(stored_frame, dict):
        order.frame = FrameInfoIn.model_validate(stored_frame).to_domain()


class CheckoutApplicationService:
    def __init__(
        self,
        marketplace: MarketplaceClientProtocol,
        tax_resolver: TaxResolver,
        *,
        art_levy_bps: int | None = None,
        default_unit_type: str = "item",
    ) -> None:
        self._marketplace = marketplace
        self._tax = tax_resolver
        self._art_levy_bps = art_levy_bps
        self._default_unit_type = default_unit_type

    # ------------------------------------------------------------------
    # Initiate
    # ------------------------------------------------------------------

    async def initiate_privileged(self, req: PrivilegedRequest, token: str) -> PrivilegedResponse:
        body = req.body_params
        order_data = req.order_data

        process = get_process(body.process_alias or "")
        transition = normalize_transition(body.transition)
        process.apply(process.initial_state, transition)
        if not process.is_privileged(transition):
            raise NotPrivilegedTransitionError(transition)
        role = parse_role(order_data.actor)
        process.ensure_actor(transition, role)

        listing_id = body.params.get("listingId")
        if not listing_id:
            raise ListingNotFoundError("<missing listingId>")
        listing = await self._marketplace.show_listing(str(listing_id), token)
        cart_listings = await fetch_cart_listings(self._marketplace, listing.id, order_data, token)
        commission = await self._marketplace.fetch_commission()
        ensure_delivery_method([listing, *cart_listings], order_data.delivery_method)

        currency = _currency(listing.price, order_data.currency)
        new_offer = self._new_offer(process, transition, role, order_data)
        unit_type = self._unit_type(process, order_data.unit_type)
        order = order_data.to_domain(
            unit_type,
            offer=Money(new_offer.offer_in_subunits, currency) if new_offer else None,
        )
        address = _shipping_address(
            order_data.shipping_details,
            (body.params.get("protectedData") or {}).get("shippingDetails"),
        )
        line_items = await self._price(listing, order, commission, cart_listings, address, currency)

        protected_data = dict(body.params.get("protectedData") or {})
        protected_data["unitType"] = unit_type
        if order_data.delivery_method != DeliveryMethod.NONE:
            protected_data["deliveryMethod"] = order_data.delivery_method.value
        params: dict[str, Any] = {
            **body.params,
            "lineItems": _submission_line_items(line_items),
            "protectedData": protected_data,
        }
        if new_offer is not None:
            ledger = append_offer([], new_offer, [])
            params["metadata"] = {"offers": [o.to_wire() for o in ledger]}

        submission = {"processAlias": body.process_alias, "transition": transition, "params": params}
        logger.info(
            "Initiating %s via %s for listing %s (role=%s, speculative=%s, %d line items)",
            process.id, transition, listing.id, role.value, req.is_speculative, len(line_items),
        )
        resp = await self._marketplace.initiate(
            submission, token, speculative=req.is_speculative, query=req.query_params or None
        )
        return PrivilegedResponse.from_upstream(resp)

    # ------------------------------------------------------------------
    # Transition
    # ------------------------------------------------------------------

    async def transition_privileged(
        self, req: PrivilegedRequest, token: str
    ) -> PrivilegedResponse:
        body = req.body_params
        order_data = req.order_data
        if not body.id:
            raise TransactionNotFoundError("<missing id>")

        tx = await self._marketplace.show_transaction(body.id, token)
        process = get_process(tx.process_name)
        transition = normalize_transition(body.transition)
        process.apply(process.state_after(tx.last_transition), transition)
        role = parse_role(order_data.actor)
        process.ensure_actor(transition, role)

        if not process.is_privileged(transition):
            # Nothing to price; the platform applies its own authorization.
            logger.info("Passing through non-privileged %s on %s", transition, tx.id)
            return await self._submit_transition(tx.id, transition, dict(body.params), req, token)

        new_offer = self._new_offer(process, transition, role, order_data)
        ledger: list[Offer] | None = None
        if process.offer_transitions:
            ledger = append_offer(
                tx.offers,
                new_offer,
                tx.transitions,
                expected_history_length=order_data.expected_history_length,
                offer_transitions=process.offer_transitions,
            )

        currency = tx.payin_currency or _currency(tx.listing.price, order_data.currency)
        unit_type = self._unit_type(process, order_data.unit_type, tx.unit_type)
        offer_amount = self._offer_amount(tx, new_offer, unit_type)
        order = order_data.to_domain(
            unit_type, offer=Money(offer_amount, currency) if offer_amount else None
        )
        _apply_stored_checkout_data(order, order_data, tx.protected_data)
        address = _shipping_address(
            order_data.shipping_details,
            (body.params.get("protectedData") or {}).get("shippingDetails"),
            tx.protected_data.get("shippingDetails"),
        )
        cart_listings = await fetch_cart_listings(
            self._marketplace, tx.listing.id, order_data, token
        )
        ensure_delivery_method([tx.listing, *cart_listings], order.delivery_method)
        commission = await self._marketplace.fetch_commission()
        line_items = await self._price(
            tx.listing, order, commission, cart_listings, address, currency
        )

        # listingId is only meaningful at initiate
        params = {k: v for k, v in body.params.items() if k != "listingId"}
        params["lineItems"] = _submission_line_items(line_items)
        if ledger is not None:
            params["metadata"] = {**tx.metadata, "offers": [o.to_wire() for o in ledger]}
        logger.info(
            "Submitting %s on %s (role=%s, speculative=%s, %d line items)",
            transition, tx.id, role.value, req.is_speculative, len(line_items),
        )
        return await self._submit_transition(tx.id, transition, params, req, token)

    async def _submit_transition(
        self,
        transaction_id: str,
        transition: str,
        params: dict[str, Any],
        req: PrivilegedRequest,
        token: str,
    ) -> PrivilegedResponse:
        submission = {"id": transaction_id, "transition": transition, "params": params}
        resp = await self._marketplace.transition(
            submission, token, speculative=req.is_speculative, query=req.query_params or None
        )
        return PrivilegedResponse.from_upstream(resp)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _new_offer(
        process: ProcessGraph,
        transition: str,
        role: TransactionRole,
        order_data: OrderDataIn,
    ) -> Offer | None:
        if not process.is_offer_transition(transition):
            return None
        return make_offer(order_data.offer_in_subunits, role, transition, process)  # type: ignore[arg-type]

    def _unit_type(
        self, process: ProcessGraph, requested: str | None, stored: str | None = None
    ) -> str:
        if process.name == ProcessName.NEGOTIATED_PURCHASE:
            return NEGOTIATED_UNIT_TYPE
        return stored or requested or self._default_unit_type

    @staticmethod
    def _offer_amount(
        tx: MarketplaceTransaction, new_offer: Offer | None, unit_type: str
    ) -> int | None:
        if new_offer is not None:
            return new_offer.offer_in_subunits
        if unit_type != NEGOTIATED_UNIT_TYPE:
            return None
        amount = resolve_accepted_offer_amount(tx.offers, tx.line_items)
        if amount is None:
            raise InvalidNegotiationHistoryError(f"no agreed offer on transaction {tx.id}")
        return amount

    async def _price(
        self,
        listing: Listing,
        order: OrderData,
        commission: CommissionRates,
        cart_listings: list[Listing],
        address: ShippingAddress | None,
        currency: str,
    ) -> list[LineItem]:
        draft = transaction_line_items(
            listing, order, commission,
            cart_listings=cart_listings, art_levy_bps=self._art_levy_bps,
        )
        tax = await self._resolve_tax(draft, address, currency)
        if tax is None:
            return draft
        return transaction_line_items(
            listing, order, commission,
            cart_listings=cart_listings, tax=tax, art_levy_bps=self._art_levy_bps,
        )

    async def _resolve_tax(
        self, draft: list[LineItem], address: ShippingAddress | None, currency: str
    ) -> TaxResult | None:
        if address is None or not self._tax.enabled:
            return None
        totals = net_totals_by_code(draft)
        zero = Money.zero(currency)
        order_total = sum_money(
            [total for code, total in totals.items() if is_base_line_item(code)], currency
        )
        return await self._tax.resolve(
            order_total,
            totals.get(LINE_ITEM_SHIPPING_FEE, zero),
            totals.get(LINE_ITEM_FRAME, zero),
            address,
            currency,
        )

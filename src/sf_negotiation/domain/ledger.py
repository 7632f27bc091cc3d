"""Negotiation offer ledger: append-only offers kept in transaction metadata.

Invariant: the offer-bearing transitions in a transaction's history and the
ledger entries match 1:1 in count and order (same transition, same role).
Every append checks this first; a mismatch means metadata and the transition
log drifted apart (e.g. a retried request double-appending).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.sf_common.enums import TransactionRole, parse_role
from src.sf_common.errors import InvalidNegotiationHistoryError, InvalidOfferError
from src.sf_pricing.domain.codes import LINE_ITEM_NEGOTIATED_ITEM
from src.sf_pricing.domain.models import LineItem
from src.sf_transaction.domain import negotiated_purchase
from src.sf_transaction.domain.process import ProcessGraph, normalize_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Offer:
    offer_in_subunits: int
    by: TransactionRole
    transition: str

    def to_wire(self) -> dict[str, Any]:
        return {
            "offerInSubunits": self.offer_in_subunits,
            "by": self.by.value,
            "transition": self.transition,
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "Offer":
        amount = data.get("offerInSubunits")
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidNegotiationHistoryError(f"offer amount is not an integer: {amount!r}")
        return cls(
            offer_in_subunits=amount,
            by=parse_role(data.get("by")),
            transition=normalize_transition(str(data.get("transition", ""))),
        )


@dataclass(frozen=True)
class TransitionRecord:
    """One entry of the hosted platform's transition log."""

    transition: str
    by: str  # customer / provider / operator / system
    created_at: datetime | None = None


def make_offer(
    amount: int,
    role: TransactionRole,
    transition: str,
    graph: ProcessGraph = negotiated_purchase.GRAPH,
) -> Offer:
    """Build a validated offer for an offer-bearing transition."""
    name = normalize_transition(transition)
    if not graph.is_offer_transition(name):
        raise InvalidOfferError(f"{name} does not carry an offer")
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidOfferError(f"offer must be a positive integer amount, got {amount!r}")
    actor = graph.actor_for(name)
    if actor is None or actor.value != role.value:
        raise InvalidOfferError(f"{name} cannot be made by {role.value}")
    return Offer(offer_in_subunits=amount, by=role, transition=name)


def _offer_records(
    history: list[TransitionRecord], offer_transitions: frozenset[str]
) -> list[TransitionRecord]:
    return [r for r in history if normalize_transition(r.transition) in offer_transitions]


def is_valid_offer_history(
    offers: list[Offer],
    history: list[TransitionRecord],
    offer_transitions: frozenset[str] = negotiated_purchase.OFFER_TRANSITIONS,
) -> bool:
    records = _offer_records(history, offer_transitions)
    if len(records) != len(offers):
        return False
    return all(
        offer.transition == normalize_transition(record.transition) and offer.by.value == record.by
        for offer, record in zip(offers, records)
    )


def ensure_valid_offer_history(
    offers: list[Offer],
    history: list[TransitionRecord],
    offer_transitions: frozenset[str] = negotiated_purchase.OFFER_TRANSITIONS,
) -> None:
    if not is_valid_offer_history(offers, history, offer_transitions):
        records = _offer_records(history, offer_transitions)
        logger.error(
            "Offer ledger out of sync: %d offers vs %d offer transitions",
            len(offers), len(records),
        )
        raise InvalidNegotiationHistoryError(
            f"{len(offers)} offers recorded for {len(records)} offer transitions"
        )


def append_offer(
    offers: list[Offer],
    new_offer: Offer | None,
    history: list[TransitionRecord],
    *,
    expected_history_length: int | None = None,
    offer_transitions: frozenset[str] = negotiated_purchase.OFFER_TRANSITIONS,
) -> list[Offer]:
    """Return a new ledger with ``new_offer`` appended; ``offers`` is never mutated.

    ``expected_history_length`` is an optimistic version token: when given it
    must equal the current history length, otherwise another write got there
    first.
    """
    if expected_history_length is not None and expected_history_length != len(history):
        raise InvalidNegotiationHistoryError(
            f"stale transaction: expected {expected_history_length} transitions, "
            f"found {len(history)}"
        )
    ensure_valid_offer_history(offers, history, offer_transitions)
    if new_offer is None:
        return list(offers)
    return [*offers, new_offer]


def get_latest_offer_amount(offers: list[Offer]) -> int | None:
    return offers[-1].offer_in_subunits if offers else None


def resolve_accepted_offer_amount(
    offers: list[Offer], line_items: list[LineItem] | None = None
) -> int | None:
    """Agreed price: latest ledger offer, else the last non-reversed negotiated line item."""
    latest = get_latest_offer_amount(offers)
    if latest:
        return latest
    for item in reversed(line_items or []):
        if item.code == LINE_ITEM_NEGOTIATED_ITEM and not item.reversal:
            return item.unit_price.amount
    return None


@dataclass(frozen=True)
class ActivityEntry:
    transition: str
    by: str
    created_at: datetime | None = None
    offer_in_subunits: int | None = None


def transitions_with_matching_offers(
    history: list[TransitionRecord],
    offers: list[Offer],
    offer_transitions: frozenset[str] = negotiated_purchase.OFFER_TRANSITIONS,
) -> list[ActivityEntry]:
    """Activity feed entries; offer amounts attached only when the ledger is valid."""
    valid = is_valid_offer_history(offers, history, offer_transitions)
    entries: list[ActivityEntry] = []
    offer_index = 0
    for record in history:
        amount = None
        if valid and normalize_transition(record.transition) in offer_transitions:
            amount = offers[offer_index].offer_in_subunits
            offer_index += 1
        entries.append(ActivityEntry(record.transition, record.by, record.created_at, amount))
    return entries

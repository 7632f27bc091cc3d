"""Transaction page UI state: (process state, role) -> presentation directives.

Each process has an ordered rule list of ``(state, role, build)``; ``role=None``
matches any role. The first matching rule wins, unmatched pairs fall through to
the process default (headings only, no actions).
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from src.sf_common.enums import ActionIntent, ProcessName, TransactionRole
from src.sf_transaction.domain import default_purchase, negotiated_purchase
from src.sf_transaction.domain.process import ProcessGraph, normalize_state

CUSTOMER = TransactionRole.CUSTOMER
PROVIDER = TransactionRole.PROVIDER


@dataclass(frozen=True)
class ActionDirective:
    transition: str
    role: TransactionRole
    intent: ActionIntent = ActionIntent.TRANSITION


@dataclass(frozen=True)
class TransactionStateData:
    process_name: str
    process_state: str
    action_needed: bool = False
    is_final: bool = False
    is_sale_notification: bool = False
    show_detail_card_headings: bool = False
    show_extra_info: bool = False
    show_action_buttons: bool = False
    show_item_sold_message: bool = False
    show_review_as_first_link: bool = False
    primary_action: ActionDirective | None = None
    secondary_action: ActionDirective | None = None
    tertiary_action: ActionDirective | None = None

    @property
    def actions(self) -> list[ActionDirective]:
        return [a for a in (self.primary_action, self.secondary_action, self.tertiary_action) if a]


@dataclass(frozen=True)
class StateContext:
    base: TransactionStateData
    role: TransactionRole
    is_item_sold: bool = False


Builder = Callable[[StateContext], TransactionStateData]
Rule = tuple[str, TransactionRole | None, Builder]


def _action(transition: str, role: TransactionRole, intent: ActionIntent = ActionIntent.TRANSITION):
    return ActionDirective(transition=transition, role=role, intent=intent)


def _headings(ctx: StateContext) -> TransactionStateData:
    return replace(ctx.base, show_detail_card_headings=True)


def _info(ctx: StateContext) -> TransactionStateData:
    return replace(ctx.base, show_detail_card_headings=True, show_extra_info=True)


def _final(ctx: StateContext) -> TransactionStateData:
    return replace(ctx.base, show_detail_card_headings=True, is_final=True)


def _buttons(ctx: StateContext, *, action_needed: bool = False, **actions) -> TransactionStateData:
    return replace(
        ctx.base,
        show_detail_card_headings=True,
        show_extra_info=True,
        show_action_buttons=True,
        action_needed=action_needed,
        **actions,
    )


def match_rule(rules: list[Rule], state: str, role: TransactionRole) -> Builder | None:
    for rule_state, rule_role, build in rules:
        if rule_state == state and (rule_role is None or rule_role == role):
            return build
    return None


# --- negotiated-purchase ---

NT = negotiated_purchase.Transitions
NS = negotiated_purchase.States


def _accepted_customer(ctx: StateContext) -> TransactionStateData:
    if ctx.is_item_sold:
        return replace(_info(ctx), show_item_sold_message=True)
    return _buttons(
        ctx,
        primary_action=_action(NT.REQUEST_PAYMENT, CUSTOMER, ActionIntent.CHECKOUT_REDIRECT),
    )


NEGOTIATED_PURCHASE_RULES: list[Rule] = [
    # negotiation
    (NS.OFFER_PENDING, CUSTOMER, lambda ctx: _buttons(
        ctx,
        secondary_action=_action(NT.WITHDRAW_OFFER, CUSTOMER),
    )),
    (NS.OFFER_PENDING, PROVIDER, lambda ctx: _buttons(
        ctx,
        primary_action=_action(NT.ACCEPT_OFFER, PROVIDER),
        secondary_action=_action(NT.DECLINE_OFFER, PROVIDER),
        tertiary_action=_action(
            NT.PROVIDER_COUNTER_OFFER, PROVIDER, ActionIntent.OPEN_COUNTER_OFFER_FORM
        ),
    )),
    (NS.COUNTER_PENDING, CUSTOMER, lambda ctx: _buttons(
        ctx,
        primary_action=_action(NT.ACCEPT_COUNTER_OFFER, CUSTOMER),
        secondary_action=_action(NT.DECLINE_COUNTER_OFFER, CUSTOMER),
        tertiary_action=_action(
            NT.CUSTOMER_COUNTER_OFFER, CUSTOMER, ActionIntent.OPEN_COUNTER_OFFER_FORM
        ),
    )),
    (NS.COUNTER_PENDING, PROVIDER, lambda ctx: _buttons(
        ctx,
        secondary_action=_action(NT.WITHDRAW_COUNTER_OFFER, PROVIDER),
    )),
    # payment
    (NS.ACCEPTED, CUSTOMER, _accepted_customer),
    (NS.ACCEPTED, PROVIDER, _info),
    (NS.DECLINED, None, _final),
    (NS.PAYMENT_EXPIRED, None, _final),
    # fulfillment
    (NS.PURCHASED, CUSTOMER, lambda ctx: _buttons(
        ctx,
        primary_action=_action(NT.MARK_RECEIVED_FROM_PURCHASED, CUSTOMER),
    )),
    (NS.PURCHASED, PROVIDER, lambda ctx: _buttons(
        ctx,
        action_needed=True,
        primary_action=_action(NT.MARK_DELIVERED, PROVIDER),
    )),
    (NS.DELIVERED, CUSTOMER, lambda ctx: _buttons(
        ctx,
        action_needed=True,
        primary_action=_action(NT.MARK_RECEIVED, CUSTOMER),
        secondary_action=_action(NT.DISPUTE, CUSTOMER),
    )),
    (NS.DELIVERED, PROVIDER, _info),
    (NS.DISPUTED, None, _info),
    (NS.RECEIVED, None, _info),
    (NS.COMPLETED, None, _final),
    (NS.CANCELED, None, _final),
]


# --- default-purchase ---

DT = default_purchase.Transitions
DS = default_purchase.States


def _first_review(ctx: StateContext) -> TransactionStateData:
    transition = DT.REVIEW_1_BY_CUSTOMER if ctx.role == CUSTOMER else DT.REVIEW_1_BY_PROVIDER
    return replace(
        _buttons(ctx, primary_action=_action(transition, ctx.role, ActionIntent.OPEN_REVIEW_FORM)),
        show_review_as_first_link=True,
    )


DEFAULT_PURCHASE_RULES: list[Rule] = [
    (DS.INQUIRY, CUSTOMER, lambda ctx: _buttons(
        ctx,
        primary_action=_action(
            DT.REQUEST_PAYMENT_AFTER_INQUIRY, CUSTOMER, ActionIntent.CHECKOUT_REDIRECT
        ),
    )),
    (DS.INQUIRY, PROVIDER, _headings),
    (DS.PENDING_PAYMENT, None, _headings),
    (DS.PAYMENT_EXPIRED, None, _final),
    (DS.PURCHASED, CUSTOMER, lambda ctx: _buttons(
        ctx,
        primary_action=_action(DT.MARK_RECEIVED_FROM_PURCHASED, CUSTOMER),
    )),
    (DS.PURCHASED, PROVIDER, lambda ctx: _buttons(
        ctx,
        action_needed=True,
        primary_action=_action(DT.MARK_DELIVERED, PROVIDER),
    )),
    (DS.DELIVERED, CUSTOMER, lambda ctx: _buttons(
        ctx,
        action_needed=True,
        primary_action=_action(DT.MARK_RECEIVED, CUSTOMER),
        secondary_action=_action(DT.DISPUTE, CUSTOMER),
    )),
    (DS.DELIVERED, PROVIDER, _info),
    (DS.DISPUTED, None, _info),
    (DS.RECEIVED, None, _info),
    (DS.CANCELED, None, _final),
    (DS.COMPLETED, None, _first_review),
    (DS.REVIEWED_BY_PROVIDER, CUSTOMER, lambda ctx: _buttons(
        ctx,
        action_needed=True,
        primary_action=_action(DT.REVIEW_2_BY_CUSTOMER, CUSTOMER, ActionIntent.OPEN_REVIEW_FORM),
    )),
    (DS.REVIEWED_BY_CUSTOMER, PROVIDER, lambda ctx: _buttons(
        ctx,
        action_needed=True,
        primary_action=_action(DT.REVIEW_2_BY_PROVIDER, PROVIDER, ActionIntent.OPEN_REVIEW_FORM),
    )),
    (DS.REVIEWED, None, _final),
]

RULES: dict[ProcessName, list[Rule]] = {
    ProcessName.NEGOTIATED_PURCHASE: NEGOTIATED_PURCHASE_RULES,
    ProcessName.DEFAULT_PURCHASE: DEFAULT_PURCHASE_RULES,
}


def resolve_transaction_state(
    process: ProcessGraph,
    state: str,
    role: TransactionRole,
    *,
    is_item_sold: bool = False,
) -> TransactionStateData:
    current = normalize_state(state)
    ctx = StateContext(
        base=TransactionStateData(process_name=process.name.value, process_state=current),
        role=role,
        is_item_sold=is_item_sold,
    )
    build = match_rule(RULES[process.name], current, role) or _headings
    return build(ctx)

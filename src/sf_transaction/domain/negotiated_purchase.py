"""Transaction process graph for negotiated purchases (negotiated-purchase/release-1).

Customer makes offer -> provider accepts / declines / counters -> payment ->
shipping flow. The offer-pending <-> counter-pending loop is unbounded.

Transition strings must stay in sync with the hosted marketplace process.
"""

from src.sf_common.enums import ProcessName, TransitionActor
from src.sf_transaction.domain.process import ProcessGraph, StateNode


class Transitions:
    # Negotiation phase
    CUSTOMER_OFFER = "transition/customer-offer"
    ACCEPT_OFFER = "transition/accept-offer"
    DECLINE_OFFER = "transition/decline-offer"
    PROVIDER_COUNTER_OFFER = "transition/provider-counter-offer"
    ACCEPT_COUNTER_OFFER = "transition/accept-counter-offer"
    DECLINE_COUNTER_OFFER = "transition/decline-counter-offer"
    CUSTOMER_COUNTER_OFFER = "transition/customer-counter-offer"
    WITHDRAW_OFFER = "transition/withdraw-offer"
    WITHDRAW_COUNTER_OFFER = "transition/withdraw-counter-offer"
    OPERATOR_DECLINE_FROM_OFFER = "transition/operator-decline-from-offer"
    OPERATOR_DECLINE_FROM_COUNTER = "transition/operator-decline-from-counter"
    EXPIRE_OFFER = "transition/expire-offer"
    EXPIRE_COUNTER_OFFER = "transition/expire-counter-offer"
    EXPIRE_ACCEPTED = "transition/expire-accepted"
    # Payment phase
    REQUEST_PAYMENT = "transition/request-payment"
    CONFIRM_PAYMENT = "transition/confirm-payment"
    EXPIRE_PAYMENT = "transition/expire-payment"
    # Fulfillment phase
    MARK_RECEIVED_FROM_PURCHASED = "transition/mark-received-from-purchased"
    MARK_DELIVERED = "transition/mark-delivered"
    OPERATOR_MARK_DELIVERED = "transition/operator-mark-delivered"
    MARK_RECEIVED = "transition/mark-received"
    AUTO_MARK_RECEIVED = "transition/auto-mark-received"
    DISPUTE = "transition/dispute"
    OPERATOR_DISPUTE = "transition/operator-dispute"
    MARK_RECEIVED_FROM_DISPUTED = "transition/mark-received-from-disputed"
    # Cancellation
    CANCEL = "transition/cancel"
    AUTO_CANCEL = "transition/auto-cancel"
    CANCEL_FROM_DISPUTED = "transition/cancel-from-disputed"
    AUTO_CANCEL_FROM_DISPUTED = "transition/auto-cancel-from-disputed"
    # Completion
    AUTO_COMPLETE = "transition/auto-complete"


class States:
    INITIAL = "initial"
    OFFER_PENDING = "offer-pending"
    COUNTER_PENDING = "counter-pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    PENDING_PAYMENT = "pending-payment"
    PAYMENT_EXPIRED = "payment-expired"
    PURCHASED = "purchased"
    DELIVERED = "delivered"
    RECEIVED = "received"
    DISPUTED = "disputed"
    CANCELED = "canceled"
    COMPLETED = "completed"


T = Transitions
S = States
_C = TransitionActor.CUSTOMER
_P = TransitionActor.PROVIDER
_O = TransitionActor.OPERATOR
_SYS = TransitionActor.SYSTEM

ACTORS: dict[str, TransitionActor] = {
    T.CUSTOMER_OFFER: _C,
    T.ACCEPT_OFFER: _P,
    T.DECLINE_OFFER: _P,
    T.PROVIDER_COUNTER_OFFER: _P,
    T.ACCEPT_COUNTER_OFFER: _C,
    T.DECLINE_COUNTER_OFFER: _C,
    T.CUSTOMER_COUNTER_OFFER: _C,
    T.WITHDRAW_OFFER: _C,
    T.WITHDRAW_COUNTER_OFFER: _P,
    T.OPERATOR_DECLINE_FROM_OFFER: _O,
    T.OPERATOR_DECLINE_FROM_COUNTER: _O,
    T.EXPIRE_OFFER: _SYS,
    T.EXPIRE_COUNTER_OFFER: _SYS,
    T.EXPIRE_ACCEPTED: _SYS,
    T.REQUEST_PAYMENT: _C,
    T.CONFIRM_PAYMENT: _C,
    T.EXPIRE_PAYMENT: _SYS,
    T.MARK_RECEIVED_FROM_PURCHASED: _C,
    T.MARK_DELIVERED: _P,
    T.OPERATOR_MARK_DELIVERED: _O,
    T.MARK_RECEIVED: _C,
    T.AUTO_MARK_RECEIVED: _SYS,
    T.DISPUTE: _C,
    T.OPERATOR_DISPUTE: _O,
    T.MARK_RECEIVED_FROM_DISPUTED: _O,
    T.CANCEL: _O,
    T.AUTO_CANCEL: _SYS,
    T.CANCEL_FROM_DISPUTED: _O,
    T.AUTO_CANCEL_FROM_DISPUTED: _SYS,
    T.AUTO_COMPLETE: _SYS,
}

# Transitions that carry an offer amount (affect pricing)
OFFER_TRANSITIONS = frozenset({
    T.CUSTOMER_OFFER,
    T.PROVIDER_COUNTER_OFFER,
    T.CUSTOMER_COUNTER_OFFER,
})

PRIVILEGED_TRANSITIONS = OFFER_TRANSITIONS | {T.REQUEST_PAYMENT}

REFUND_TRANSITIONS = frozenset({
    T.EXPIRE_PAYMENT,
    T.CANCEL,
    T.AUTO_CANCEL,
    T.CANCEL_FROM_DISPUTED,
    T.AUTO_CANCEL_FROM_DISPUTED,
})

COMPLETION_TRANSITIONS = frozenset({T.AUTO_COMPLETE})

# Shown in the activity feed
RELEVANT_PAST_TRANSITIONS = frozenset(ACTORS) - {
    T.OPERATOR_DECLINE_FROM_OFFER,
    T.OPERATOR_DECLINE_FROM_COUNTER,
    T.REQUEST_PAYMENT,
    T.AUTO_COMPLETE,
}

STATES_NEEDING_PROVIDER_ATTENTION = frozenset({S.OFFER_PENDING, S.PURCHASED})
STATES_NEEDING_CUSTOMER_ATTENTION = frozenset({S.COUNTER_PENDING, S.ACCEPTED, S.DELIVERED})
NEGOTIATION_STATES = frozenset({S.OFFER_PENDING, S.COUNTER_PENDING})

GRAPH = ProcessGraph(
    id="negotiated-purchase/release-1",
    name=ProcessName.NEGOTIATED_PURCHASE,
    initial_state=S.INITIAL,
    states={
        S.INITIAL: StateNode({T.CUSTOMER_OFFER: S.OFFER_PENDING}),
        S.OFFER_PENDING: StateNode({
            T.ACCEPT_OFFER: S.ACCEPTED,
            T.DECLINE_OFFER: S.DECLINED,
            T.PROVIDER_COUNTER_OFFER: S.COUNTER_PENDING,
            T.WITHDRAW_OFFER: S.DECLINED,
            T.OPERATOR_DECLINE_FROM_OFFER: S.DECLINED,
            T.EXPIRE_OFFER: S.DECLINED,
        }),
        S.COUNTER_PENDING: StateNode({
            T.ACCEPT_COUNTER_OFFER: S.ACCEPTED,
            T.DECLINE_COUNTER_OFFER: S.DECLINED,
            T.CUSTOMER_COUNTER_OFFER: S.OFFER_PENDING,
            T.WITHDRAW_COUNTER_OFFER: S.DECLINED,
            T.OPERATOR_DECLINE_FROM_COUNTER: S.DECLINED,
            T.EXPIRE_COUNTER_OFFER: S.DECLINED,
        }),
        S.ACCEPTED: StateNode({
            T.REQUEST_PAYMENT: S.PENDING_PAYMENT,
            T.EXPIRE_ACCEPTED: S.DECLINED,
        }),
        S.PENDING_PAYMENT: StateNode({
            T.CONFIRM_PAYMENT: S.PURCHASED,
            T.EXPIRE_PAYMENT: S.PAYMENT_EXPIRED,
        }),
        S.PURCHASED: StateNode({
            T.MARK_RECEIVED_FROM_PURCHASED: S.RECEIVED,
            T.MARK_DELIVERED: S.DELIVERED,
            T.OPERATOR_MARK_DELIVERED: S.DELIVERED,
            T.CANCEL: S.CANCELED,
            T.AUTO_CANCEL: S.CANCELED,
        }),
        S.DELIVERED: StateNode({
            T.MARK_RECEIVED: S.RECEIVED,
            T.AUTO_MARK_RECEIVED: S.RECEIVED,
            T.DISPUTE: S.DISPUTED,
            T.OPERATOR_DISPUTE: S.DISPUTED,
        }),
        S.DISPUTED: StateNode({
            T.MARK_RECEIVED_FROM_DISPUTED: S.RECEIVED,
            T.CANCEL_FROM_DISPUTED: S.CANCELED,
            T.AUTO_CANCEL_FROM_DISPUTED: S.CANCELED,
        }),
        S.RECEIVED: StateNode({T.AUTO_COMPLETE: S.COMPLETED}),
        S.DECLINED: StateNode(terminal=True),
        S.PAYMENT_EXPIRED: StateNode(terminal=True),
        S.CANCELED: StateNode(terminal=True),
        S.COMPLETED: StateNode(terminal=True),
    },
    actors=ACTORS,
    privileged=PRIVILEGED_TRANSITIONS,
    offer_transitions=OFFER_TRANSITIONS,
    refund_transitions=REFUND_TRANSITIONS,
)


def is_negotiation_state(state: str | None) -> bool:
    if state is None:
        return False
    unprefixed = state.split("/", 1)[1] if "/" in state else state
    return unprefixed in NEGOTIATION_STATES


def is_relevant_past_transition(transition: str) -> bool:
    return transition in RELEVANT_PAST_TRANSITIONS


def is_completed(transition: str) -> bool:
    return transition in COMPLETION_TRANSITIONS

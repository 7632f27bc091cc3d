"""Transaction process graph for standard purchases (default-purchase/release-1).

Inquiry or direct payment request -> payment -> fulfillment -> completion ->
two-sided reviews.
"""

from src.sf_common.enums import ProcessName, TransitionActor
from src.sf_transaction.domain.process import ProcessGraph, StateNode


class Transitions:
    INQUIRE = "transition/inquire"
    REQUEST_PAYMENT = "transition/request-payment"
    REQUEST_PAYMENT_AFTER_INQUIRY = "transition/request-payment-after-inquiry"
    CONFIRM_PAYMENT = "transition/confirm-payment"
    EXPIRE_PAYMENT = "transition/expire-payment"
    MARK_RECEIVED_FROM_PURCHASED = "transition/mark-received-from-purchased"
    MARK_DELIVERED = "transition/mark-delivered"
    OPERATOR_MARK_DELIVERED = "transition/operator-mark-delivered"
    MARK_RECEIVED = "transition/mark-received"
    AUTO_MARK_RECEIVED = "transition/auto-mark-received"
    DISPUTE = "transition/dispute"
    OPERATOR_DISPUTE = "transition/operator-dispute"
    MARK_RECEIVED_FROM_DISPUTED = "transition/mark-received-from-disputed"
    CANCEL = "transition/cancel"
    AUTO_CANCEL = "transition/auto-cancel"
    CANCEL_FROM_DISPUTED = "transition/cancel-from-disputed"
    AUTO_CANCEL_FROM_DISPUTED = "transition/auto-cancel-from-disputed"
    AUTO_COMPLETE = "transition/auto-complete"
    REVIEW_1_BY_PROVIDER = "transition/review-1-by-provider"
    REVIEW_1_BY_CUSTOMER = "transition/review-1-by-customer"
    REVIEW_2_BY_PROVIDER = "transition/review-2-by-provider"
    REVIEW_2_BY_CUSTOMER = "transition/review-2-by-customer"
    EXPIRE_REVIEW_PERIOD = "transition/expire-review-period"
    EXPIRE_PROVIDER_REVIEW_PERIOD = "transition/expire-provider-review-period"
    EXPIRE_CUSTOMER_REVIEW_PERIOD = "transition/expire-customer-review-period"


class States:
    INITIAL = "initial"
    INQUIRY = "inquiry"
    PENDING_PAYMENT = "pending-payment"
    PAYMENT_EXPIRED = "payment-expired"
    PURCHASED = "purchased"
    DELIVERED = "delivered"
    RECEIVED = "received"
    DISPUTED = "disputed"
    CANCELED = "canceled"
    COMPLETED = "completed"
    REVIEWED_BY_PROVIDER = "reviewed-by-provider"
    REVIEWED_BY_CUSTOMER = "reviewed-by-customer"
    REVIEWED = "reviewed"


T = Transitions
S = States
_C = TransitionActor.CUSTOMER
_P = TransitionActor.PROVIDER
_O = TransitionActor.OPERATOR
_SYS = TransitionActor.SYSTEM

ACTORS: dict[str, TransitionActor] = {
    T.INQUIRE: _C,
    T.REQUEST_PAYMENT: _C,
    T.REQUEST_PAYMENT_AFTER_INQUIRY: _C,
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
    T.REVIEW_1_BY_PROVIDER: _P,
    T.REVIEW_1_BY_CUSTOMER: _C,
    T.REVIEW_2_BY_PROVIDER: _P,
    T.REVIEW_2_BY_CUSTOMER: _C,
    T.EXPIRE_REVIEW_PERIOD: _SYS,
    T.EXPIRE_PROVIDER_REVIEW_PERIOD: _SYS,
    T.EXPIRE_CUSTOMER_REVIEW_PERIOD: _SYS,
}

PRIVILEGED_TRANSITIONS = frozenset({T.REQUEST_PAYMENT, T.REQUEST_PAYMENT_AFTER_INQUIRY})

REFUND_TRANSITIONS = frozenset({
    T.EXPIRE_PAYMENT,
    T.CANCEL,
    T.AUTO_CANCEL,
    T.CANCEL_FROM_DISPUTED,
    T.AUTO_CANCEL_FROM_DISPUTED,
})

STATES_NEEDING_PROVIDER_ATTENTION = frozenset({S.PURCHASED})
STATES_NEEDING_CUSTOMER_ATTENTION = frozenset({S.DELIVERED})

GRAPH = ProcessGraph(
    id="default-purchase/release-1",
    name=ProcessName.DEFAULT_PURCHASE,
    initial_state=S.INITIAL,
    states={
        S.INITIAL: StateNode({
            T.INQUIRE: S.INQUIRY,
            T.REQUEST_PAYMENT: S.PENDING_PAYMENT,
        }),
        S.INQUIRY: StateNode({T.REQUEST_PAYMENT_AFTER_INQUIRY: S.PENDING_PAYMENT}),
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
        S.COMPLETED: StateNode({
            T.REVIEW_1_BY_PROVIDER: S.REVIEWED_BY_PROVIDER,
            T.REVIEW_1_BY_CUSTOMER: S.REVIEWED_BY_CUSTOMER,
            T.EXPIRE_REVIEW_PERIOD: S.REVIEWED,
        }),
        S.REVIEWED_BY_PROVIDER: StateNode({
            T.REVIEW_2_BY_CUSTOMER: S.REVIEWED,
            T.EXPIRE_CUSTOMER_REVIEW_PERIOD: S.REVIEWED,
        }),
        S.REVIEWED_BY_CUSTOMER: StateNode({
            T.REVIEW_2_BY_PROVIDER: S.REVIEWED,
            T.EXPIRE_PROVIDER_REVIEW_PERIOD: S.REVIEWED,
        }),
        S.PAYMENT_EXPIRED: StateNode(terminal=True),
        S.CANCELED: StateNode(terminal=True),
        S.REVIEWED: StateNode(terminal=True),
    },
    actors=ACTORS,
    privileged=PRIVILEGED_TRANSITIONS,
    refund_transitions=REFUND_TRANSITIONS,
)

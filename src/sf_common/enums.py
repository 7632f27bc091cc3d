"""Global enums — values are wire strings shared with the hosted marketplace."""

from enum import Enum

from src.sf_common.errors import InvalidActorError


class TransactionRole(str, Enum):
    CUSTOMER = "customer"
    PROVIDER = "provider"


class TransitionActor(str, Enum):
    """Who may invoke a transition. Operator/system transitions are never user-invoked."""
    CUSTOMER = "customer"
    PROVIDER = "provider"
    OPERATOR = "operator"
    SYSTEM = "system"


class DeliveryMethod(str, Enum):
    SHIPPING = "shipping"
    PICKUP = "pickup"
    NONE = "none"


class ProcessName(str, Enum):
    DEFAULT_PURCHASE = "default-purchase"
    NEGOTIATED_PURCHASE = "negotiated-purchase"


class ActionIntent(str, Enum):
    """What the front end should do when an action button is pressed."""
    TRANSITION = "TRANSITION"
    OPEN_COUNTER_OFFER_FORM = "OPEN_COUNTER_OFFER_FORM"
    CHECKOUT_REDIRECT = "CHECKOUT_REDIRECT"
    OPEN_REVIEW_FORM = "OPEN_REVIEW_FORM"


def parse_role(value: object) -> TransactionRole:
    """Strict role parsing: unknown values are an error, never a default."""
    if isinstance(value, TransactionRole):
        return value
    try:
        return TransactionRole(value)
    except ValueError:
        raise InvalidActorError(value) from None

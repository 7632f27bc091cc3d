"""Inbox row flags per (process state, role); same first-match rule shape as ui_state."""

from dataclasses import dataclass, replace

from src.sf_common.enums import ProcessName, TransactionRole
from src.sf_transaction.domain import default_purchase, negotiated_purchase
from src.sf_transaction.domain.process import ProcessGraph, normalize_state

CUSTOMER = TransactionRole.CUSTOMER
PROVIDER = TransactionRole.PROVIDER


@dataclass(frozen=True)
class InboxStateData:
    process_name: str
    process_state: str
    action_needed: bool = False
    is_sale_notification: bool = False
    is_final: bool = False


# (state, role or None for any, flags)
InboxRule = tuple[str, TransactionRole | None, dict[str, bool]]

_NEEDED = {"action_needed": True}
_SALE = {"action_needed": True, "is_sale_notification": True}
_FINAL = {"is_final": True}
_PLAIN: dict[str, bool] = {}

NS = negotiated_purchase.States
DS = default_purchase.States

NEGOTIATED_PURCHASE_INBOX: list[InboxRule] = [
    (NS.OFFER_PENDING, PROVIDER, _SALE),
    (NS.OFFER_PENDING, CUSTOMER, _PLAIN),
    (NS.COUNTER_PENDING, CUSTOMER, _NEEDED),
    (NS.COUNTER_PENDING, PROVIDER, _PLAIN),
    (NS.DECLINED, None, _FINAL),
    (NS.ACCEPTED, CUSTOMER, _NEEDED),
    (NS.ACCEPTED, PROVIDER, _PLAIN),
    (NS.PENDING_PAYMENT, CUSTOMER, _NEEDED),
    (NS.PENDING_PAYMENT, PROVIDER, _PLAIN),
    (NS.PAYMENT_EXPIRED, None, _FINAL),
    (NS.CANCELED, None, _FINAL),
    (NS.PURCHASED, PROVIDER, _SALE),
    (NS.PURCHASED, CUSTOMER, _PLAIN),
    (NS.DELIVERED, CUSTOMER, _NEEDED),
    (NS.DELIVERED, PROVIDER, _PLAIN),
    (NS.DISPUTED, None, _NEEDED),
    (NS.RECEIVED, None, _PLAIN),
    (NS.COMPLETED, None, _FINAL),
]

DEFAULT_PURCHASE_INBOX: list[InboxRule] = [
    (DS.INQUIRY, PROVIDER, _NEEDED),
    (DS.PENDING_PAYMENT, CUSTOMER, _NEEDED),
    (DS.PAYMENT_EXPIRED, None, _FINAL),
    (DS.CANCELED, None, _FINAL),
    (DS.PURCHASED, PROVIDER, _SALE),
    (DS.DELIVERED, CUSTOMER, _NEEDED),
    (DS.DISPUTED, None, _NEEDED),
    (DS.COMPLETED, None, _NEEDED),
    (DS.REVIEWED_BY_PROVIDER, CUSTOMER, _NEEDED),
    (DS.REVIEWED_BY_CUSTOMER, PROVIDER, _NEEDED),
    (DS.REVIEWED, None, _FINAL),
]

INBOX_RULES: dict[ProcessName, list[InboxRule]] = {
    ProcessName.NEGOTIATED_PURCHASE: NEGOTIATED_PURCHASE_INBOX,
    ProcessName.DEFAULT_PURCHASE: DEFAULT_PURCHASE_INBOX,
}


def resolve_inbox_state(
    process: ProcessGraph, state: str, role: TransactionRole
) -> InboxStateData:
    current = normalize_state(state)
    data = InboxStateData(process_name=process.name.value, process_state=current)
    for rule_state, rule_role, flags in INBOX_RULES[process.name]:
        if rule_state == current and (rule_role is None or rule_role == role):
            return replace(data, **flags)
    return data

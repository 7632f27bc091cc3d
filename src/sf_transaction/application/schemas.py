"""Pydantic schemas for UI-state queries."""

from enum import Enum

from src.sf_common.enums import ActionIntent
from src.sf_common.schemas import CamelModel
from src.sf_transaction.domain.inbox_state import InboxStateData
from src.sf_transaction.domain.ui_state import ActionDirective, TransactionStateData


class StateView(str, Enum):
    TRANSACTION = "transaction"
    INBOX = "inbox"


class TransactionStateRequest(CamelModel):
    process_name: str
    state: str | None = None
    last_transition: str | None = None  # used when state is not given
    role: str
    view: StateView = StateView.TRANSACTION
    current_stock: int | None = None  # unknown stock is not treated as sold


class ActionOut(CamelModel):
    transition: str
    role: str
    intent: ActionIntent

    @classmethod
    def from_domain(cls, action: ActionDirective | None) -> "ActionOut | None":
        if action is None:
            return None
        return cls(transition=action.transition, role=action.role.value, intent=action.intent)


class TransactionStateOut(CamelModel):
    process_name: str
    process_state: str
    action_needed: bool
    is_final: bool
    is_sale_notification: bool
    show_detail_card_headings: bool
    show_extra_info: bool
    show_action_buttons: bool
    show_item_sold_message: bool
    show_review_as_first_link: bool
    primary_action: ActionOut | None = None
    secondary_action: ActionOut | None = None
    tertiary_action: ActionOut | None = None
    next_transitions: list[str]

    @classmethod
    def from_domain(
        cls, data: TransactionStateData, next_transitions: list[str]
    ) -> "TransactionStateOut":
        return cls(
            process_name=data.process_name,
            process_state=data.process_state,
            action_needed=data.action_needed,
            is_final=data.is_final,
            is_sale_notification=data.is_sale_notification,
            show_detail_card_headings=data.show_detail_card_headings,
            show_extra_info=data.show_extra_info,
            show_action_buttons=data.show_action_buttons,
            show_item_sold_message=data.show_item_sold_message,
            show_review_as_first_link=data.show_review_as_first_link,
            primary_action=ActionOut.from_domain(data.primary_action),
            secondary_action=ActionOut.from_domain(data.secondary_action),
            tertiary_action=ActionOut.from_domain(data.tertiary_action),
            next_transitions=next_transitions,
        )


class InboxStateOut(CamelModel):
    process_name: str
    process_state: str
    action_needed: bool
    is_sale_notification: bool
    is_final: bool

    @classmethod
    def from_domain(cls, data: InboxStateData) -> "InboxStateOut":
        return cls(
            process_name=data.process_name,
            process_state=data.process_state,
            action_needed=data.action_needed,
            is_sale_notification=data.is_sale_notification,
            is_final=data.is_final,
        )

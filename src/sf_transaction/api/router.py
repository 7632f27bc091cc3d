"""sf_transaction REST API.

POST /transaction-state  — UI directives for (process, state, role); view=transaction|inbox
"""

from fastapi import APIRouter, Request

from src.sf_common.enums import parse_role
from src.sf_common.errors import UnknownStateError
from src.sf_common.response import ApiResponse, success_response
from src.sf_transaction.application.schemas import (
    InboxStateOut,
    StateView,
    TransactionStateOut,
    TransactionStateRequest,
)
from src.sf_transaction.domain.inbox_state import resolve_inbox_state
from src.sf_transaction.domain.processes import get_process
from src.sf_transaction.domain.ui_state import resolve_transaction_state

router = APIRouter(tags=["transactions"])


@router.post("/transaction-state")
async def transaction_state(body: TransactionStateRequest, request: Request) -> ApiResponse:
    process = get_process(body.process_name)
    role = parse_role(body.role)
    state = body.state or process.state_after(body.last_transition)
    if not process.has_state(state):
        raise UnknownStateError(process.id, state)

    if body.view == StateView.INBOX:
        data = InboxStateOut.from_domain(resolve_inbox_state(process, state, role))
    else:
        is_item_sold = body.current_stock is not None and body.current_stock <= 0
        directives = resolve_transaction_state(process, state, role, is_item_sold=is_item_sold)
        data = TransactionStateOut.from_domain(directives, process.next_transitions(state))

    return success_response(data.model_dump(by_alias=True), request)

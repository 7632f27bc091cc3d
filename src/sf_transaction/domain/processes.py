"""Process registry: process name -> graph."""

from src.sf_common.enums import ProcessName
from src.sf_common.errors import UnknownProcessError
from src.sf_transaction.domain import default_purchase, negotiated_purchase
from src.sf_transaction.domain.process import ProcessGraph

PROCESSES: dict[ProcessName, ProcessGraph] = {
    ProcessName.DEFAULT_PURCHASE: default_purchase.GRAPH,
    ProcessName.NEGOTIATED_PURCHASE: negotiated_purchase.GRAPH,
}


def get_process(name: str | ProcessName) -> ProcessGraph:
    """Accepts 'negotiated-purchase' or a versioned alias like 'negotiated-purchase/release-1'."""
    raw = name.value if isinstance(name, ProcessName) else name.split("/", 1)[0]
    try:
        return PROCESSES[ProcessName(raw)]
    except ValueError:
        raise UnknownProcessError(str(name)) from None

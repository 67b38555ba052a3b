import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from budget_planner.app.database import serialized
from budget_planner.app.exceptions import InvalidArguments, LedgerError, UnknownOperation
from budget_planner.app.schemas.ledger import BatchCall, CallReceipt
from budget_planner.app.services import alert_service, budget_service

logger = logging.getLogger(__name__)

# operation name -> (handler, positional arity, takes sender, result mapper)
OPERATIONS: Dict[str, Tuple[Callable[..., Any], int, bool, Callable[[Any], Any]]] = {
    "initialize-budget": (budget_service.initialize_budget, 2, True, lambda _: True),
    "add-category-allocation": (budget_service.add_category_allocation, 3, True, lambda _: True),
    "record-spending": (budget_service.record_spending, 3, True, lambda _: True),
    "add-budget-alert": (alert_service.add_budget_alert, 3, True, lambda alert: alert.id),
    "check-budget": (budget_service.check_budget, 1, False, lambda over: over),
}

def apply_call(db: Session, call: BatchCall, sender: Optional[str] = None) -> Any:
    """Apply a single call and return its success value, raising LedgerError on rejection"""
    if call.operation not in OPERATIONS:
        raise UnknownOperation(f"Unknown operation {call.operation!r}")

    handler, arity, takes_sender, to_value = OPERATIONS[call.operation]
    if len(call.args) != arity:
        raise InvalidArguments(f"{call.operation} takes {arity} arguments, got {len(call.args)}")

    if takes_sender:
        result = handler(db, *call.args, sender=sender)
    else:
        result = handler(db, *call.args)
    return to_value(result)

@serialized
def apply_batch(db: Session, calls: List[BatchCall], sender: Optional[str] = None) -> List[CallReceipt]:
    """
    Apply calls strictly in the given order and return one receipt per call.

    A rejected call is rolled back on its own; later calls still run. The
    ledger lock is held for the whole batch so no other request interleaves.
    """
    receipts = []
    for index, call in enumerate(calls):
        try:
            value = apply_call(db, call, sender=sender)
        except LedgerError as e:
            db.rollback()
            logger.warning("Call %s (%s) rejected: %s", index, call.operation, e.detail)
            receipts.append(CallReceipt(index=index, operation=call.operation, ok=False, error=e.code))
            continue
        receipts.append(CallReceipt(index=index, operation=call.operation, ok=True, value=value))

    logger.info("Applied batch of %s calls, %s accepted", len(calls), sum(1 for r in receipts if r.ok))
    return receipts

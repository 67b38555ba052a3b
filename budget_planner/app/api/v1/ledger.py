from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from budget_planner.app.schemas.ledger import BatchRequest, BatchReceipt, LedgerEventResponse
from budget_planner.app.services.batch_service import apply_batch
from budget_planner.app.services.ledger_service import get_budget_ledger_events
from budget_planner.app.database import get_db_session

router = APIRouter()

@router.post("/batch", response_model=BatchReceipt)
def submit_batch(
    batch: BatchRequest,
    db: Session = Depends(get_db_session)
):
    """
    Apply a batch of ledger calls in submission order.

    - Each call is accepted or rejected on its own
    - A rejected call changes nothing and does not stop the batch
    - Returns one tagged receipt per call
    """
    receipts = apply_batch(db, batch.calls, sender=batch.sender)
    return {
        "sender": batch.sender,
        "receipts": receipts,
        "results": [receipt.render() for receipt in receipts]
    }

@router.get("/events", response_model=List[LedgerEventResponse])
def get_ledger_events(
    budget_id: int = Query(..., description="Budget to list events for"),
    limit: int = Query(100, le=500, description="Maximum number of events to return"),
    offset: int = Query(0, ge=0, description="Number of events to skip"),
    db: Session = Depends(get_db_session)
):
    """
    Audit trail of accepted operations on a budget, newest first
    """
    return get_budget_ledger_events(db, budget_id, limit, offset)

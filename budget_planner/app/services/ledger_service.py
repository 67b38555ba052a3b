import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any

from budget_planner.app.database import serialized
from budget_planner.app.exceptions import StorageError
from budget_planner.app.models.models import LedgerEvent, LedgerEventType
from budget_planner.app.services.validation import require_budget, require_budget_id

logger = logging.getLogger(__name__)

def record_ledger_event(
    db: Session,
    event_type: LedgerEventType,
    budget_id: int,
    amount: Optional[int] = None,
    sender: Optional[str] = None,
    event_metadata: Optional[Dict[str, Any]] = None
) -> LedgerEvent:
    """
    Stage an audit event for an accepted operation.

    The event is added to the session but not committed; the calling
    operation commits it together with its own changes.
    """
    event = LedgerEvent(
        event_type=event_type,
        budget_id=budget_id,
        amount=amount,
        sender=sender,
        event_metadata=event_metadata
    )
    db.add(event)
    return event

def commit_operation(db: Session) -> None:
    """Commit an operation, or roll it back entirely and raise StorageError"""
    try:
        db.commit()
    except (SQLAlchemyError, OverflowError) as e:
        db.rollback()
        logger.error("Ledger commit failed, operation rolled back: %s", e)
        raise StorageError("Ledger operation could not be stored") from e

@serialized
def get_budget_ledger_events(db: Session, budget_id: int, limit: int = 100, offset: int = 0) -> List[LedgerEvent]:
    """Get ledger events for a budget, newest first"""
    require_budget(db, require_budget_id(budget_id))

    return db.query(LedgerEvent).filter(LedgerEvent.budget_id == budget_id)\
        .order_by(LedgerEvent.id.desc())\
        .offset(offset).limit(limit).all()

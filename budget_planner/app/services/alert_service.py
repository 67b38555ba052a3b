import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from budget_planner.app.config import get_settings
from budget_planner.app.exceptions import AlertNotFound, InvalidThreshold
from budget_planner.app.models.models import BudgetAlert, LedgerState, LedgerEventType
from budget_planner.app.database import serialized
from budget_planner.app.services.ledger_service import commit_operation, record_ledger_event
from budget_planner.app.services.validation import (
    require_budget, require_budget_id, require_category_name, require_threshold
)

logger = logging.getLogger(__name__)

LEDGER_STATE_ID = 1

def get_ledger_state(db: Session) -> LedgerState:
    """Return the ledger-wide state row, creating it with a zero counter"""
    state = db.get(LedgerState, LEDGER_STATE_ID)
    if state is None:
        state = LedgerState(id=LEDGER_STATE_ID, alert_nonce=0)
        db.add(state)
    return state

@serialized
def add_budget_alert(
    db: Session,
    budget_id: int,
    category_name: str,
    threshold_percent: int,
    sender: Optional[str] = None
) -> BudgetAlert:
    """
    Store a threshold alert for a budget category.

    The alert gets the next id from the ledger-wide counter, starting at 1.
    Alerts are declarative: nothing here compares them to spending.
    """
    require_budget_id(budget_id)
    require_category_name(category_name)
    require_budget(db, budget_id)
    try:
        require_threshold(threshold_percent)
    except InvalidThreshold:
        logger.warning("Rejected alert for budget %s: threshold %r out of range", budget_id, threshold_percent)
        raise

    state = get_ledger_state(db)
    state.alert_nonce += 1

    alert = BudgetAlert(
        id=state.alert_nonce,
        budget_id=budget_id,
        category_name=category_name,
        threshold_percent=threshold_percent,
        created_by=sender
    )
    db.add(alert)
    record_ledger_event(
        db,
        LedgerEventType.ALERT_CREATED,
        budget_id,
        sender=sender,
        event_metadata={
            "action": "alert_created",
            "alert_id": alert.id,
            "category_name": category_name,
            "threshold_percent": threshold_percent
        }
    )
    commit_operation(db)
    db.refresh(alert)

    logger.info("Created alert %s on %r for budget %s at %s%%", alert.id, category_name, budget_id, threshold_percent)
    return alert

@serialized
def get_budget_alert(db: Session, alert_id: int) -> BudgetAlert:
    alert = None
    if isinstance(alert_id, int) and 0 <= alert_id <= get_settings().max_amount:
        alert = db.get(BudgetAlert, alert_id)
    if not alert:
        raise AlertNotFound(f"Alert with id {alert_id} not found")
    return alert

@serialized
def list_budget_alerts(db: Session, budget_id: int) -> List[BudgetAlert]:
    """Alerts of a budget in creation order"""
    return require_budget(db, require_budget_id(budget_id)).alerts

import logging
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from budget_planner.app.exceptions import AlreadyExists, AllocationNotFound
from budget_planner.app.models.models import Budget, CategoryAllocation, CategorySpending, LedgerEventType
from budget_planner.app.database import serialized
from budget_planner.app.services.ledger_service import commit_operation, record_ledger_event
from budget_planner.app.services.validation import (
    require_amount, require_budget, require_budget_id, require_category_name,
    require_total_within_limit
)

logger = logging.getLogger(__name__)

@serialized
def initialize_budget(db: Session, budget_id: int, total_amount: int, sender: Optional[str] = None) -> Budget:
    """Create a budget with the given total and nothing spent"""
    require_budget_id(budget_id)
    require_amount(total_amount, "total_amount")

    if db.get(Budget, budget_id) is not None:
        logger.warning("Rejected initialize_budget: budget %s already exists", budget_id)
        raise AlreadyExists(f"Budget with id {budget_id} already exists")

    budget = Budget(id=budget_id, total=total_amount, spent_total=0, created_by=sender)
    db.add(budget)
    record_ledger_event(
        db,
        LedgerEventType.BUDGET_INITIALIZED,
        budget_id,
        amount=total_amount,
        sender=sender,
        event_metadata={"action": "budget_initialized"}
    )
    commit_operation(db)
    db.refresh(budget)

    logger.info("Initialized budget %s with total %s", budget_id, total_amount)
    return budget

@serialized
def add_category_allocation(
    db: Session,
    budget_id: int,
    category_name: str,
    allocated_amount: int,
    sender: Optional[str] = None
) -> CategoryAllocation:
    """Insert or overwrite the allocation for a category of a budget"""
    require_budget_id(budget_id)
    require_category_name(category_name)
    require_amount(allocated_amount, "allocated_amount")
    require_budget(db, budget_id)

    allocation = db.query(CategoryAllocation).filter(
        CategoryAllocation.budget_id == budget_id,
        CategoryAllocation.category_name == category_name
    ).first()

    previous_amount = None
    if allocation:
        # Same category name re-defines the allocation
        previous_amount = allocation.allocated_amount
        allocation.allocated_amount = allocated_amount
    else:
        allocation = CategoryAllocation(
            budget_id=budget_id,
            category_name=category_name,
            allocated_amount=allocated_amount
        )
        db.add(allocation)

    record_ledger_event(
        db,
        LedgerEventType.ALLOCATION_SET,
        budget_id,
        amount=allocated_amount,
        sender=sender,
        event_metadata={
            "action": "allocation_set",
            "category_name": category_name,
            "previous_amount": previous_amount
        }
    )
    commit_operation(db)
    db.refresh(allocation)

    logger.info("Set allocation %r on budget %s to %s", category_name, budget_id, allocated_amount)
    return allocation

@serialized
def record_spending(
    db: Session,
    budget_id: int,
    category_name: str,
    amount: int,
    sender: Optional[str] = None
) -> CategorySpending:
    """
    Add an amount to a category's spending accumulator and to the budget's
    spent_total.

    Both counters change in one commit. The category does not need an
    allocation; its accumulator is created on first spend.
    """
    require_budget_id(budget_id)
    require_category_name(category_name)
    require_amount(amount)
    budget = require_budget(db, budget_id)
    # A category never holds more than spent_total, so one bound covers both
    new_spent_total = require_total_within_limit(budget.spent_total, amount)

    spending = db.query(CategorySpending).filter(
        CategorySpending.budget_id == budget_id,
        CategorySpending.category_name == category_name
    ).first()
    if not spending:
        spending = CategorySpending(budget_id=budget_id, category_name=category_name, spent_amount=0)
        db.add(spending)

    spending.spent_amount += amount
    budget.spent_total = new_spent_total

    record_ledger_event(
        db,
        LedgerEventType.SPENDING_RECORDED,
        budget_id,
        amount=amount,
        sender=sender,
        event_metadata={
            "action": "spending_recorded",
            "category_name": category_name,
            "category_spent": spending.spent_amount,
            "spent_total": budget.spent_total
        }
    )
    commit_operation(db)
    db.refresh(spending)

    logger.info("Recorded spending of %s on %r for budget %s", amount, category_name, budget_id)
    return spending

@serialized
def check_budget(db: Session, budget_id: int) -> bool:
    """True only when spending strictly exceeds the budget total"""
    budget = require_budget(db, require_budget_id(budget_id))
    return budget.spent_total > budget.total

# --- Read-only queries ---

@serialized
def get_budget(db: Session, budget_id: int) -> Budget:
    return require_budget(db, require_budget_id(budget_id))

@serialized
def get_category_allocation(db: Session, budget_id: int, category_name: str) -> CategoryAllocation:
    require_budget(db, require_budget_id(budget_id))
    allocation = db.query(CategoryAllocation).filter(
        CategoryAllocation.budget_id == budget_id,
        CategoryAllocation.category_name == category_name
    ).first()
    if not allocation:
        raise AllocationNotFound(f"No allocation for category {category_name!r} in budget {budget_id}")
    return allocation

@serialized
def list_category_allocations(db: Session, budget_id: int) -> List[CategoryAllocation]:
    return require_budget(db, require_budget_id(budget_id)).allocations

@serialized
def get_category_spending(db: Session, budget_id: int, category_name: str) -> int:
    """Amount spent on a category, 0 when nothing was recorded"""
    require_budget(db, require_budget_id(budget_id))
    spending = db.query(CategorySpending).filter(
        CategorySpending.budget_id == budget_id,
        CategorySpending.category_name == category_name
    ).first()
    return spending.spent_amount if spending else 0

@serialized
def list_category_spending(db: Session, budget_id: int) -> List[CategorySpending]:
    return require_budget(db, require_budget_id(budget_id)).spending

@serialized
def get_budget_summary(db: Session, budget_id: int) -> Dict[str, Any]:
    """
    Allocated vs spent for every category of a budget.

    Categories appear if they have an allocation, spending, or both.
    Alerts are not evaluated here.
    """
    budget = require_budget(db, require_budget_id(budget_id))

    allocated = {a.category_name: a.allocated_amount for a in budget.allocations}
    spent = {s.category_name: s.spent_amount for s in budget.spending}

    categories = []
    for name in sorted(set(allocated) | set(spent)):
        allocated_amount = allocated.get(name)
        spent_amount = spent.get(name, 0)
        percent_used = None
        if allocated_amount:
            percent_used = (spent_amount / allocated_amount) * 100
        categories.append({
            "category_name": name,
            "allocated_amount": allocated_amount,
            "spent_amount": spent_amount,
            "percent_used": percent_used
        })

    return {
        "budget_id": budget.id,
        "total": budget.total,
        "spent_total": budget.spent_total,
        "remaining": budget.remaining,
        "allocated_total": sum(allocated.values()),
        "percent_used": (budget.spent_total / budget.total) * 100 if budget.total > 0 else 0,
        "over_budget": budget.spent_total > budget.total,
        "categories": categories
    }

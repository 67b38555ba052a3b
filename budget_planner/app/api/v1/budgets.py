from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from budget_planner.app.database import get_db_session
from budget_planner.app.schemas.budgets import (
    BudgetCreate, BudgetInDB, BudgetStatus, BudgetSummary,
    AllocationSet, AllocationInDB, SpendingCreate, SpendingInDB
)
from budget_planner.app.schemas.alerts import AlertCreate, AlertInDB
from budget_planner.app.services.budget_service import (
    initialize_budget, add_category_allocation, record_spending, check_budget,
    get_budget, get_category_allocation, list_category_allocations,
    list_category_spending, get_budget_summary
)
from budget_planner.app.services.alert_service import add_budget_alert, list_budget_alerts

router = APIRouter()

@router.post("/", response_model=BudgetInDB, status_code=status.HTTP_201_CREATED)
def initialize_budget_endpoint(
    budget_data: BudgetCreate,
    db: Session = Depends(get_db_session)
):
    """
    Initialize a budget under a caller supplied id
    """
    return initialize_budget(db, budget_data.budget_id, budget_data.total_amount, sender=budget_data.sender)

@router.get("/{budget_id}", response_model=BudgetInDB)
def get_budget_endpoint(budget_id: int, db: Session = Depends(get_db_session)):
    return get_budget(db, budget_id)

@router.get("/{budget_id}/status", response_model=BudgetStatus)
def check_budget_endpoint(budget_id: int, db: Session = Depends(get_db_session)):
    """
    Whether cumulative spending strictly exceeds the budget total
    """
    return {"budget_id": budget_id, "over_budget": check_budget(db, budget_id)}

@router.get("/{budget_id}/summary", response_model=BudgetSummary)
def get_budget_summary_endpoint(budget_id: int, db: Session = Depends(get_db_session)):
    """
    Allocated vs spent per category
    """
    return get_budget_summary(db, budget_id)

@router.put("/{budget_id}/allocations/{category_name}", response_model=AllocationInDB)
def set_allocation_endpoint(
    budget_id: int,
    category_name: str,
    allocation: AllocationSet,
    db: Session = Depends(get_db_session)
):
    """
    Create or overwrite the allocation for a category
    """
    return add_category_allocation(db, budget_id, category_name, allocation.allocated_amount, sender=allocation.sender)

@router.get("/{budget_id}/allocations", response_model=List[AllocationInDB])
def list_allocations_endpoint(budget_id: int, db: Session = Depends(get_db_session)):
    return list_category_allocations(db, budget_id)

@router.get("/{budget_id}/allocations/{category_name}", response_model=AllocationInDB)
def get_allocation_endpoint(budget_id: int, category_name: str, db: Session = Depends(get_db_session)):
    return get_category_allocation(db, budget_id, category_name)

@router.post("/{budget_id}/spending", response_model=SpendingInDB)
def record_spending_endpoint(
    budget_id: int,
    spending: SpendingCreate,
    db: Session = Depends(get_db_session)
):
    """
    Add spending to a category. No allocation is required.
    """
    return record_spending(db, budget_id, spending.category_name, spending.amount, sender=spending.sender)

@router.get("/{budget_id}/spending", response_model=List[SpendingInDB])
def list_spending_endpoint(budget_id: int, db: Session = Depends(get_db_session)):
    return list_category_spending(db, budget_id)

@router.post("/{budget_id}/alerts", response_model=AlertInDB, status_code=status.HTTP_201_CREATED)
def add_alert_endpoint(
    budget_id: int,
    alert: AlertCreate,
    db: Session = Depends(get_db_session)
):
    """
    Store a threshold alert. The response id is the ledger-wide alert id.
    """
    return add_budget_alert(db, budget_id, alert.category_name, alert.threshold_percent, sender=alert.sender)

@router.get("/{budget_id}/alerts", response_model=List[AlertInDB])
def list_alerts_endpoint(budget_id: int, db: Session = Depends(get_db_session)):
    return list_budget_alerts(db, budget_id)

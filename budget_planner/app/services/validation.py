from typing import Any

from sqlalchemy.orm import Session

from budget_planner.app.config import get_settings
from budget_planner.app.exceptions import (
    BudgetNotFound, InvalidAmount, InvalidArguments, InvalidCategoryName, InvalidThreshold
)
from budget_planner.app.models.models import Budget

def _is_uint(value: Any) -> bool:
    # bool is an int subclass but never a valid amount
    return (
        isinstance(value, int) and not isinstance(value, bool)
        and 0 <= value <= get_settings().max_amount
    )

def require_budget_id(budget_id: Any) -> int:
    if not _is_uint(budget_id):
        raise InvalidArguments(f"budget_id must be an integer between 0 and {get_settings().max_amount}, got {budget_id!r}")
    return budget_id

def require_amount(value: Any, field: str = "amount") -> int:
    if not _is_uint(value):
        raise InvalidAmount(f"{field} must be an integer between 0 and {get_settings().max_amount}, got {value!r}")
    return value

def require_category_name(category_name: Any) -> str:
    """Category names are printable ASCII, non-empty and length bounded"""
    max_length = get_settings().category_name_max_length
    if not isinstance(category_name, str) or not category_name:
        raise InvalidCategoryName("category_name must be a non-empty string")
    if len(category_name) > max_length:
        raise InvalidCategoryName(f"category_name must be at most {max_length} characters")
    if not all(32 <= ord(ch) < 127 for ch in category_name):
        raise InvalidCategoryName("category_name must be printable ASCII")
    return category_name

def require_threshold(threshold_percent: Any) -> int:
    max_threshold = get_settings().max_threshold_percent
    if not _is_uint(threshold_percent) or threshold_percent > max_threshold:
        raise InvalidThreshold(f"threshold_percent must be between 0 and {max_threshold}, got {threshold_percent!r}")
    return threshold_percent

def require_budget(db: Session, budget_id: int) -> Budget:
    """Return the active budget or fail with BudgetNotFound"""
    budget = db.get(Budget, budget_id)
    if budget is None:
        raise BudgetNotFound(f"Budget with id {budget_id} not found")
    return budget

def require_total_within_limit(current: int, amount: int, field: str = "spent_total") -> int:
    """Return current + amount, failing with InvalidAmount past the storable maximum"""
    new_total = current + amount
    if new_total > get_settings().max_amount:
        raise InvalidAmount(f"{field} would exceed {get_settings().max_amount}")
    return new_total

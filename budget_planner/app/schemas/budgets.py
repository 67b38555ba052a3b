from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

class BudgetCreate(BaseModel):
    budget_id: int = Field(ge=0)
    total_amount: int = Field(ge=0)
    sender: Optional[str] = None  # Caller identity, recorded but not checked

class BudgetInDB(BaseModel):
    id: int
    total: int
    spent_total: int
    remaining: int
    created_by: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True

class BudgetStatus(BaseModel):
    budget_id: int
    over_budget: bool

class AllocationSet(BaseModel):
    allocated_amount: int = Field(ge=0)
    sender: Optional[str] = None

class AllocationInDB(BaseModel):
    budget_id: int
    category_name: str
    allocated_amount: int
    updated_at: datetime
    
    class Config:
        from_attributes = True

class SpendingCreate(BaseModel):
    category_name: str
    amount: int = Field(ge=0)
    sender: Optional[str] = None

class SpendingInDB(BaseModel):
    budget_id: int
    category_name: str
    spent_amount: int
    
    class Config:
        from_attributes = True

class CategorySummary(BaseModel):
    category_name: str
    allocated_amount: Optional[int] = None  # None when the category has no allocation
    spent_amount: int
    percent_used: Optional[float] = None

class BudgetSummary(BaseModel):
    budget_id: int
    total: int
    spent_total: int
    remaining: int
    allocated_total: int
    percent_used: float
    over_budget: bool
    categories: List[CategorySummary]

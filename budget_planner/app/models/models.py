from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, Enum as PgEnum, JSON, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# --- ENUMS ---

class LedgerEventType(str, Enum):
    BUDGET_INITIALIZED = "BUDGET_INITIALIZED"
    ALLOCATION_SET = "ALLOCATION_SET"
    SPENDING_RECORDED = "SPENDING_RECORDED"
    ALERT_CREATED = "ALERT_CREATED"

# --- SQLALCHEMY MODELS ---

class Budget(Base):
    __tablename__ = "budgets"

    # Caller supplied, never generated
    id = Column(Integer, primary_key=True, autoincrement=False)
    total = Column(Integer, nullable=False)
    spent_total = Column(Integer, nullable=False, default=0)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    allocations = relationship("CategoryAllocation", back_populates="budget", order_by="CategoryAllocation.category_name")
    spending = relationship("CategorySpending", back_populates="budget", order_by="CategorySpending.category_name")
    alerts = relationship("BudgetAlert", back_populates="budget", order_by="BudgetAlert.id")

    @property
    def remaining(self) -> int:
        return self.total - self.spent_total

class CategoryAllocation(Base):
    __tablename__ = "category_allocations"
    __table_args__ = (
        UniqueConstraint("budget_id", "category_name", name="uq_allocation_budget_category"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False)
    category_name = Column(String(32), nullable=False)
    allocated_amount = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    budget = relationship("Budget", back_populates="allocations")

class CategorySpending(Base):
    """Running total of spending recorded against one category of a budget"""
    __tablename__ = "category_spending"
    __table_args__ = (
        UniqueConstraint("budget_id", "category_name", name="uq_spending_budget_category"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False)
    category_name = Column(String(32), nullable=False)
    spent_amount = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    budget = relationship("Budget", back_populates="spending")

class BudgetAlert(Base):
    """Declarative spending threshold. Stored only, never evaluated."""
    __tablename__ = "budget_alerts"

    # Assigned from LedgerState.alert_nonce
    id = Column(Integer, primary_key=True, autoincrement=False)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False)
    category_name = Column(String(32), nullable=False)
    threshold_percent = Column(Integer, nullable=False)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    budget = relationship("Budget", back_populates="alerts")

class LedgerState(Base):
    """Ledger-wide counters, a single row"""
    __tablename__ = "ledger_state"

    id = Column(Integer, primary_key=True)
    alert_nonce = Column(Integer, nullable=False, default=0)

class LedgerEvent(Base):
    __tablename__ = "ledger_events"

    # Sequence number, reflects application order
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_type = Column(PgEnum(LedgerEventType), nullable=False)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False)
    amount = Column(Integer, nullable=True)
    sender = Column(String, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow)
    event_metadata = Column(JSON, nullable=True)

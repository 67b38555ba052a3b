from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List, Union
from datetime import datetime

from budget_planner.app.models.models import LedgerEventType

class LedgerEventResponse(BaseModel):
    id: int
    event_type: LedgerEventType
    budget_id: int
    amount: Optional[int] = None
    sender: Optional[str] = None
    timestamp: datetime
    event_metadata: Optional[Dict[str, Any]] = None
    
    class Config:
        from_attributes = True

class BatchCall(BaseModel):
    operation: str
    args: List[Any] = Field(default_factory=list)

class BatchRequest(BaseModel):
    sender: Optional[str] = None
    calls: List[BatchCall]

class CallReceipt(BaseModel):
    index: int
    operation: str
    ok: bool
    value: Optional[Union[bool, int]] = None
    error: Optional[str] = None

    def render(self) -> str:
        """Tagged form of the result, e.g. ``(ok true)``, ``(ok u1)``, ``(err BudgetNotFound)``"""
        if not self.ok:
            return f"(err {self.error})"
        if isinstance(self.value, bool):
            return "(ok true)" if self.value else "(ok false)"
        return f"(ok u{self.value})"

class BatchReceipt(BaseModel):
    sender: Optional[str] = None
    receipts: List[CallReceipt]
    results: List[str]

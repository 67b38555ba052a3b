from typing import Optional
from datetime import datetime
from pydantic import BaseModel

class AlertCreate(BaseModel):
    category_name: str
    threshold_percent: int  # Range checked by the service
    sender: Optional[str] = None

class AlertInDB(BaseModel):
    id: int
    budget_id: int
    category_name: str
    threshold_percent: int
    created_by: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budget_planner.app.database import get_db_session
from budget_planner.app.schemas.alerts import AlertInDB
from budget_planner.app.services.alert_service import get_budget_alert

router = APIRouter()

@router.get("/{alert_id}", response_model=AlertInDB)
def get_alert_endpoint(alert_id: int, db: Session = Depends(get_db_session)):
    return get_budget_alert(db, alert_id)

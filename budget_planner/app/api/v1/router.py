from fastapi import APIRouter
from budget_planner.app.api.v1 import budgets, alerts, ledger

api_router = APIRouter()
api_router.include_router(budgets.router, prefix="/budgets", tags=["budgets"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
api_router.include_router(ledger.router, prefix="/ledger", tags=["ledger"])

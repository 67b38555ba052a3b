import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from budget_planner.app.api.v1.router import api_router
from budget_planner.app.config import get_settings
from budget_planner.app.database import create_tables
from budget_planner.app.exceptions import LedgerError

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Budget ledger ready on %s", settings.database_url)
    yield
    logger.info("Shutting down budget ledger")

app = FastAPI(title="Budget Planner", lifespan=lifespan)

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code}
    )

# Include all API routes
app.include_router(api_router, prefix="/api/v1")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("budget_planner.app.main:app", host="0.0.0.0", port=8000, reload=True)

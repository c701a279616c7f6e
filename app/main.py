import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.database import create_db_and_tables
from app.api import budgets, dashboard, goals, profile, recurring, stats, transactions
from app.core.config import CORS_ORIGINS
from app.core.errors import LedgerError, StoreUnavailable
from app.core.logging import configure_logging
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    create_db_and_tables()
    yield

app = FastAPI(title="Divvy", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    if isinstance(exc, StoreUnavailable):
        logger.error("Store no disponible en %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )

app.include_router(profile.router)
app.include_router(transactions.router)
app.include_router(budgets.router)
app.include_router(goals.router)
app.include_router(recurring.router)
app.include_router(stats.router)
app.include_router(dashboard.router)

@app.get("/")
def root():
    return {"message": "Divvy: servidor del ledger personal"}

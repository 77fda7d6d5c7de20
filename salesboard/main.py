# salesboard/main.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fastapi.concurrency import run_in_threadpool

from . import queries
from .config import settings
from .database import build_engine, session_factory
from .months import normalize_month
from .schemas import CategoryCount, HealthReport, PriceRangeCount, Statistics, TransactionRecord
from .seeding import SeedStatus, reset_table, seed_database

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine(settings.DATABASE_URL)
    status = SeedStatus()
    app.state.engine = engine
    app.state.seed_status = status

    seed_task = None
    if settings.SEED_ON_STARTUP:
        # The table exists before the first request; only the fetch and load run
        # beside request handling, so early requests see an empty table
        try:
            reset_table(engine)
        except SQLAlchemyError:
            logger.exception("Could not recreate the transactions table")
        seed_task = asyncio.create_task(
            run_in_threadpool(
                seed_database, engine, settings.SEED_SOURCE, settings.SEED_TIMEOUT, status, reset=False
            )
        )
        if settings.WAIT_FOR_SEED:
            await seed_task
    else:
        logger.info("Startup seeding disabled")
        status.finish(0)

    yield

    if seed_task is not None and not seed_task.done():
        logger.info("Waiting for seeding to finish before shutdown")
        await seed_task
    engine.dispose()


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(queries.QueryError)
async def query_error_handler(request: Request, exc: queries.QueryError):
    logger.error("Query failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


# Dependency function for engine
def get_engine(request: Request) -> Engine:
    return request.app.state.engine

# Dependency function for database session
def get_db(engine: Engine = Depends(get_engine)):
    db = session_factory(engine)()
    try:
        yield db
    finally:
        db.close()

# Dependency function for the normalised month code
def get_month(month: Optional[str] = None) -> str:
    return normalize_month(month)


@app.get("/")
def read_root():
    return {"message": "Welcome to the Sales Transaction API"}

@app.get("/health", response_model=HealthReport)
def health(request: Request):
    """
    Reports whether the startup seed has finished and how many rows it loaded.
    """
    status: SeedStatus = request.app.state.seed_status
    return HealthReport(status="ok", **status.as_dict())

@app.get("/transactions", response_model=List[TransactionRecord])
def get_transactions(
    month: str = Depends(get_month),
    search: Optional[str] = None,
    page: int = Query(queries.DEFAULT_PAGE, ge=1),
    limit: int = Query(queries.DEFAULT_LIMIT, ge=1),
    db: Session = Depends(get_db),
):
    """
    Lists the transactions sold in a month.
    - **month**: Month number, 1-2 digits (defaults to 03)
    - **search**: Matches title, description or price
    - **page**: 1-based page number
    - **limit**: Page size
    """
    return queries.list_transactions(db, month, search=search, page=page, limit=limit)

@app.get("/statistics", response_model=Statistics)
def get_statistics(month: str = Depends(get_month), db: Session = Depends(get_db)):
    """
    Returns total sale amount and sold / not sold item counts for a month.
    """
    return queries.get_statistics(db, month)

@app.get("/bar-chart", response_model=List[PriceRangeCount])
async def get_bar_chart(month: str = Depends(get_month), engine: Engine = Depends(get_engine)):
    """
    Returns the number of items in each of ten fixed price ranges for a month.
    """
    return await queries.price_histogram(engine, month)

@app.get("/pie-chart", response_model=List[CategoryCount])
def get_pie_chart(month: str = Depends(get_month), db: Session = Depends(get_db)):
    """
    Returns the number of items per category for a month.
    """
    return queries.category_breakdown(db, month)


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()

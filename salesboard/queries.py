# salesboard/queries.py
import asyncio
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fastapi.concurrency import run_in_threadpool

from .models import Transaction
from .schemas import CategoryCount, PriceRangeCount, Statistics, TransactionRecord

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class QueryError(Exception):
    """Raised when the store fails while answering a read query."""


@dataclass(frozen=True)
class PriceBucket:
    label: str
    above: Optional[float]  # exclusive lower bound, None starts at zero inclusive
    upto: Optional[float]  # inclusive upper bound, None is unbounded

    def clause(self):
        conditions = []
        if self.above is None:
            conditions.append(Transaction.price >= 0)
        else:
            conditions.append(Transaction.price > self.above)
        if self.upto is not None:
            conditions.append(Transaction.price <= self.upto)
        return conditions


PRICE_BUCKETS = (
    PriceBucket("0 - 100", None, 100),
    PriceBucket("101 - 200", 100, 200),
    PriceBucket("201 - 300", 200, 300),
    PriceBucket("301 - 400", 300, 400),
    PriceBucket("401 - 500", 400, 500),
    PriceBucket("501 - 600", 500, 600),
    PriceBucket("601 - 700", 600, 700),
    PriceBucket("701 - 800", 700, 800),
    PriceBucket("801 - 900", 800, 900),
    PriceBucket("901 - above", 900, None),
)


def in_month(month: str):
    # dateOfSale is "YYYY-MM-DD...", characters 6-7 hold the month.
    # Purely positional: the rest of the string is not checked to be a date.
    return func.substr(Transaction.date_of_sale, 6, 2) == month


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def list_transactions(
    db: Session,
    month: str,
    search: Optional[str] = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> List[TransactionRecord]:
    """
    Returns one page of the month's transactions.

    - **search**: case-insensitive substring of title, description or price
    - **page**: 1-based page number
    - **limit**: page size
    """
    query = select(Transaction).where(in_month(month))

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Transaction.title.ilike(pattern),
                Transaction.description.ilike(pattern),
                cast(Transaction.price, String).ilike(pattern),
            )
        )

    query = query.order_by(Transaction.id).limit(limit).offset(page_offset(page, limit))

    try:
        rows = db.execute(query).scalars().all()
    except SQLAlchemyError as e:
        raise QueryError(str(e)) from e
    return [TransactionRecord.model_validate(row) for row in rows]


def get_statistics(db: Session, month: str) -> Statistics:
    query = select(
        func.sum(Transaction.price),
        func.count(case((Transaction.sold.is_(True), 1))),
        func.count(case((Transaction.sold.is_(False), 1))),
    ).where(in_month(month))

    try:
        total, sold, not_sold = db.execute(query).one()
    except SQLAlchemyError as e:
        raise QueryError(str(e)) from e

    return Statistics(
        total_sale_amount=total,
        total_sold_items=sold or 0,
        total_not_sold_items=not_sold or 0,
    )


def count_for_month(db: Session, month: str) -> int:
    query = select(func.count()).select_from(Transaction).where(in_month(month))
    try:
        return db.execute(query).scalar_one()
    except SQLAlchemyError as e:
        raise QueryError(str(e)) from e


def count_in_bucket(engine: Engine, month: str, bucket: PriceBucket) -> int:
    """Counts the month's rows priced inside one bucket, on a connection of its own."""
    query = select(func.count()).select_from(Transaction).where(in_month(month), *bucket.clause())
    try:
        with engine.connect() as connection:
            return connection.execute(query).scalar_one()
    except SQLAlchemyError as e:
        raise QueryError(str(e)) from e


async def price_histogram(engine: Engine, month: str) -> List[PriceRangeCount]:
    """
    Counts the month's transactions per price bucket.

    The ten bucket queries run concurrently in the thread pool; gather keeps the
    results in bucket order whichever query finishes first.
    """
    counts = await asyncio.gather(
        *(run_in_threadpool(count_in_bucket, engine, month, bucket) for bucket in PRICE_BUCKETS)
    )
    return [PriceRangeCount(range=bucket.label, count=count) for bucket, count in zip(PRICE_BUCKETS, counts)]


def category_breakdown(db: Session, month: str) -> List[CategoryCount]:
    query = (
        select(Transaction.category, func.count())
        .where(in_month(month))
        .group_by(Transaction.category)
    )
    try:
        rows = db.execute(query).all()
    except SQLAlchemyError as e:
        raise QueryError(str(e)) from e
    return [CategoryCount(category=category, count=count) for category, count in rows]

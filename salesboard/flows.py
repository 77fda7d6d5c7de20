# salesboard/flows.py
from typing import Any, Dict, List, Optional

from prefect import flow, get_run_logger, task

from .config import settings
from .database import build_engine
from .seeding import fetch_transactions, load_transactions, reset_table


@task
def fetch_seed_records(source: str, timeout: float) -> List[Dict[str, Any]]:
    records = fetch_transactions(source, timeout=timeout)
    get_run_logger().info(f"Fetched {len(records)} records from {source}")
    return records

@task
def rebuild_transactions(records: List[Dict[str, Any]], database_url: str) -> int:
    """
    Replaces the contents of the transactions table with the given records.
    """
    engine = build_engine(database_url)
    try:
        reset_table(engine)
        return load_transactions(records, engine)
    finally:
        engine.dispose()

@flow(name="Transaction Seed Pipeline")
def run_seed_pipeline(source: Optional[str] = None, database_url: Optional[str] = None) -> int:
    """
    Re-seeds the transactions store outside the API process.

    The fetch happens before the table is dropped, so a failed download leaves
    the current rows in place.
    """
    records = fetch_seed_records(source or settings.SEED_SOURCE, settings.SEED_TIMEOUT)
    total_rows = rebuild_transactions(records, database_url or settings.DATABASE_URL)
    get_run_logger().info(f"Seeded {total_rows} transactions")
    return total_rows

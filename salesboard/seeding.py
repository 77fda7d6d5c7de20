# salesboard/seeding.py
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
from sqlalchemy.engine import Engine

from .database import Base
from .models import SEED_COLUMNS, TABLE_NAME, Transaction

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1_000  # Insert 1,000 rows at a time


class SeedStatus:
    """Readiness record for the startup seed, shared with the health endpoint."""

    def __init__(self):
        self.ready = threading.Event()
        self.rows: Optional[int] = None
        self.error: Optional[str] = None

    def finish(self, rows: int, error: Optional[str] = None):
        self.rows = rows
        self.error = error
        self.ready.set()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "seeded": self.ready.is_set(),
            "rows": self.rows,
            "error": self.error,
        }


def reset_table(engine: Engine):
    """Drops and recreates the transactions table."""
    Transaction.__table__.drop(engine, checkfirst=True)
    Base.metadata.create_all(engine)


def fetch_transactions(source: str, timeout: float = 30.0) -> List[Dict[str, Any]]:
    """
    Loads the raw seed payload.

    Args:
        source: An http(s) URL, or a path to a JSON file on disk
        timeout: Seconds to wait for the remote server

    Raises:
        requests.RequestException: If the download fails
        ValueError: If the payload is not a JSON array of objects
    """
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    else:
        payload = json.loads(Path(source).read_text(encoding="utf-8"))

    if not isinstance(payload, list):
        raise ValueError(f"Seed payload must be a JSON array, got {type(payload).__name__}")
    if not all(isinstance(item, dict) for item in payload):
        raise ValueError("Seed payload must only contain JSON objects")
    return payload


def load_transactions(records: List[Dict[str, Any]], engine: Engine) -> int:
    """
    Appends seed records to the transactions table in chunks.

    Args:
        records: Transaction-shaped objects from the upstream payload
        engine: SQLAlchemy engine for database connection

    Returns:
        int: Total number of rows inserted
    """
    if not records:
        return 0

    frame = pd.DataFrame.from_records(records)

    missing_cols = set(SEED_COLUMNS) - set(frame.columns)
    if missing_cols:
        raise ValueError(f"Seed payload is missing required fields: {', '.join(sorted(missing_cols))}")

    # Upstream ids are ignored, the store assigns its own
    frame = frame[SEED_COLUMNS].copy()

    try:
        frame["price"] = pd.to_numeric(frame["price"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Seed payload contains a non-numeric price: {e}")

    frame["sold"] = frame["sold"].eq(True)

    frame.to_sql(
        TABLE_NAME,
        con=engine,
        if_exists="append",
        index=False,
        chunksize=CHUNK_SIZE,
    )
    return len(frame)


def seed_database(
    engine: Engine,
    source: str,
    timeout: float = 30.0,
    status: Optional[SeedStatus] = None,
    reset: bool = True,
) -> int:
    """
    Rebuilds the transactions table from the seed source.

    Pass reset=False when the caller has already recreated the table.

    Best effort: failures are logged and leave the table empty or partially
    filled. Never raises and never retries.

    Returns:
        int: Number of rows inserted
    """
    rows = 0
    error = None
    try:
        if reset:
            reset_table(engine)
        logger.info("Fetching seed data from %s", source)
        records = fetch_transactions(source, timeout=timeout)
        rows = load_transactions(records, engine)
        logger.info("Seeded %d transactions", rows)
    except Exception as e:
        logger.exception("Error seeding database")
        error = str(e)

    if status is not None:
        status.finish(rows, error)
    return rows

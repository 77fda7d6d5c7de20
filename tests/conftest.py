# tests/conftest.py
import pytest
import os
import json

os.environ["PREFECT_TEST_MODE"] = "1"
os.environ["PREFECT_LOGGING_LEVEL"] = "ERROR"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"

from faker import Faker
from fastapi.testclient import TestClient

# Import app and global variables
from salesboard.main import app, get_engine
from salesboard.database import Base, build_engine
from salesboard.seeding import load_transactions, reset_table

# Six March sales (one of them without a clean bucket price), three from other
# months and one without a sale date.
SAMPLE_RECORDS = [
    {"id": 1, "title": "Fjallraven Backpack", "description": "Fits 15 inch laptops", "price": 109.95,
     "category": "men's clothing", "image": "https://example.com/1.jpg", "sold": False,
     "dateOfSale": "2021-03-27T20:29:54+05:30"},
    {"id": 2, "title": "Mens Casual T-Shirt", "description": "Slim-fitting style", "price": 22.3,
     "category": "men's clothing", "image": "https://example.com/2.jpg", "sold": True,
     "dateOfSale": "2022-03-15T20:29:54+05:30"},
    {"id": 3, "title": "Solid Gold Petite Micropave", "description": "Satisfaction guaranteed", "price": 168,
     "category": "jewelery", "image": "https://example.com/3.jpg", "sold": True,
     "dateOfSale": "2022-03-05T20:29:54+05:30"},
    {"id": 4, "title": "WD 2TB Elements", "description": "USB 3.0 portable hard drive", "price": 64,
     "category": "electronics", "image": "https://example.com/4.jpg", "sold": False,
     "dateOfSale": "2022-03-01T20:29:54+05:30"},
    {"id": 5, "title": "Samsung 49-Inch Monitor", "description": "Super ultrawide screen", "price": 999.99,
     "category": "electronics", "image": "https://example.com/5.jpg", "sold": True,
     "dateOfSale": "2022-03-10T20:29:54+05:30"},
    {"id": 6, "title": "Gaming Drive", "description": "Fast external storage", "price": 100.5,
     "category": "electronics", "image": "https://example.com/6.jpg", "sold": False,
     "dateOfSale": "2022-03-11T20:29:54+05:30"},
    {"id": 7, "title": "Rain Jacket", "description": "Lightweight hooded jacket", "price": 39.99,
     "category": "women's clothing", "image": "https://example.com/7.jpg", "sold": True,
     "dateOfSale": "2021-11-27T20:29:54+05:30"},
    {"id": 8, "title": "Short Sleeve Boat Neck", "description": "100% polyester", "price": 7.95,
     "category": "women's clothing", "image": "https://example.com/8.jpg", "sold": False,
     "dateOfSale": "2022-01-27T20:29:54+05:30"},
    {"id": 9, "title": "Silicon Power SSD", "description": "3D NAND flash", "price": 109,
     "category": "electronics", "image": "https://example.com/9.jpg", "sold": True,
     "dateOfSale": "2021-12-27T20:29:54+05:30"},
    {"id": 10, "title": "Mystery Box", "description": "Never shipped", "price": 50,
     "category": "electronics", "image": "https://example.com/10.jpg", "sold": True,
     "dateOfSale": None},
]

MARCH_RECORDS = [r for r in SAMPLE_RECORDS if r["dateOfSale"] and r["dateOfSale"][5:7] == "03"]


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    A file-backed SQLite engine so every bucket query gets its own connection.
    """
    test_engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()

@pytest.fixture(scope="function")
def db_session(engine):
    from sqlalchemy.orm import Session

    db = Session(bind=engine)
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(scope="function")
def seeded_engine(engine):
    """
    Seeds the test database with the sample records.
    """
    reset_table(engine)
    load_transactions(SAMPLE_RECORDS, engine)
    return engine

@pytest.fixture(scope="function")
def seed_file(tmp_path):
    path = tmp_path / "product_transaction.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path

@pytest.fixture(scope="function")
def fake_march_records():
    """
    25 generated March sales for pagination tests.
    """
    fake = Faker()
    Faker.seed(1234)
    return [
        {
            "title": fake.catch_phrase(),
            "description": fake.sentence(),
            "price": float(fake.random_int(min=1, max=1500)),
            "dateOfSale": f"2022-03-{day:02d}T10:00:00+05:30",
            "sold": fake.boolean(),
            "category": fake.random_element(["electronics", "jewelery", "men's clothing"]),
        }
        for day in range(1, 26)
    ]

@pytest.fixture(scope="function")
def client(seeded_engine):
    """
    Overrides the dependency injection to use our test database.
    """
    app.dependency_overrides[get_engine] = lambda: seeded_engine

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

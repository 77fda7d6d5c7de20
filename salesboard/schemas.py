# salesboard/schemas.py
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON keys are camelCase (dateOfSale, totalSaleAmount, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TransactionRecord(CamelModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    date_of_sale: Optional[str] = None
    sold: Optional[bool] = None
    category: Optional[str] = None


class Statistics(CamelModel):
    total_sale_amount: Optional[float] = None
    total_sold_items: int = 0
    total_not_sold_items: int = 0


class PriceRangeCount(CamelModel):
    range: str
    count: int


class CategoryCount(CamelModel):
    category: Optional[str] = None
    count: int


class HealthReport(BaseModel):
    status: str
    seeded: bool
    rows: Optional[int] = None
    error: Optional[str] = None

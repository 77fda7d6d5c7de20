# salesboard/models.py
from typing import Optional

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base

TABLE_NAME = "transactions"

# Business fields as they appear in the upstream JSON and in the table
SEED_COLUMNS = ["title", "description", "price", "dateOfSale", "sold", "category"]


class Transaction(Base):
    __tablename__ = TABLE_NAME

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Optional[float]] = mapped_column(Float)
    date_of_sale: Mapped[Optional[str]] = mapped_column("dateOfSale", String)
    sold: Mapped[Optional[bool]] = mapped_column(Boolean)
    category: Mapped[Optional[str]] = mapped_column(String)

    def __repr__(self) -> str:
        return f"<Transaction id={self.id} title={self.title!r} dateOfSale={self.date_of_sale!r}>"

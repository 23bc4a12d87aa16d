from __future__ import annotations

from sqlmodel import Field, SQLModel


class Customer(SQLModel, table=True):
    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    balance: float = Field(default=0.0)

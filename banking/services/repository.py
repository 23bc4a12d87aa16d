from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from ..core.errors import AccountNotFoundError
from ..models import CustomerModel


class CustomerRepository:
    """SQL execution interface over a transactional SQLModel session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_customer(
        self, customer_id: int, *, for_update: bool = False
    ) -> Optional[CustomerModel]:
        stmt = select(CustomerModel).where(CustomerModel.id == customer_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.exec(stmt).first()

    def get_balance(
        self, customer_id: int, *, for_update: bool = False
    ) -> Optional[float]:
        customer = self.get_customer(customer_id, for_update=for_update)
        if customer is None:
            return None
        return customer.balance

    def set_balance(self, customer_id: int, new_balance: float) -> None:
        customer = self.session.get(CustomerModel, customer_id)
        if customer is None:
            raise AccountNotFoundError(f"Customer {customer_id} not found")
        customer.balance = new_balance
        self.session.add(customer)
        self.session.flush()

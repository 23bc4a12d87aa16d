from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from ..core.db import ConnectionProvider
from ..core.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidTransferError,
)
from .repository import CustomerRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferReceipt:
    from_id: int
    to_id: int
    amount: float
    from_balance: float
    to_balance: float


class TransferService:
    def __init__(
        self,
        provider: ConnectionProvider,
        repository_factory: Optional[Callable[[Session], CustomerRepository]] = None,
    ) -> None:
        self.provider = provider
        self.repository_factory = repository_factory or CustomerRepository

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _validate_transfer(self, from_id: int, to_id: int, amount: float) -> None:
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidTransferError("Transfer amount must be a positive number")
        if from_id == to_id:
            raise InvalidTransferError("Cannot transfer to the same account")

    def _reject(self, exc: Exception, from_id: int, to_id: int, amount: float) -> None:
        logger.info(
            "transfer.rejected",
            extra={
                "from_id": from_id,
                "to_id": to_id,
                "amount": amount,
                "reason": type(exc).__name__,
            },
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def balance_for_customer(self, customer_id: int) -> float:
        with self.provider.transaction() as session:
            balance = self.repository_factory(session).get_balance(customer_id)
        if balance is None:
            raise AccountNotFoundError(f"Customer {customer_id} not found")
        return balance

    def transfer_funds(self, from_id: int, to_id: int, amount: float) -> TransferReceipt:
        """Move ``amount`` from one customer to another in a single transaction.

        Both rows are read FOR UPDATE in ascending id order before any check
        runs, so two transfers over the same pair cannot deadlock each other.
        SQLite engines open the transaction with BEGIN IMMEDIATE, which takes
        the write lock before the reads. A failed precondition raises before
        any write and the transaction is rolled back.
        """
        try:
            self._validate_transfer(from_id, to_id, amount)
            with self.provider.transaction() as session:
                repository = self.repository_factory(session)
                balances = {
                    customer_id: repository.get_balance(customer_id, for_update=True)
                    for customer_id in sorted((from_id, to_id))
                }
                from_balance = balances[from_id]
                to_balance = balances[to_id]
                if from_balance is None:
                    raise AccountNotFoundError(f"Customer {from_id} not found")
                if to_balance is None:
                    raise AccountNotFoundError(f"Customer {to_id} not found")

                new_from_balance = from_balance - amount
                if new_from_balance < 0:
                    raise InsufficientFundsError(
                        f"Insufficient funds: customer {from_id} has {from_balance}, "
                        f"transfer requires {amount}"
                    )
                new_to_balance = to_balance + amount

                repository.set_balance(from_id, new_from_balance)
                repository.set_balance(to_id, new_to_balance)
        except (AccountNotFoundError, InsufficientFundsError, InvalidTransferError) as exc:
            self._reject(exc, from_id, to_id, amount)
            raise

        logger.info(
            "transfer.completed",
            extra={
                "from_id": from_id,
                "to_id": to_id,
                "amount": amount,
                "from_balance": new_from_balance,
                "to_balance": new_to_balance,
            },
        )
        return TransferReceipt(
            from_id=from_id,
            to_id=to_id,
            amount=amount,
            from_balance=new_from_balance,
            to_balance=new_to_balance,
        )

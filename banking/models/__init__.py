from .db import Customer as CustomerModel
from .schemas import BalanceResponse, TransferRequest, TransferResponse

__all__ = [
    "BalanceResponse",
    "TransferRequest",
    "TransferResponse",
    "CustomerModel",
]

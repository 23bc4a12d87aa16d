from .repository import CustomerRepository
from .transfer import TransferReceipt, TransferService

__all__ = ["CustomerRepository", "TransferReceipt", "TransferService"]

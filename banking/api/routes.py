from fastapi import APIRouter, Depends

from ..core.dependencies import get_transfer_service
from ..models import BalanceResponse, TransferRequest, TransferResponse
from ..services import TransferService


router = APIRouter(prefix="/customers", tags=["customers"])

@router.get("/{customer_id}/balance", response_model=BalanceResponse)
def get_balance(
    customer_id: int,
    service: TransferService = Depends(get_transfer_service),
) -> BalanceResponse:
    balance = service.balance_for_customer(customer_id)
    return BalanceResponse(customer_id=customer_id, balance=balance)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    service: TransferService = Depends(get_transfer_service),
) -> TransferResponse:
    receipt = service.transfer_funds(payload.from_id, payload.to_id, payload.amount)
    return TransferResponse(
        from_id=receipt.from_id,
        to_id=receipt.to_id,
        amount=receipt.amount,
        from_balance=receipt.from_balance,
        to_balance=receipt.to_balance,
    )

__all__ = ["router", "transfer_router"]

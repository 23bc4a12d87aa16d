from pydantic import BaseModel, Field


class BalanceResponse(BaseModel):
    customer_id: int
    balance: float


class TransferRequest(BaseModel):
    from_id: int = Field(..., description="Customer debited by the transfer")
    to_id: int = Field(..., description="Customer credited by the transfer")
    amount: float = Field(..., gt=0, allow_inf_nan=False)


class TransferResponse(BaseModel):
    from_id: int
    to_id: int
    amount: float
    from_balance: float
    to_balance: float

from fastapi import Depends, Request

from ..services import TransferService
from .db import ConnectionProvider

def get_provider(request: Request) -> ConnectionProvider:
    return request.app.state.provider

def get_transfer_service(
    provider: ConnectionProvider = Depends(get_provider),
) -> TransferService:
    return TransferService(provider)

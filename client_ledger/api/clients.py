"""
Client registration and balance endpoints
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from .dependencies import get_ledger_system
from .schemas import ClientInfo, success, fail
from ..errors import AccountNotFoundError, DuplicateIdentityError
from ..system import LedgerSystem


router = APIRouter()


@router.post("/new_client")
def new_client(
    body: ClientInfo,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Register a new client with a zero balance"""
    try:
        account_id = system.ledger.create_account(body.to_profile())
    except DuplicateIdentityError as e:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=fail(str(e)))

    return success({"id": account_id})


@router.get("/client_balance/{client_id}")
def client_balance(
    client_id: str,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Get client details including the current balance"""
    try:
        view = system.ledger.find_account(client_id)
    except AccountNotFoundError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=fail(str(e)))

    return success(view.to_dict())

"""
Credit and debit transaction endpoints
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from .dependencies import get_ledger_system
from .schemas import CreditOrDebitRequest, success, fail
from ..accounts import format_decimal
from ..errors import AccountNotFoundError, InsufficientFundsError
from ..system import LedgerSystem
from ..transactions import TransactionType


router = APIRouter()


def process_transaction(
    transaction_type: TransactionType,
    body: CreditOrDebitRequest,
    system: LedgerSystem
):
    """Apply a credit or debit and wrap the outcome in the response envelope"""
    try:
        new_balance = system.ledger.apply_transaction(transaction_type, body.client_id, body.amount)
    except AccountNotFoundError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=fail(str(e)))
    except InsufficientFundsError as e:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=fail(str(e)))

    return success({
        "client_id": body.client_id,
        "new_balance": format_decimal(new_balance)
    })


@router.post("/new_credit_transaction")
def new_credit_transaction(
    body: CreditOrDebitRequest,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Credit a client's balance"""
    return process_transaction(TransactionType.CREDIT, body, system)


@router.post("/new_debit_transaction")
def new_debit_transaction(
    body: CreditOrDebitRequest,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Debit a client's balance if funds are sufficient"""
    return process_transaction(TransactionType.DEBIT, body, system)

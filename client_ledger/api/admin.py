"""
Snapshot endpoints (store balances, list snapshot files)
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from .dependencies import get_ledger_system
from .schemas import success, fail
from ..accounts import format_decimal
from ..errors import StorageFailureError
from ..system import LedgerSystem


router = APIRouter()


@router.post("/store_balances")
def store_balances(system: LedgerSystem = Depends(get_ledger_system)):
    """Write all balances to today's next snapshot file and reset them to zero"""
    try:
        result = system.store_balances()
    except StorageFailureError as e:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=fail(str(e)))

    return success({
        "file": result.path.name,
        "records": [
            {"client_id": record.account_id, "balance": format_decimal(record.balance)}
            for record in result.records
        ]
    })


@router.get("/snapshots")
def list_snapshots(
    day: Optional[date] = None,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """List snapshot files, optionally for a single day (YYYY-MM-DD)"""
    paths = system.snapshot_writer.list_snapshots(day)
    return success({"files": [path.name for path in paths]})

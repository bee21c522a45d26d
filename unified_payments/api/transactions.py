"""
Transaction history endpoints
"""

from fastapi import APIRouter, Depends, Query

from .deps import PaymentSystem, get_payment_system
from ..errors import TransactionNotFoundError


router = APIRouter()


@router.get("/transactions")
async def list_transactions(
    limit: int = Query(10, ge=0),
    offset: int = Query(0, ge=0),
    system: PaymentSystem = Depends(get_payment_system)
):
    """Get transaction history, newest first"""
    await system.simulate_latency(system.config.transactions_latency_ms)
    
    page = system.ledger.list_transactions(limit=limit, offset=offset)
    
    return {
        "success": True,
        "data": {
            "transactions": [txn.to_api_dict() for txn in page.transactions],
            "total": page.total,
            "hasMore": page.has_more
        }
    }


@router.get("/transaction/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    system: PaymentSystem = Depends(get_payment_system)
):
    """Get a single transaction"""
    await system.simulate_latency(system.config.transaction_latency_ms)
    
    transaction = system.ledger.get_transaction(transaction_id)
    if not transaction:
        raise TransactionNotFoundError()
    
    return {"success": True, "data": transaction.to_api_dict()}

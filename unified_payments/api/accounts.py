"""
Account lookup endpoints
"""

from fastapi import APIRouter, Depends

from .deps import PaymentSystem, get_payment_system
from ..errors import AccountNotFoundError


router = APIRouter()


@router.get("/accounts")
async def list_accounts(system: PaymentSystem = Depends(get_payment_system)):
    """Accounts a transfer can be sent from"""
    await system.simulate_latency(system.config.account_latency_ms)
    
    accounts = [
        {
            "accountNumber": account.account_number,
            "name": account.name,
            "currency": account.currency.code
        }
        for account in system.ledger.list_accounts()
    ]
    
    return {"success": True, "data": {"accounts": accounts}}


@router.get("/account/{account_number}")
async def get_account(
    account_number: str,
    system: PaymentSystem = Depends(get_payment_system)
):
    """Get account holder details"""
    await system.simulate_latency(system.config.account_latency_ms)
    
    account = system.ledger.get_account(account_number)
    if not account:
        raise AccountNotFoundError()
    
    # The balance itself is never exposed
    return {
        "success": True,
        "data": {
            "accountNumber": account.account_number,
            "name": account.name,
            "currency": account.currency.code,
            "hasInsufficientFunds": account.has_insufficient_funds
        }
    }

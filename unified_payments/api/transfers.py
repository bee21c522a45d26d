"""
Transfer endpoints
"""

from fastapi import APIRouter, Depends

from .deps import PaymentSystem, get_payment_system
from .schemas import DomesticTransferBody, InternationalTransferBody


router = APIRouter()


@router.post("/transfer/domestic")
async def domestic_transfer(
    body: DomesticTransferBody,
    system: PaymentSystem = Depends(get_payment_system)
):
    """Send money to another account at this bank"""
    await system.simulate_latency(system.config.domestic_transfer_latency_ms)
    
    result = system.orchestrator.submit(body.to_request())
    if not result.success:
        raise result.error
    
    return result.to_envelope()


@router.post("/transfer/international")
async def international_transfer(
    body: InternationalTransferBody,
    system: PaymentSystem = Depends(get_payment_system)
):
    """Send money abroad to an IBAN via SWIFT"""
    await system.simulate_latency(system.config.international_transfer_latency_ms)
    
    result = system.orchestrator.submit(body.to_request())
    if not result.success:
        raise result.error
    
    return result.to_envelope()

"""
Payment system container and request dependencies
"""

from datetime import datetime
from typing import Callable, Optional
import asyncio

from fastapi import Request

from ..config import PaymentsConfig, get_config
from ..ledger import TransferLedger
from ..orchestrator import TransferOrchestrator
from ..policy import OutcomePolicy, create_outcome_policy


class PaymentSystem:
    """Ledger, outcome policy and orchestrator wired together"""
    
    def __init__(
        self,
        config: Optional[PaymentsConfig] = None,
        ledger: Optional[TransferLedger] = None,
        policy: Optional[OutcomePolicy] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.config = config or get_config()
        self.ledger = ledger or TransferLedger()
        self.policy = policy or create_outcome_policy(
            self.config.outcome_policy,
            domestic_failure_rate=self.config.domestic_failure_rate,
            compliance_block_rate=self.config.compliance_block_rate,
            seed=self.config.policy_seed
        )
        self.orchestrator = TransferOrchestrator(self.ledger, self.policy, clock)
    
    async def simulate_latency(self, milliseconds: int) -> None:
        """Pause like a real payment backend would, when enabled"""
        if self.config.simulate_latency and milliseconds > 0:
            await asyncio.sleep(milliseconds / 1000)


# Dependency to get the payment system the app was created with
def get_payment_system(request: Request) -> PaymentSystem:
    return request.app.state.payment_system

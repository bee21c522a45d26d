"""
Outcome Policy Module

Decides whether an otherwise valid transfer is accepted, fails for technical
reasons, or is blocked by compliance checks. The simulated policy reproduces
the demo service's random partial failures from an injectable random source;
the deterministic policies are used by tests and by demos that must always
succeed.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Optional
import random

from .transfers import TransferType
from .logging_config import get_logger


class OutcomeDecision(Enum):
    """Result of consulting an outcome policy"""
    ACCEPT = "accept"
    TECHNICAL_FAILURE = "technical_failure"
    COMPLIANCE_BLOCK = "compliance_block"


class OutcomePolicy(ABC):
    """Decides the fate of a validated transfer"""

    @abstractmethod
    def decide(self, transfer_type: TransferType, amount: Decimal) -> OutcomeDecision:
        pass


class AlwaysAcceptPolicy(OutcomePolicy):
    """Accepts every transfer"""

    def decide(self, transfer_type: TransferType, amount: Decimal) -> OutcomeDecision:
        return OutcomeDecision.ACCEPT


class FixedOutcomePolicy(OutcomePolicy):
    """Returns the same decision for every transfer"""

    def __init__(self, decision: OutcomeDecision):
        self.decision = decision
        self.calls = 0

    def decide(self, transfer_type: TransferType, amount: Decimal) -> OutcomeDecision:
        self.calls += 1
        return self.decision


class SimulatedOutcomePolicy(OutcomePolicy):
    """
    Probabilistic failures as seen from a real payment rail.

    Domestic transfers fail with ``domestic_failure_rate``; international
    transfers are blocked by compliance with ``compliance_block_rate``.
    """

    def __init__(
        self,
        domestic_failure_rate: float = 0.05,
        compliance_block_rate: float = 0.10,
        rng: Optional[random.Random] = None
    ):
        for name, rate in (("domestic_failure_rate", domestic_failure_rate),
                           ("compliance_block_rate", compliance_block_rate)):
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {rate}")

        self.domestic_failure_rate = domestic_failure_rate
        self.compliance_block_rate = compliance_block_rate
        self._rng = rng or random.Random()
        self.logger = get_logger("payments.policy")

    def decide(self, transfer_type: TransferType, amount: Decimal) -> OutcomeDecision:
        draw = self._rng.random()

        if transfer_type == TransferType.DOMESTIC and draw < self.domestic_failure_rate:
            self.logger.info(f"Simulated technical failure for domestic transfer of {amount}")
            return OutcomeDecision.TECHNICAL_FAILURE

        if transfer_type == TransferType.INTERNATIONAL and draw < self.compliance_block_rate:
            self.logger.info(f"Simulated compliance block for international transfer of {amount}")
            return OutcomeDecision.COMPLIANCE_BLOCK

        return OutcomeDecision.ACCEPT


def create_outcome_policy(name: str, domestic_failure_rate: float = 0.05,
                          compliance_block_rate: float = 0.10,
                          seed: Optional[int] = None) -> OutcomePolicy:
    """Build the policy named in configuration"""
    if name == "always_accept":
        return AlwaysAcceptPolicy()
    if name == "simulated":
        rng = random.Random(seed) if seed is not None else None
        return SimulatedOutcomePolicy(domestic_failure_rate, compliance_block_rate, rng=rng)
    raise ValueError(f"Unknown outcome policy: {name}")

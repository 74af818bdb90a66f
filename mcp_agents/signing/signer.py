"""Transaction signer interface and the simulated signer.

Every ledger-mutating handler describes its intended change as a
``LedgerEffect`` and hands it to the agent's signer, which returns a
transaction id. The signer is the only component allowed to suspend
during an instruction call; everything before it is pure computation.

Classes:
    LedgerEffect: The intended on-ledger change of one instruction.
    TransactionSigner: Abstract signer interface.
    SimulatedSigner: Deterministic signer that performs no I/O.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from mcp_agents.config.settings import DEFAULT_PLACEHOLDER_SIGNATURE
from mcp_agents.core.actions import Action


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Ledger Effect
# =============================================================================


@dataclass(frozen=True)
class LedgerEffect:
    """An intended on-ledger change, ready for signing.

    Attributes:
        action: Handler that produced the effect.
        agent_id: Account that signs and pays for the effect.
        endpoint: Ledger endpoint from the agent's connection.
        commitment: Commitment level from the agent's connection.
        params: Action-specific parameters, JSON-serializable.
    """

    action: Action
    agent_id: str
    endpoint: str
    commitment: str = "confirmed"
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for transport to a signing service."""
        return {
            "action": self.action.value,
            "agentId": self.agent_id,
            "endpoint": self.endpoint,
            "commitment": self.commitment,
            "params": dict(self.params),
        }


# =============================================================================
# Signer Interface
# =============================================================================


class TransactionSigner(ABC):
    """Abstract base class for transaction signers.

    Implementations must be safe to share between concurrent instruction
    calls and must bound the time a single ``sign`` call can take.
    """

    @abstractmethod
    async def sign(self, effect: LedgerEffect) -> str:
        """Sign and submit an effect.

        Args:
            effect: The change to submit.

        Returns:
            Non-empty transaction id.

        Raises:
            SigningError: If no transaction id could be produced.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the signer."""
        return None


class SimulatedSigner(TransactionSigner):
    """Signer that returns a fixed placeholder id without doing any I/O.

    Example:
        >>> signer = SimulatedSigner()
        >>> await signer.sign(effect)
        'simulated-transaction-signature'
    """

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER_SIGNATURE) -> None:
        if not placeholder:
            raise ValueError("placeholder signature must be non-empty")
        self.placeholder = placeholder

    async def sign(self, effect: LedgerEffect) -> str:
        logger.debug(f"Simulated signing of {effect.action.value} for {effect.agent_id}")
        return self.placeholder


__all__ = ["LedgerEffect", "TransactionSigner", "SimulatedSigner"]

"""Agent execution contract for mcp-agents.

One ``Agent`` class serves every agent kind. What differs between kinds
(name, description, enabled actions, handlers) lives in an
``AgentVariant`` record selected by ``config.kind``; there is no subclass
per kind. Handlers are plain async functions that receive a
``HandlerContext`` and the classified ``Instruction``.

Per-call flow:
    received -> classified -> (unsupported | dispatched -> handled ->
    [signed]) -> responded

Classification and signing failures are converted into failed
ResponseEnvelopes here; configuration defects raise at construction and
handler bugs propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional

from mcp_agents.config.schemas.agent import AgentIdentity, AgentKind
from mcp_agents.context.router import ContextRouter
from mcp_agents.core.actions import Action
from mcp_agents.core.exceptions import (
    AgentConfigurationError,
    ClassificationError,
    SigningError,
)
from mcp_agents.core.response import ResponseEnvelope
from mcp_agents.protocols.simulated import ProtocolServices
from mcp_agents.routing.classifier import Instruction, InstructionClassifier, InstructionStage
from mcp_agents.signing.signer import LedgerEffect, TransactionSigner
from mcp_agents.telemetry.logging import AgentLogAdapter


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def isoformat(moment: datetime) -> str:
    """ISO-8601 timestamp with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Variant Records
# =============================================================================


@dataclass(frozen=True)
class HandlerContext:
    """Everything a handler may read during one call.

    Attributes:
        identity: The agent's identity.
        config: The agent's frozen configuration.
        services: Protocol services to consult.
        sign: Submits ``(action, params)`` through the agent's signer and
            returns the transaction id.
        now: Time the call was received.
    """

    identity: AgentIdentity
    config: Any
    services: ProtocolServices
    sign: Callable[[Action, dict[str, Any]], Awaitable[str]]
    now: datetime


Handler = Callable[[HandlerContext, Instruction], Awaitable[ResponseEnvelope]]


@dataclass(frozen=True)
class AgentVariant:
    """Behaviour of one agent kind.

    Attributes:
        kind: The configuration ``kind`` this variant serves.
        label: Short noun used in messages (``governance``, ``DeFi``...).
        name: Builds the display name from the configuration.
        description: Builds the description from the configuration.
        enabled_actions: Actions the configuration enables.
        handlers: Handler for each action this variant can execute.
    """

    kind: AgentKind
    label: str
    name: Callable[[Any], str]
    description: Callable[[Any], str]
    enabled_actions: Callable[[Any], tuple[Action, ...]]
    handlers: Mapping[Action, Handler] = field(default_factory=dict)


# =============================================================================
# Agent
# =============================================================================


class Agent:
    """A configured actor that turns instructions into domain actions.

    The identity, configuration and capability set are fixed at
    construction. Concurrent ``process_instruction`` calls share nothing
    mutable; each call builds its own HandlerContext.

    Example:
        ```python
        agent = create_agent(identity, DeFiConfig(supported_dexes=("Jupiter",)))
        envelope = await agent.process_instruction("Swap 0.1 SOL to USDC")
        print(envelope.to_dict())
        ```
    """

    def __init__(
        self,
        identity: AgentIdentity,
        config: Any,
        variant: AgentVariant,
        signer: TransactionSigner,
        services: Optional[ProtocolServices] = None,
        context_router: Optional[ContextRouter] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the agent.

        Raises:
            AgentConfigurationError: If the configuration does not match the
                variant or enables no routable action.
            ConfigurationError: If ``context_router`` has not loaded.
        """
        if config.kind != variant.kind:
            raise AgentConfigurationError(
                f"Configuration kind '{config.kind.value}' does not match variant '{variant.kind.value}'",
                agent_kind=variant.kind.value,
            )
        if context_router is not None:
            context_router.require_loaded()

        self._identity = identity
        self._config = config
        self._variant = variant
        self._signer = signer
        self._services = services or ProtocolServices()
        self._context_router = context_router
        self._clock = clock
        self._classifier = InstructionClassifier(variant.kind, variant.enabled_actions(config))

        missing = [a.value for a in self._classifier.actions if a not in variant.handlers]
        if missing:
            raise AgentConfigurationError(
                f"No handler registered for: {', '.join(missing)}",
                agent_kind=variant.kind.value,
            )

        self._log = AgentLogAdapter(logger, {"component": variant.kind.value.upper()})
        self._log.info(
            f"Created {self.get_name()} for {identity.agent_id} "
            f"(capabilities: {', '.join(self._classifier.capabilities)})"
        )

    # -------------------------------------------------------------------------
    # Read-only properties
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> AgentKind:
        return self._variant.kind

    @property
    def identity(self) -> AgentIdentity:
        return self._identity

    @property
    def config(self) -> Any:
        return self._config

    @property
    def signer(self) -> TransactionSigner:
        return self._signer

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def get_name(self) -> str:
        return self._variant.name(self._config)

    def get_description(self) -> str:
        return self._variant.description(self._config)

    def get_capabilities(self) -> list[str]:
        """Advertised capability labels, one per routable action, in rule order."""
        return self._classifier.capabilities

    def get_state(self) -> dict[str, Any]:
        """Snapshot of identity and configuration.

        Never contains ledger data; use ``process_instruction`` for that.
        """
        state: dict[str, Any] = {
            "kind": self.kind.value,
            "name": self.get_name(),
            "agentId": self._identity.agent_id,
            "endpoint": self._identity.connection.endpoint,
            "capabilities": self.get_capabilities(),
            "config": self._config.model_dump(mode="json", exclude={"kind"}),
        }
        if self._context_router is not None:
            state["contexts"] = [
                c.name for c in self._context_router.contexts_for(self.kind.value)
            ]
        return state

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    async def process_instruction(self, text: str) -> ResponseEnvelope:
        """Classify and execute one instruction.

        Args:
            text: Natural-language instruction.

        Returns:
            A ResponseEnvelope. Unsupported instructions yield code 400;
            signing failures yield the signer's 5xx code.
        """
        self._log.debug(f"{InstructionStage.RECEIVED.value}: {text!r}")
        try:
            instruction = self._classifier.classify(text)
        except ClassificationError as e:
            self._log.info(f"{InstructionStage.UNSUPPORTED.value}: {text!r}")
            return ResponseEnvelope.from_error(
                e, message=f"Unsupported {self._variant.label} instruction"
            )

        action = instruction.action
        self._log.debug(f"{InstructionStage.CLASSIFIED.value}: {action.value}")

        context = HandlerContext(
            identity=self._identity,
            config=self._config,
            services=self._services,
            sign=self._sign,
            now=self._clock(),
        )
        handler = self._variant.handlers[action]
        self._log.debug(f"{InstructionStage.DISPATCHED.value}: {handler.__name__}")

        try:
            envelope = await handler(context, instruction)
        except SigningError as e:
            self._log.error(f"Signing failed for {action.value}: {e}", extra={"error": e.to_log_dict()})
            return ResponseEnvelope.from_error(e, message=f"Transaction failed for {action.value}")

        if envelope.success and action.mutates_ledger != (envelope.transaction_id is not None):
            raise RuntimeError(
                f"Handler {handler.__name__} broke the transaction id contract for {action.value}"
            )

        self._log.debug(f"{InstructionStage.HANDLED.value}: {action.value}")
        self._log.info(
            f"{action.value} handled"
            + (f" (tx={envelope.transaction_id})" if envelope.transaction_id else "")
        )
        self._log.debug(f"{InstructionStage.RESPONDED.value}: success={envelope.success}")
        return envelope

    async def execute_transaction(self, effect: LedgerEffect) -> str:
        """Sign and submit an effect through the agent's signer.

        Raises:
            SigningError: If the signer cannot produce a transaction id.
        """
        transaction_id = await self._signer.sign(effect)
        if not transaction_id:
            raise SigningError("Signer returned an empty transaction id", action=effect.action.value)
        return transaction_id

    async def _sign(self, action: Action, params: dict[str, Any]) -> str:
        effect = LedgerEffect(
            action=action,
            agent_id=self._identity.agent_id,
            endpoint=self._identity.connection.endpoint,
            commitment=self._identity.connection.commitment,
            params=params,
        )
        transaction_id = await self.execute_transaction(effect)
        self._log.debug(f"{InstructionStage.SIGNED.value}: {action.value} -> {transaction_id}")
        return transaction_id

    def __repr__(self) -> str:
        return f"Agent(kind={self.kind.value!r}, agent_id={self._identity.agent_id!r})"


__all__ = [
    "Agent",
    "AgentVariant",
    "Handler",
    "HandlerContext",
    "isoformat",
    "utc_now",
]

"""Variant dispatch table and the agent factory."""

from __future__ import annotations

import logging
from typing import Optional

from mcp_agents.agents.base import Agent, AgentVariant
from mcp_agents.agents.defi import DEFI_VARIANT
from mcp_agents.agents.governance import GOVERNANCE_VARIANT
from mcp_agents.agents.nft_market import NFT_MARKET_VARIANT
from mcp_agents.config.schemas.agent import AgentConfiguration, AgentIdentity, AgentKind
from mcp_agents.context.router import ContextRouter
from mcp_agents.core.exceptions import AgentConfigurationError
from mcp_agents.protocols.simulated import ProtocolServices
from mcp_agents.signing.factory import build_signer
from mcp_agents.signing.signer import TransactionSigner

logger = logging.getLogger(__name__)

VARIANTS: dict[AgentKind, AgentVariant] = {
    variant.kind: variant
    for variant in (GOVERNANCE_VARIANT, DEFI_VARIANT, NFT_MARKET_VARIANT)
}


def get_variant(kind: AgentKind) -> AgentVariant:
    """Look up the variant record for an agent kind.

    Raises:
        AgentConfigurationError: If no variant serves ``kind``.
    """
    variant = VARIANTS.get(kind)
    if variant is None:
        raise AgentConfigurationError(f"Unknown agent kind: {kind}", agent_kind=str(kind))
    return variant


def create_agent(
    identity: AgentIdentity,
    config: AgentConfiguration,
    signer: Optional[TransactionSigner] = None,
    services: Optional[ProtocolServices] = None,
    context_router: Optional[ContextRouter] = None,
) -> Agent:
    """Build an agent for ``config.kind``.

    Args:
        identity: Account id and ledger connection.
        config: One of GovernanceConfig, DeFiConfig or NFTMarketConfig.
        signer: Transaction signer; defaults to ``build_signer()``.
        services: Protocol services; defaults to the simulated services.
        context_router: Optional router; it must already have loaded.

    Returns:
        The constructed Agent.

    Raises:
        AgentConfigurationError: If the configuration enables no action.
        ConfigurationError: If ``context_router`` has not loaded.

    Example:
        >>> agent = create_agent(
        ...     AgentIdentity(agent_id="7xKX..."),
        ...     GovernanceConfig(dao_name="Mango", realm_address="DPiH3..."),
        ... )
        >>> agent.get_name()
        'Mango Governance Agent'
    """
    variant = get_variant(config.kind)
    return Agent(
        identity=identity,
        config=config,
        variant=variant,
        signer=signer if signer is not None else build_signer(),
        services=services,
        context_router=context_router,
    )


__all__ = ["VARIANTS", "get_variant", "create_agent"]

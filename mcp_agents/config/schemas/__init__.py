"""Schemas for agent identity and per-variant configuration."""

from mcp_agents.config.schemas.agent import (
    AgentConfiguration,
    AgentIdentity,
    AgentKind,
    DeFiConfig,
    GovernanceConfig,
    LedgerConnection,
    NFTMarketConfig,
)

__all__ = [
    "AgentKind",
    "LedgerConnection",
    "AgentIdentity",
    "GovernanceConfig",
    "DeFiConfig",
    "NFTMarketConfig",
    "AgentConfiguration",
]

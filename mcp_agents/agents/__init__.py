"""Agents for mcp-agents.

A single Agent class dispatches on ``config.kind`` to one of the
registered variants: governance, DeFi and NFT market.
"""

from mcp_agents.agents.base import Agent, AgentVariant, HandlerContext
from mcp_agents.agents.defi import DEFI_VARIANT
from mcp_agents.agents.governance import GOVERNANCE_VARIANT
from mcp_agents.agents.nft_market import NFT_MARKET_VARIANT
from mcp_agents.agents.registry import VARIANTS, create_agent, get_variant

__all__ = [
    "Agent",
    "AgentVariant",
    "HandlerContext",
    "GOVERNANCE_VARIANT",
    "DEFI_VARIANT",
    "NFT_MARKET_VARIANT",
    "VARIANTS",
    "get_variant",
    "create_agent",
]

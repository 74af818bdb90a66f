"""Configuration for mcp-agents.

Settings come from environment variables (``MCP_AGENTS_*``) and ``.env``
files; agent identity and configuration are plain frozen models.
"""

from mcp_agents.config.schemas import (
    AgentConfiguration,
    AgentIdentity,
    AgentKind,
    DeFiConfig,
    GovernanceConfig,
    LedgerConnection,
    NFTMarketConfig,
)
from mcp_agents.config.settings import (
    MCPAgentsSettings,
    clear_settings_cache,
    get_settings,
    reload_settings,
)

__all__ = [
    "MCPAgentsSettings",
    "get_settings",
    "reload_settings",
    "clear_settings_cache",
    "AgentKind",
    "LedgerConnection",
    "AgentIdentity",
    "GovernanceConfig",
    "DeFiConfig",
    "NFTMarketConfig",
    "AgentConfiguration",
]

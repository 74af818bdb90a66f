"""Context definition loading and lookup."""

from mcp_agents.context.router import ContextDefinition, ContextRouter

__all__ = ["ContextDefinition", "ContextRouter"]
